"""Tests for handles and the owning/borrowed/transferred reference discipline."""

import gc
from unittest.mock import patch

import pytest
from gi.repository import GObject, Gst

from . import native as native_api
from .handle import Handle
from .object import Object
from .ownership import Ownership, OwnershipError, Ref


@pytest.fixture
def native():
    return Gst.ElementFactory.make("fakesink", None)


class TestHandle:
    def test_null_yields_none(self):
        assert Handle.from_native(None) is None

    def test_non_gobject_yields_none(self):
        assert Handle.from_native(object()) is None

    def test_equality_is_pointer_identity(self, native):
        a = Handle.from_native(native)
        b = Handle.from_native(native)
        other = Handle.from_native(Gst.ElementFactory.make("fakesink", None))
        assert a == b
        assert hash(a) == hash(b)
        assert a != other
        assert a.address == native_api.address(native)


class TestRef:
    def test_acquire_takes_one_unit_and_release_gives_it_back(self, native):
        base = native.__grefcount__
        ref = Ref.acquire(Handle.from_native(native))
        assert ref.ownership is Ownership.OWNING
        assert native.__grefcount__ == base + 1

        ref.release()
        assert native.__grefcount__ == base
        assert ref.ownership is Ownership.RELEASED

        ref.release()
        assert native.__grefcount__ == base

    def test_garbage_collection_releases_once(self, native):
        base = native.__grefcount__
        ref = Ref.acquire(Handle.from_native(native))
        assert native.__grefcount__ == base + 1
        del ref
        gc.collect()
        assert native.__grefcount__ == base

    def test_sink_on_owned_object_adds_a_unit(self, native):
        assert not native_api.is_floating(native)
        base = native.__grefcount__
        with Ref.sink(Handle.from_native(native)):
            assert native.__grefcount__ == base + 1
        assert native.__grefcount__ == base

    def test_borrow_never_touches_the_refcount(self, native):
        base = native.__grefcount__
        ref = Ref.borrow(Handle.from_native(native))
        assert ref.native is native
        assert native.__grefcount__ == base
        ref.release()
        assert native.__grefcount__ == base
        with pytest.raises(OwnershipError):
            ref.handle

    def test_adopt_releases_the_existing_unit(self, native):
        with patch.object(native_api, "unref") as unref:
            ref = Ref.adopt(Handle.from_native(native))
            ref.release()
            ref.release()
            del ref
            gc.collect()
        unref.assert_called_once_with(native)

    def test_transfer_deactivates_release(self, native):
        base = native.__grefcount__
        ref = Ref.acquire(Handle.from_native(native))
        handle = ref.transfer()

        assert handle.native is native
        assert ref.ownership is Ownership.TRANSFERRED
        with pytest.raises(OwnershipError):
            ref.native

        ref.release()
        del ref
        gc.collect()
        assert native.__grefcount__ == base + 1

        # the receiving side owns the unit now
        native_api.unref(handle.native)
        assert native.__grefcount__ == base

    def test_only_owning_references_transfer(self, native):
        ref = Ref.borrow(Handle.from_native(native))
        with pytest.raises(OwnershipError):
            ref.transfer()

    def test_clone_is_independent(self, native):
        base = native.__grefcount__
        first = Ref.acquire(Handle.from_native(native))
        second = first.clone()
        assert native.__grefcount__ == base + 2
        assert second.handle == first.handle

        first.release()
        assert second.alive
        assert second.native is native
        second.release()
        assert native.__grefcount__ == base


class TestObject:
    def test_null_constructors_yield_none(self):
        assert Object.acquire(None) is None
        assert Object.sink(None) is None
        assert Object.adopt(None) is None
        assert Object.borrow(None) is None

    def test_name_and_rename(self, native):
        obj = Object.acquire(native)
        assert obj.set_name("renamed")
        assert obj.name == "renamed"

    def test_reference_shares_the_handle(self, native):
        obj = Object.acquire(native)
        clone = obj.reference()
        assert clone == obj
        assert clone.refcount == obj.refcount
        base = obj.refcount
        clone.release()
        assert obj.refcount == base - 1

    def test_context_manager_releases(self, native):
        base = native.__grefcount__
        with Object.acquire(native) as obj:
            assert obj.refcount == base + 1
        assert native.__grefcount__ == base

    def test_property_passthrough(self, native):
        obj = Object.acquire(native)
        obj.set_property("sync", False)
        assert obj.get_property("sync") is False

    def test_plain_gobject_has_no_name(self):
        obj = Object.acquire(GObject.Object())
        assert obj.name is None
