"""Generic wrapper giving a native object a name, clones and null-safe construction."""

from collections.abc import Callable

from .handle import Handle
from .ownership import Ref


class Object:
    """A native GObject held through a `Ref`.

    Instances are only built by the classmethods below, each of which returns
    None instead of wrapping a null pointer.
    """

    def __init__(self, ref: Ref):
        self._ref = ref

    @classmethod
    def _wrap(cls, native: object, make: Callable[[Handle], Ref]) -> "Object | None":
        handle = Handle.from_native(native)
        if handle is None:
            return None
        return cls(make(handle))

    @classmethod
    def acquire(cls, native: object) -> "Object | None":
        return cls._wrap(native, Ref.acquire)

    @classmethod
    def sink(cls, native: object) -> "Object | None":
        return cls._wrap(native, Ref.sink)

    @classmethod
    def adopt(cls, native: object) -> "Object | None":
        return cls._wrap(native, Ref.adopt)

    @classmethod
    def borrow(cls, native: object) -> "Object | None":
        return cls._wrap(native, Ref.borrow)

    @property
    def ref(self) -> Ref:
        return self._ref

    @property
    def handle(self) -> Handle:
        return self._ref.handle

    @property
    def native(self):
        return self._ref.native

    @property
    def refcount(self) -> int:
        return self.native.__grefcount__

    @property
    def name(self) -> str | None:
        """Object name; None for plain GObjects, which have no name."""
        get_name = getattr(self.native, "get_name", None)
        return get_name() if get_name is not None else None

    def set_name(self, name: str) -> bool:
        """Rename the object. Fails once it has a parent."""
        return self.native.set_name(name)

    def reference(self) -> "Object":
        return type(self)(self._ref.clone())

    def transfer(self) -> Handle:
        return self._ref.transfer()

    def release(self) -> None:
        self._ref.release()

    def get_property(self, key: str):
        return self.native.get_property(key)

    def set_property(self, key: str, value) -> None:
        """Set a property; wrapped values are passed as their native handle."""
        self.native.set_property(key, unwrap(value))

    def get_object_property(self, key: str) -> "Object | None":
        return Object.sink(self.native.get_property(key))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        return self.handle == other.handle

    def __hash__(self) -> int:
        return hash(self.handle)

    def __enter__(self) -> "Object":
        return self

    def __exit__(self, *exc) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._ref!r}>"


def unwrap(value):
    """Native object behind an `Object` or a wrapper composing one."""
    if isinstance(value, Object):
        return value.native
    inner = getattr(value, "object", None)
    if isinstance(inner, Object):
        return inner.native
    return value
