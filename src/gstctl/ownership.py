"""Reference ownership over native handles.

A `Ref` is one of:

- OWNING: holds exactly one native reference unit and gives it back exactly
  once, either on `release()` or when the wrapper is garbage collected.
- BORROWED: a temporary view that never touches the refcount. It must not
  outlive whoever lent it.
- TRANSFERRED: the unit was handed to native code with `transfer()`; the
  wrapper is inert and never releases.

RELEASED is where an OWNING wrapper ends up after giving its unit back.
"""

import weakref
from enum import Enum

from . import native as native_api
from .handle import Handle


class Ownership(Enum):
    OWNING = "owning"
    BORROWED = "borrowed"
    TRANSFERRED = "transferred"
    RELEASED = "released"


class OwnershipError(RuntimeError):
    """A wrapper was used after its reference was transferred or released."""


class Ref:
    """Ownership discipline for a single handle. Use the classmethods."""

    def __init__(self, handle: Handle, ownership: Ownership):
        self._handle: Handle | None = handle
        self._ownership = ownership
        self._finalizer: weakref.finalize | None = None
        if ownership is Ownership.OWNING:
            self._finalizer = weakref.finalize(self, native_api.unref, handle.native)
            self._finalizer.atexit = False

    @classmethod
    def acquire(cls, handle: Handle) -> "Ref":
        """Take a new reference unit on `handle`."""
        native_api.ref(handle.native)
        return cls(handle, Ownership.OWNING)

    @classmethod
    def sink(cls, handle: Handle) -> "Ref":
        """Normalize a possibly floating reference into an owned one."""
        native_api.ref_sink(handle.native)
        return cls(handle, Ownership.OWNING)

    @classmethod
    def adopt(cls, handle: Handle) -> "Ref":
        """Take over a unit the caller already holds (transfer-full returns)."""
        return cls(handle, Ownership.OWNING)

    @classmethod
    def borrow(cls, handle: Handle) -> "Ref":
        return cls(handle, Ownership.BORROWED)

    @property
    def ownership(self) -> Ownership:
        return self._ownership

    @property
    def alive(self) -> bool:
        return self._handle is not None

    @property
    def handle(self) -> Handle:
        if self._handle is None:
            raise OwnershipError(
                f"{self._ownership.value} reference is no longer usable"
            )
        return self._handle

    @property
    def native(self) -> object:
        return self.handle.native

    def clone(self) -> "Ref":
        """A second owning wrapper over the same handle."""
        return Ref.acquire(self.handle)

    def transfer(self) -> Handle:
        """Hand the owned unit to native code and deactivate this wrapper."""
        if self._ownership is not Ownership.OWNING:
            raise OwnershipError(
                f"cannot transfer a {self._ownership.value} reference"
            )
        handle = self.handle
        self._finalizer.detach()
        self._handle = None
        self._ownership = Ownership.TRANSFERRED
        return handle

    def release(self) -> None:
        """Give back the owned unit. Safe to call more than once."""
        if self._handle is None:
            return
        self._handle = None
        if self._ownership is Ownership.OWNING:
            self._finalizer()
            self._ownership = Ownership.RELEASED

    def __enter__(self) -> "Ref":
        return self

    def __exit__(self, *exc) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<Ref {self._ownership.value} {self._handle!r}>"
