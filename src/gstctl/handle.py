"""Opaque, non-null handle to a native object."""

from . import native as native_api


class Handle:
    """A non-null native object pointer.

    Two handles are equal when they point at the same native object, even if
    PyGObject hands out different Python wrappers for it.
    """

    __slots__ = ("_native", "_address")

    def __init__(self, native: object, address: int):
        self._native = native
        self._address = address

    @classmethod
    def from_native(cls, native: object) -> "Handle | None":
        """Wrap `native`, or return None when it is None or null."""
        address = native_api.address(native)
        if not address:
            return None
        return cls(native, address)

    @property
    def native(self) -> object:
        return self._native

    @property
    def address(self) -> int:
        return self._address

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Handle):
            return NotImplemented
        return self._address == other._address

    def __hash__(self) -> int:
        return hash(self._address)

    def __repr__(self) -> str:
        return f"<Handle {type(self._native).__name__} at 0x{self._address:x}>"
