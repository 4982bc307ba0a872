"""Pad wrapper: a named input or output connection point of an element."""

from gi.repository import Gst

from .handle import Handle
from .object import Object


class Pad:
    """Owning wrapper over a `Gst.Pad`."""

    def __init__(self, obj: Object):
        self.object = obj

    @classmethod
    def from_native(cls, native: Gst.Pad | None) -> "Pad | None":
        obj = Object.acquire(native)
        return cls(obj) if obj is not None else None

    @property
    def native(self) -> Gst.Pad:
        return self.object.native

    @property
    def handle(self) -> Handle:
        return self.object.handle

    @property
    def name(self) -> str | None:
        return self.object.name

    @property
    def direction(self) -> Gst.PadDirection:
        return self.native.get_direction()

    def peer(self) -> "Pad | None":
        return Pad.from_native(self.native.get_peer())

    def is_linked(self) -> bool:
        return self.native.is_linked()

    def link(self, sink: "Pad") -> Gst.PadLinkReturn:
        """Link this source pad to `sink`; failures come back as a result code."""
        return self.native.link_full(sink.native, Gst.PadLinkCheck.DEFAULT)

    def unlink(self, sink: "Pad") -> bool:
        return self.native.unlink(sink.native)

    def release(self) -> None:
        self.object.release()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pad):
            return NotImplemented
        return self.handle == other.handle

    def __hash__(self) -> int:
        return hash(self.handle)

    def __repr__(self) -> str:
        return f"<Pad {self.name!r}>"
