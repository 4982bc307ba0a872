"""Bus wrapper. Only a top-level pipeline provides a usable bus."""

from gi.repository import Gst

from .object import Object


class Bus:
    def __init__(self, obj: Object):
        self.object = obj

    @classmethod
    def from_native(cls, native: Gst.Bus | None) -> "Bus | None":
        obj = Object.acquire(native)
        return cls(obj) if obj is not None else None

    @property
    def native(self) -> Gst.Bus:
        return self.object.native

    def timed_pop_filtered(
        self, timeout_ns: int, types: Gst.MessageType
    ) -> Gst.Message | None:
        """Block up to `timeout_ns` for a message matching `types`."""
        return self.native.timed_pop_filtered(timeout_ns, types)

    def pop(self) -> Gst.Message | None:
        return self.native.pop()

    def have_pending(self) -> bool:
        return self.native.have_pending()

    def post(self, message: Gst.Message) -> bool:
        return self.native.post(message)

    def release(self) -> None:
        self.object.release()
