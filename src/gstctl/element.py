"""Element: the pipeline node under control.

An `Element` composes an owning `Object` restricted to `Gst.Element` handles
and adds linking, state control, queries and seeking. Every call goes
straight to GStreamer; failures come back as None, False or a
`Gst.StateChangeReturn`, never as exceptions.
"""

import asyncio
from collections.abc import Sequence

from gi.repository import GObject, Gst
from loguru import logger

from . import config, units
from .bus import Bus
from .handle import Handle
from .object import Object
from .pad import Pad


class Element:
    """Owning wrapper over a `Gst.Element`."""

    def __init__(self, obj: Object):
        self.object = obj

    # Construction

    @classmethod
    def create(cls, factory_name: str, name: str | None = None) -> "Element | None":
        """Use factory `factory_name` to create an element called `name`.

        An empty or missing name lets GStreamer pick a unique one. The
        floating reference returned by the factory is sunk here, once.
        """
        native = Gst.ElementFactory.make(factory_name, name or None)
        if native is None:
            logger.error("Error creating {} element", factory_name)
            return None
        return cls(Object.sink(native))

    factory_make = create

    @classmethod
    def wrap_existing(
        cls, native: Gst.Element | None, transfer_full: bool = False
    ) -> "Element | None":
        """Wrap an element obtained from a collaborator.

        By default a new unit is taken, sharing ownership with whoever
        handed the element over. With `transfer_full` the caller's unit is
        adopted instead.
        """
        if native is not None and not isinstance(native, Gst.Element):
            logger.debug("Not an element: {!r}", native)
            return None
        obj = Object.adopt(native) if transfer_full else Object.acquire(native)
        return cls(obj) if obj is not None else None

    @classmethod
    def from_value(cls, value) -> "Element | None":
        """Element held by a `GObject.Value` or raw property value."""
        if isinstance(value, GObject.Value):
            if not GObject.type_is_a(value.g_type, Gst.Element.__gtype__):
                return None
            value = value.get_value()
        if not isinstance(value, Gst.Element):
            return None
        obj = Object.sink(value)
        return cls(obj) if obj is not None else None

    def reference(self) -> "Element":
        """A second owning wrapper over the same element."""
        return Element(self.object.reference())

    clone_reference = reference

    def release(self) -> None:
        self.object.release()

    def transfer(self) -> Handle:
        return self.object.transfer()

    @property
    def native(self) -> Gst.Element:
        return self.object.native

    @property
    def handle(self) -> Handle:
        return self.object.handle

    @property
    def refcount(self) -> int:
        return self.object.refcount

    @property
    def name(self) -> str | None:
        return self.object.name

    def set_name(self, name: str) -> bool:
        return self.object.set_name(name)

    # Linking

    def link(self, dst: "Element") -> bool:
        """Link this element to `dst`.

        Only the source -> destination direction is tried. Existing unlinked
        pads are preferred; request pads are created when needed and must be
        released by the caller with `release_request_pad` after unlinking.
        If several links are possible, only one is made.

        Both elements must already be in the same bin or pipeline.
        """
        if self.native.link(dst.native):
            return True
        logger.debug("Failed to link {} -> {}", self.name, dst.name)
        return False

    def unlink(self, dst: "Element") -> None:
        """Unlink every source pad of this element from the sink pads of `dst`.

        Request pads created by `link` stay allocated.
        """
        self.native.unlink(dst.native)

    @staticmethod
    def link_many(*elements: "Element") -> bool:
        return link_chain(elements)

    def static_pad(self, name: str) -> Pad | None:
        """Already existing pad called `name`."""
        return Pad.from_native(self.native.get_static_pad(name))

    def request_pad(self, template_name: str) -> Pad | None:
        return Pad.from_native(self.native.request_pad_simple(template_name))

    def release_request_pad(self, pad: Pad) -> None:
        self.native.release_request_pad(pad.native)

    def bus(self) -> Bus | None:
        """The element's bus. Only a pipeline provides one."""
        return Bus.from_native(self.native.get_bus())

    # State

    def set_state(self, state: Gst.State) -> Gst.StateChangeReturn:
        """Request a transition to `state`, going through intermediate states.

        ASYNC means the rest of the change happens in a streaming thread;
        use `get_state` to wait for it. Changes to READY or NULL never
        return ASYNC.
        """
        ret = self.native.set_state(state)
        if ret == Gst.StateChangeReturn.FAILURE:
            logger.warning(
                "{} failed to change state to {}",
                self.name,
                Gst.Element.state_get_name(state),
            )
        return ret

    def get_state(
        self, timeout_ns: int = Gst.CLOCK_TIME_NONE
    ) -> tuple[Gst.State, Gst.State, Gst.StateChangeReturn]:
        """Current state, pending state and result of the last change.

        Blocks up to `timeout_ns` while an ASYNC change is in flight;
        `Gst.CLOCK_TIME_NONE` waits forever and 0 polls once. Returns
        immediately when nothing is in flight. NO_PREROLL reports a change
        that succeeded on an element that cannot produce data before PLAYING.
        """
        ret, current, pending = self.native.get_state(timeout_ns)
        return current, pending, ret

    async def get_state_async(
        self,
        timeout_ns: int = Gst.CLOCK_TIME_NONE,
        poll_interval: float = config.POLL_INTERVAL_S,
    ) -> tuple[Gst.State, Gst.State, Gst.StateChangeReturn]:
        """`get_state` for event loops: polls instead of blocking the thread."""
        loop = asyncio.get_running_loop()
        deadline = None
        if timeout_ns != Gst.CLOCK_TIME_NONE:
            deadline = loop.time() + units.ns_to_s(timeout_ns)
        while True:
            current, pending, ret = self.get_state(0)
            if ret != Gst.StateChangeReturn.ASYNC:
                return current, pending, ret
            if deadline is None:
                await asyncio.sleep(poll_interval)
                continue
            remaining = deadline - loop.time()
            if remaining <= 0:
                return current, pending, ret
            await asyncio.sleep(min(poll_interval, remaining))

    def set_null_state(self) -> Gst.StateChangeReturn:
        return self.set_state(Gst.State.NULL)

    def set_ready_state(self) -> Gst.StateChangeReturn:
        return self.set_state(Gst.State.READY)

    def pause(self) -> Gst.StateChangeReturn:
        return self.set_state(Gst.State.PAUSED)

    def play(self) -> Gst.StateChangeReturn:
        return self.set_state(Gst.State.PLAYING)

    def _is_in(self, state: Gst.State, timeout_ns: int) -> bool:
        current, _pending, ret = self.get_state(timeout_ns)
        return current == state and ret == Gst.StateChangeReturn.SUCCESS

    def is_null_state(self, timeout_ns: int = Gst.CLOCK_TIME_NONE) -> bool:
        return self._is_in(Gst.State.NULL, timeout_ns)

    def is_ready_state(self, timeout_ns: int = Gst.CLOCK_TIME_NONE) -> bool:
        return self._is_in(Gst.State.READY, timeout_ns)

    def is_paused(self, timeout_ns: int = Gst.CLOCK_TIME_NONE) -> bool:
        return self._is_in(Gst.State.PAUSED, timeout_ns)

    def is_playing(self, timeout_ns: int = Gst.CLOCK_TIME_NONE) -> bool:
        return self._is_in(Gst.State.PLAYING, timeout_ns)

    # Events and seeking

    def send_event(self, event: Gst.Event) -> bool:
        """Send `event` to the element, which takes ownership of it."""
        return self.native.send_event(event)

    def seek_simple(self, format: Gst.Format, flags: Gst.SeekFlags, pos: int) -> bool:
        """Seek to `pos` relative to the start of the stream.

        In a prerolled PAUSED or PLAYING pipeline this is False only when the
        media is not seekable.
        """
        if self.native.seek_simple(format, flags, pos):
            return True
        logger.debug("{} rejected seek to {}", self.name, pos)
        return False

    def seek(
        self,
        rate: float,
        format: Gst.Format,
        flags: Gst.SeekFlags,
        start_type: Gst.SeekType,
        start: int,
        stop_type: Gst.SeekType,
        stop: int,
    ) -> bool:
        """Segment seek; a negative `rate` plays backwards."""
        if self.native.seek(rate, format, flags, start_type, start, stop_type, stop):
            return True
        logger.debug(
            "{} rejected seek rate={} start={} stop={}", self.name, rate, start, stop
        )
        return False

    # Queries

    def query_duration(self, format: Gst.Format) -> int | None:
        """Total stream duration, known once the pipeline is prerolled."""
        ok, duration = self.native.query_duration(format)
        if not ok or duration < 0:
            return None
        return duration

    def query_position(self, format: Gst.Format) -> int | None:
        """Stream position, between 0 and the duration when that is known."""
        ok, position = self.native.query_position(format)
        if not ok or position < 0:
            return None
        return position

    def duration_ns(self) -> int | None:
        return self.query_duration(Gst.Format.TIME)

    def duration_s(self) -> float | None:
        duration = self.duration_ns()
        return units.ns_to_s(duration) if duration is not None else None

    def position_ns(self) -> int | None:
        return self.query_position(Gst.Format.TIME)

    def position_s(self) -> float | None:
        position = self.position_ns()
        return units.ns_to_s(position) if position is not None else None

    def position_pct(self) -> float | None:
        """Position as a fraction 0..1 of the duration."""
        return units.fraction(self.position_ns(), self.duration_ns())

    def set_position_ns(self, ns: int) -> bool:
        return self.seek_simple(Gst.Format.TIME, config.POSITION_SEEK_FLAGS, ns)

    def set_position_s(self, s: float) -> bool:
        return self.set_position_ns(units.s_to_ns(s))

    def set_position_pct(self, pct: float) -> bool:
        duration = self.duration_ns()
        if duration is None:
            return False
        return self.set_position_ns(int(duration * pct))

    def set_speed(self, rate: float) -> bool:
        """Change playback rate from the current position.

        0 pauses. A positive rate plays from here to the end; a negative
        rate plays from here back to the start of the stream.
        """
        if rate == 0.0:
            return self.pause() != Gst.StateChangeReturn.FAILURE

        position = self.position_ns()
        if position is None:
            return False

        if rate > 0.0:
            start, stop = position, -1
        else:
            start, stop = 0, position
        return self.seek(
            rate,
            Gst.Format.TIME,
            config.SPEED_SEEK_FLAGS,
            Gst.SeekType.SET,
            start,
            Gst.SeekType.SET,
            stop,
        )

    # Properties

    def get_property(self, key: str):
        return self.object.get_property(key)

    def set_property(self, key: str, value) -> None:
        self.object.set_property(key, value)

    def get_element_property(self, key: str) -> "Element | None":
        return Element.from_value(self.native.get_property(key))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.handle == other.handle

    def __hash__(self) -> int:
        return hash(self.handle)

    def __enter__(self) -> "Element":
        return self

    def __exit__(self, *exc) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<Element {self.object.ref!r}>"


def link_chain(elements: Sequence[Element]) -> bool:
    """Link each element to the next one, in order.

    Stops at the first pair that fails. Pairs linked before it stay linked;
    nothing is rolled back.
    """
    for src, dst in zip(elements, elements[1:]):
        if not src.link(dst):
            logger.debug("Link chain stopped at {} -> {}", src.name, dst.name)
            return False
    return True
