"""Blocking state helpers that raise instead of returning result codes."""

from contextlib import contextmanager
from typing import Generator

from gi.repository import Gst
from loguru import logger

from . import config
from .element import Element


def play(element: Element) -> bool:
    """Start playback (async)."""
    return element.play() != Gst.StateChangeReturn.FAILURE


def pause(element: Element) -> bool:
    """Pause (async)."""
    return element.pause() != Gst.StateChangeReturn.FAILURE


def stop(element: Element) -> bool:
    """Stop and set to NULL."""
    return element.set_null_state() != Gst.StateChangeReturn.FAILURE


def _reached(element: Element, state: Gst.State, timeout_ns: int) -> None:
    cur, _, ret = element.get_state(timeout_ns)
    if ret not in (Gst.StateChangeReturn.SUCCESS, Gst.StateChangeReturn.NO_PREROLL) or cur != state:
        name = Gst.Element.state_get_name(state)
        raise RuntimeError(f"{element.name} did not reach {name} (ret={ret.value_nick}, current={cur.value_nick})")


def play_sync(element: Element, timeout_ns: int = config.STATE_TIMEOUT_NS) -> None:
    """Start and wait until PLAYING or raise."""
    if not play(element):
        raise RuntimeError(f"Failed to start {element.name}")
    _reached(element, Gst.State.PLAYING, timeout_ns)


def pause_sync(element: Element, timeout_ns: int = config.STATE_TIMEOUT_NS) -> None:
    if not pause(element):
        raise RuntimeError(f"Failed to pause {element.name}")
    _reached(element, Gst.State.PAUSED, timeout_ns)


def stop_sync(element: Element, timeout_ns: int = config.STATE_TIMEOUT_NS) -> None:
    if not stop(element):
        raise RuntimeError(f"Failed to stop {element.name}")
    _reached(element, Gst.State.NULL, timeout_ns)


def wait_for_state(
    element: Element, state: Gst.State, timeout_ns: int = config.STATE_TIMEOUT_NS
) -> bool:
    """Wait until `state` or timeout."""
    cur, _, ret = element.get_state(timeout_ns)
    return ret == Gst.StateChangeReturn.SUCCESS and cur == state


def wait_for_eos(element: Element, timeout_seconds: float | None = None) -> bool:
    """Block until EOS, or raise on ERROR. Returns True on EOS, False on timeout."""
    bus = element.bus()
    if bus is None:
        raise RuntimeError(f"{element.name} has no bus (not a pipeline?)")
    timeout_ns = (
        int(timeout_seconds * Gst.SECOND)
        if timeout_seconds is not None
        else Gst.CLOCK_TIME_NONE
    )
    with bus.object:
        msg = bus.timed_pop_filtered(
            timeout_ns, Gst.MessageType.EOS | Gst.MessageType.ERROR
        )
    if not msg:
        return False
    if msg.type == Gst.MessageType.EOS:
        return True
    err, debug = msg.parse_error()
    logger.warning("Error from {}: {}", msg.src.get_name(), err.message)
    raise RuntimeError(f"Pipeline error: {err.message} (debug: {debug or 'n/a'})")


@contextmanager
def running(element: Element) -> Generator[Element, None, None]:
    """Start on enter; ensure it is stopped on exit."""
    try:
        play_sync(element)  # raises on failure
        yield element
    finally:
        stop_sync(element)
