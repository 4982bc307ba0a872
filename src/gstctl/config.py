"""Default timeouts and seek flags, read once from the environment."""

import os

from gi.repository import Gst


def _env_ms(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of milliseconds, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


# Upper bound for the *_sync helpers waiting on an ASYNC transition.
STATE_TIMEOUT_NS = _env_ms("GSTCTL_STATE_TIMEOUT_MS", 5000) * Gst.MSECOND

# Sleep between polls in Element.get_state_async.
POLL_INTERVAL_S = _env_ms("GSTCTL_POLL_INTERVAL_MS", 10) / 1000

POSITION_SEEK_FLAGS = Gst.SeekFlags.FLUSH
SPEED_SEEK_FLAGS = Gst.SeekFlags.SKIP | Gst.SeekFlags.ACCURATE | Gst.SeekFlags.FLUSH
