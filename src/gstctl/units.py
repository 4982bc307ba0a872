"""Time unit conversions for query results."""

NS_PER_SECOND = 1_000_000_000


def ns_to_s(ns: int) -> float:
    """Nanoseconds to seconds."""
    return ns / NS_PER_SECOND


def s_to_ns(s: float) -> int:
    """Seconds to nanoseconds, truncated toward zero."""
    return int(s * NS_PER_SECOND)


def fraction(position: int | None, duration: int | None) -> float | None:
    """Position as a fraction of duration.

    None when either value is unknown, or when the duration is zero.
    """
    if position is None or duration is None or duration == 0:
        return None
    return position / duration
