"""Strict element builders with typed properties."""

from collections.abc import Mapping
from typing import Literal, TypedDict, Unpack

from gi.repository import Gst

from .element import Element


def create(
    type: str, /, props: Mapping[str, object] | None = None, name: str | None = None
) -> Element:
    """Generic element creator with property management."""
    element = Element.create(type, name)

    if element is None:
        raise RuntimeError(f"Failed to create {type} element")

    if not props:
        return element

    for prop, value in props.items():
        element.set_property(prop.replace("_", "-"), value)

    return element


Queue = TypedDict(
    "Queue",
    {
        "max_size_buffers": int,
        "max_size_time": int,
        "max_size_bytes": int,
        "leaky": Literal["no", "upstream", "downstream"],
    },
    total=False,
)


def queue(*, name: str | None = None, **props: Unpack[Queue]) -> Element:
    """Create queue with typed properties."""
    return create("queue", props, name)


Tee = TypedDict("Tee", {"allow_not_linked": bool}, total=False)


def tee(*, name: str | None = None, **props: Unpack[Tee]) -> Element:
    """Create tee element for splitting streams."""
    return create("tee", props, name=name)


CapsFilter = TypedDict("CapsFilter", {"caps": Gst.Caps}, total=False)


def capsfilter(*, name: str | None = None, **props: Unpack[CapsFilter]) -> Element:
    return create("capsfilter", props, name)


Identity = TypedDict("Identity", {"silent": bool, "sync": bool}, total=False)


def identity(*, name: str | None = None, **props: Unpack[Identity]) -> Element:
    return create("identity", props, name=name)


FakeSink = TypedDict("FakeSink", {"sync": bool, "async": bool}, total=False)


def fakesink(*, name: str | None = None, **props: Unpack[FakeSink]) -> Element:
    """Create fakesink; pass async=False for a sink that never prerolls."""
    return create("fakesink", props, name=name)


AudioTestSource = TypedDict(
    "AudioTestSource",
    {
        "num_buffers": int,
        "samplesperbuffer": int,
        "is_live": bool,
        "freq": float,
        "wave": str,
    },
    total=False,
)


def audiotestsrc(
    *, name: str | None = None, **props: Unpack[AudioTestSource]
) -> Element:
    """Create audiotestsrc with typed properties."""
    return create("audiotestsrc", props, name=name)


FileSink = TypedDict("FileSink", {"location": str, "sync": bool}, total=False)


def filesink(*, name: str | None = None, **props: Unpack[FileSink]) -> Element:
    return create("filesink", props, name=name)
