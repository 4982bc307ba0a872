"""Ownership-safe control of GStreamer elements."""

import gi

gi.require_version("Gst", "1.0")
from gi.repository import Gst

if not Gst.is_initialized():
    Gst.init(None)

from .bus import Bus
from .element import Element, link_chain
from .handle import Handle
from .object import Object
from .ownership import Ownership, OwnershipError, Ref
from .pad import Pad
from .units import fraction, ns_to_s, s_to_ns

__all__ = [
    "Bus",
    "Element",
    "Handle",
    "Object",
    "Ownership",
    "OwnershipError",
    "Pad",
    "Ref",
    "fraction",
    "link_chain",
    "ns_to_s",
    "s_to_ns",
]
