"""Shared fixtures for the gstctl tests."""

from pathlib import Path

import pytest
from gi.repository import Gst

from . import control, factories
from .element import Element
from .pipeline import chain

SAMPLE_RATE = 44100


def require(*factory_names: str) -> None:
    """Skip the calling test when a plugin it needs is not installed."""
    missing = [n for n in factory_names if Gst.ElementFactory.find(n) is None]
    if missing:
        pytest.skip(f"GStreamer elements not available: {', '.join(missing)}")


def write_wav(path: Path, seconds: int = 1) -> Path:
    """Render `seconds` of mono sine tone to a WAV file."""
    require("audiotestsrc", "wavenc")
    caps = Gst.Caps.from_string(
        f"audio/x-raw,format=S16LE,rate={SAMPLE_RATE},channels=1"
    )
    pipe = chain(
        factories.audiotestsrc(num_buffers=10 * seconds, samplesperbuffer=SAMPLE_RATE // 10),
        factories.capsfilter(caps=caps),
        factories.create("wavenc"),
        factories.filesink(location=str(path)),
    )
    try:
        control.play_sync(pipe)
        assert control.wait_for_eos(pipe, timeout_seconds=10)
    finally:
        control.stop_sync(pipe)
    return path


def wav_player(path: Path) -> Element:
    """Pipeline playing `path` into a clock-synced fakesink."""
    require("filesrc", "wavparse", "fakesink")
    native = Gst.parse_launch(f'filesrc location="{path}" ! wavparse ! fakesink sync=true')
    element = Element.wrap_existing(native)
    assert element is not None
    return element
