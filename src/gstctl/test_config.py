import importlib

import pytest
from gi.repository import Gst

from . import config


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.delenv("GSTCTL_STATE_TIMEOUT_MS", raising=False)
    monkeypatch.delenv("GSTCTL_POLL_INTERVAL_MS", raising=False)
    importlib.reload(config)


def test_defaults(reload_config):
    reload_config()
    assert config.STATE_TIMEOUT_NS == 5 * Gst.SECOND
    assert config.POLL_INTERVAL_S == 0.01
    assert config.SPEED_SEEK_FLAGS & Gst.SeekFlags.FLUSH


def test_environment_overrides(monkeypatch, reload_config):
    monkeypatch.setenv("GSTCTL_STATE_TIMEOUT_MS", "250")
    monkeypatch.setenv("GSTCTL_POLL_INTERVAL_MS", "5")
    reload_config()
    assert config.STATE_TIMEOUT_NS == 250 * Gst.MSECOND
    assert config.POLL_INTERVAL_S == 0.005


@pytest.mark.parametrize("raw", ["soon", "-1"])
def test_invalid_values_rejected(monkeypatch, reload_config, raw):
    monkeypatch.setenv("GSTCTL_STATE_TIMEOUT_MS", raw)
    with pytest.raises(ValueError, match="GSTCTL_STATE_TIMEOUT_MS"):
        reload_config()


def test_unparsable_value_hides_int_error(monkeypatch, reload_config):
    monkeypatch.setenv("GSTCTL_STATE_TIMEOUT_MS", "soon")
    with pytest.raises(ValueError, match="milliseconds") as excinfo:
        reload_config()
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__
