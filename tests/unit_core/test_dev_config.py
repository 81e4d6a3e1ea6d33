# Folder: tests/unit_core
# File:   test_dev_config.py

from rtl_api.utils.dev_config import dev_config
from rtl_core.kernel.b0f2_options import DEFAULT_OPTIONS, resolve_options


def test_defaults():
    opts = resolve_options({})
    assert opts["types"] == ["paragraph", "heading", "blockquote", "listItem"]
    assert opts["auto_detect"] is True
    assert opts["default_direction"] == "ltr"
    assert opts["rtl_threshold"] == 0.30
    assert opts["preserve_explicit"] is True


def test_bad_values_fall_back():
    opts = resolve_options({"options": {"default_direction": "up", "rtl_threshold": "lots", "auto_detect": "maybe"}})
    assert opts["default_direction"] == DEFAULT_OPTIONS["default_direction"]
    assert opts["rtl_threshold"] == DEFAULT_OPTIONS["rtl_threshold"]
    assert opts["auto_detect"] is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RTLSUPPORT_AUTO_DETECT", "false")
    monkeypatch.setenv("RTLSUPPORT_DEFAULT_DIRECTION", "rtl")
    monkeypatch.setenv("RTLSUPPORT_TYPES", "paragraph, heading")
    monkeypatch.setenv("RTLSUPPORT_RTL_THRESHOLD", "0.5")
    monkeypatch.setenv("RTLSUPPORT_PRESERVE_EXPLICIT", "0")
    opts = dev_config()
    assert opts["auto_detect"] is False
    assert opts["default_direction"] == "rtl"
    assert opts["types"] == ["paragraph", "heading"]
    assert opts["rtl_threshold"] == 0.5
    assert opts["preserve_explicit"] is False
