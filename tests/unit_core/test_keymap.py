# Folder: tests/unit_core
# File:   test_keymap.py

from rtl_core.block_7_keymap.b7f1_keymap import b7f1_keymap, normalize_chord


def test_normalize_chord():
    assert normalize_chord("ctrl+shift+R") == "Ctrl-Shift-r"
    assert normalize_chord("Shift-Ctrl-r") == "Ctrl-Shift-r"
    assert normalize_chord("Cmd-Shift-r") == "Cmd-Shift-r"
    assert normalize_chord("meta+shift+r") == "Cmd-Shift-r"
    assert normalize_chord("hyper-r") is None
    assert normalize_chord("") is None


def test_toggle_chords_are_bound():
    for chord in ("Ctrl-Shift-r", "Cmd-Shift-r", "Mod-Shift-r", "ctrl+shift+r"):
        out = b7f1_keymap({"key": {"chord": chord}})
        assert out["status"] == "OK"
        assert out["command"]["step"] == "b3f2_toggle_direction"


def test_unbound_chord_skips():
    out = b7f1_keymap({"key": {"chord": "Ctrl-r"}})
    assert out["status"] == "SKIP"
    assert out["diag"]["reason"] == "unbound"
