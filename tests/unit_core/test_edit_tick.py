# Folder: tests/unit_core
# File:   test_edit_tick.py

from rtl_runtime.adapters.registry import build_registry
from rtl_runtime.loop import edit_tick
from rtl_runtime.loop.edit_tick import read_view, run_command, run_edit_tick, run_key

ARABIC = "مرحبا بالعالم"


def _p(text, **attrs):
    return {"type": "paragraph", "attrs": attrs, "content": [{"type": "text", "text": text}] if text else []}


def _state(*blocks, dir=None, options=None):
    return {
        "editor": {"doc": {"type": "doc", "attrs": {"dir": dir}, "content": list(blocks)},
                   "selection": {"from": 1, "to": 1}},
        "options": options or {},
    }


def _first(state):
    return state["editor"]["doc"]["content"][0]


def _type(state, pos, text):
    return run_edit_tick(state, {"origin": "typing", "steps": [{"op": "set_block_text", "pos": pos, "text": text}]})


def test_arabic_paragraph_gets_rtl_then_loses_it_on_latin():
    state = _state(_p(""))
    res = _type(state, 0, ARABIC)
    assert res["ok"] is True
    assert _first(res["state"])["attrs"]["dir"] == "rtl"
    assert res["reconcile"] == [{"set_rtl": [0], "cleared": [], "kept_explicit": []}]

    res = _type(res["state"], 0, "plain latin now")
    assert _first(res["state"])["attrs"]["dir"] is None


def test_second_tick_on_unchanged_tree_changes_nothing():
    res = _type(_state(_p("")), 0, ARABIC)
    again = run_edit_tick(res["state"], {"origin": "noop", "steps": []})
    assert again["ok"] is True
    assert again["reconcile"] == []
    assert again["state"]["editor"]["doc"] == res["state"]["editor"]["doc"]


def test_invalid_transaction_leaves_state_alone():
    state = _state(_p("hello"))
    res = run_edit_tick(state, {"steps": [{"op": "set_block_text", "pos": 3, "text": "x"}]})
    assert res["ok"] is False
    assert res["reason"] == "invalid_step"
    assert res["state"] is state


def test_toggle_twice_from_unset_is_default_opposite_then_default():
    state = _state(_p("hello"))
    first = run_command(state, "toggle_direction", {"pos": 2})
    assert first["ok"] is True
    assert _first(first["state"])["attrs"]["dir"] == "rtl"
    second = run_command(first["state"], "toggle_direction", {"pos": 2})
    assert _first(second["state"])["attrs"]["dir"] == "ltr"


def test_toggle_is_an_involution_on_explicit_values():
    for start in ("ltr", "rtl"):
        state = _state(_p("hello", dir=start, dirSource="explicit"))
        once = run_command(state, "toggle_direction", {"pos": 2})
        twice = run_command(once["state"], "toggle_direction", {"pos": 2})
        assert _first(twice["state"])["attrs"]["dir"] == start


def test_toggle_from_unset_uses_document_direction():
    state = _state(_p("hello"), dir="rtl")
    first = run_command(state, "toggle_direction", {"pos": 2})
    assert _first(first["state"])["attrs"]["dir"] == "ltr"
    second = run_command(first["state"], "toggle_direction", {"pos": 2})
    assert _first(second["state"])["attrs"]["dir"] == "rtl"


def test_explicit_ltr_survives_arabic_edit():
    state = _state(_p("hello"))
    res = run_command(state, "set_direction", {"direction": "ltr", "from": 1, "to": 1})
    res = _type(res["state"], 0, ARABIC)
    assert _first(res["state"])["attrs"] == {"dir": "ltr", "dirSource": "explicit"}


def test_explicit_rtl_survives_latin_edit():
    state = _state(_p(ARABIC))
    res = run_command(state, "set_direction", {"direction": "rtl", "from": 1, "to": 1})
    res = _type(res["state"], 0, "latin only")
    assert _first(res["state"])["attrs"]["dir"] == "rtl"


def test_without_preserve_explicit_explicit_rtl_is_cleared():
    state = _state(_p("latin"), options={"preserve_explicit": False})
    res = run_command(state, "set_direction", {"direction": "rtl", "from": 1, "to": 1})
    assert res["ok"] is True
    assert _first(res["state"])["attrs"]["dir"] is None
    assert res["reconcile"][0]["cleared"] == [0]


def test_not_applicable_toggle_keeps_state():
    state = _state({"type": "codeBlock", "attrs": {}, "content": [{"type": "text", "text": "x = 1"}]})
    res = run_command(state, "toggle_direction", {"pos": 2})
    assert res["ok"] is False
    assert res["result"] == "not_applicable"
    assert res["state"] is state


def test_unknown_command():
    res = run_command(_state(_p("x")), "reverse_everything")
    assert res["ok"] is False and res["result"] == "unknown_command"


def test_set_direction_without_match_reports_no_match():
    state = _state({"type": "codeBlock", "attrs": {}, "content": [{"type": "text", "text": "x = 1"}]})
    res = run_command(state, "set_direction", {"direction": "rtl", "from": 0, "to": 7})
    assert res["ok"] is True
    assert res["result"] == "no_match"


def test_document_direction_is_fallback_for_new_ambiguous_block():
    state = _state(_p("hello"))
    res = run_command(state, "set_document_direction", {"direction": "rtl"})
    assert res["state"]["editor"]["doc"]["attrs"]["dir"] == "rtl"
    assert _first(res["state"])["attrs"] == {}

    res = run_edit_tick(res["state"], {"steps": [{"op": "insert_block", "pos": 7, "node": _p("12345")}]})
    view = read_view(res["state"], "b4f2_rendered_directions")
    new_block = view["overlay"]["blocks"][1]
    assert new_block["pos"] == 7
    assert new_block["dir"] == "rtl"
    assert new_block["origin"] == "document"
    assert res["state"]["editor"]["doc"]["content"][1]["attrs"] == {}


def test_dry_run_does_not_change_doc():
    state = _state(_p("hello"))
    res = run_command(state, "set_direction", {"direction": "rtl", "from": 1, "to": 1}, dispatch=False)
    assert res["ok"] is True
    assert res["state"]["editor"]["doc"] == state["editor"]["doc"]


def test_keyboard_chord_toggles_at_cursor():
    state = _state(_p("hello"), _p("world"))
    res = run_key(state, "Ctrl-Shift-r", pos=9)
    assert res["ok"] is True and res["chord"] == "Ctrl-Shift-r"
    assert res["state"]["editor"]["doc"]["content"][1]["attrs"]["dir"] == "rtl"

    res = run_key(res["state"], "cmd+shift+r", pos=9)
    assert res["state"]["editor"]["doc"]["content"][1]["attrs"]["dir"] == "ltr"


def test_unbound_chord():
    res = run_key(_state(_p("hello")), "Ctrl-Shift-x")
    assert res["ok"] is False
    assert res["reason"] == "unbound"


def test_auto_detect_off_keeps_commands_working():
    state = _state(_p(""), options={"auto_detect": False})
    res = _type(state, 0, ARABIC)
    assert _first(res["state"])["attrs"] == {}
    view = read_view(res["state"], "b4f1_auto_decorations")
    assert "overlay" not in view or view["overlay"]["decorations"] == []

    res = run_command(res["state"], "toggle_direction", {"pos": 2})
    assert _first(res["state"])["attrs"]["dir"] == "rtl"


def test_clean_tick_reports_no_reconcile_error():
    res = _type(_state(_p("")), 0, ARABIC)
    assert res["reconcile_error"] is None


def test_failed_reconcile_round_is_reported(monkeypatch):
    def broken_reconcile(_inp):
        bad = {"op": "set_node_attrs", "pos": 99, "attrs": {}}
        return {"status": "OK",
                "editor": {"transaction": {"origin": "reconcile", "append": True, "steps": [bad]}},
                "diag": {"reason": "ok"}}

    def registry():
        reg = build_registry()
        reg["b5f1_reconcile"] = broken_reconcile
        return reg

    monkeypatch.setattr(edit_tick, "build_registry", registry)

    res = _type(_state(_p("")), 0, "hello")
    assert res["ok"] is True
    assert "invalid_step" in res["reconcile_error"]
    # the host edit itself still landed
    assert _first(res["state"])["content"] == [{"type": "text", "text": "hello"}]

    res = run_command(_state(_p("hello")), "toggle_direction", {"pos": 2})
    assert res["ok"] is True
    assert res["reconcile_error"]
