# Folder: rtl_core/block_3_commands
# File:   b3f1_set_direction.py

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from rtl_core.block_2_attributes.b2f1_direction_attrs import DIRECTIONS, direction_step, normalize_direction
from rtl_core.block_2_attributes.b2f2_doc_tree import nodes_between
from rtl_core.kernel.b0f2_options import resolve_options

__all__ = ["b3f1_set_direction"]

RULES_VERSION = "1.0"

_MISSING = object()


# ------------------------- utils -------------------------

def _get(o: Dict[str, Any], path: List[str], default=None):
    cur = o
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def _range(inp: Dict[str, Any]) -> Optional[Tuple[int, int]]:
    args = _get(inp, ["command", "args"], {}) or {}
    sel = _get(inp, ["editor", "selection"], {}) or {}
    if "from" in args:
        frm = args.get("from")
        to = args.get("to", frm)
    else:
        frm = sel.get("from")
        to = sel.get("to", frm)
    if not isinstance(frm, int) or not isinstance(to, int):
        return None
    return (frm, to) if frm <= to else (to, frm)


def _direction_arg(inp: Dict[str, Any]) -> Any:
    args = _get(inp, ["command", "args"], {}) or {}
    return args.get("direction", _MISSING)


# ------------------------- main -------------------------

def b3f1_set_direction(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B3F1 — Direction.Command.SetDirection
    Marks every eligible block overlapping the range with an explicit direction.
    A direction of None clears explicitly. Succeeds even when nothing matched;
    the result then reads "no_match".

    Input:
      {
        "editor": { "doc": {...}, "selection": { "from": int, "to": int } },
        "command": { "args": { "direction": "ltr|rtl|None", "from": int?, "to": int? }, "dispatch": bool? },
        "options": {...}?
      }
    Output:
      {
        "status": "OK|FAIL",
        "command": { "name": "set_direction", "result": "applied|no_match", "applied": bool,
                     "direction": str|None, "targets": [int, ...] },
        "editor": { "transaction": { "origin": "command:set_direction", "steps": [...] } }?,
        "diag": { "reason": "ok|no_match|dry_run|invalid_direction|invalid_range|no_doc" }
      }
    """
    opts = resolve_options(input_json)
    doc = _get(input_json, ["editor", "doc"])
    if not isinstance(doc, dict):
        return {"status": "FAIL", "command": {"name": "set_direction", "applied": False}, "diag": {"reason": "no_doc"}}

    raw = _direction_arg(input_json)
    direction = normalize_direction(raw) if raw is not _MISSING else None
    if raw is _MISSING or (raw is not None and direction is None):
        return {"status": "FAIL", "command": {"name": "set_direction", "applied": False},
                "diag": {"reason": "invalid_direction", "allowed": list(DIRECTIONS) + [None]}}

    rng = _range(input_json)
    if rng is None:
        return {"status": "FAIL", "command": {"name": "set_direction", "applied": False},
                "diag": {"reason": "invalid_range"}}

    types = set(opts["types"])
    steps: List[Dict[str, Any]] = []
    targets: List[int] = []
    for node, pos, _ in nodes_between(doc, rng[0], rng[1], opts["leaf_types"]):
        if node.get("type") in types:
            steps.append(direction_step(pos, node, direction, "explicit"))
            targets.append(pos)

    result = "applied" if steps else "no_match"
    dispatch = _get(input_json, ["command", "dispatch"], True) is not False
    out: Dict[str, Any] = {
        "status": "OK",
        "command": {
            "name": "set_direction",
            "result": result,
            "applied": True,
            "direction": direction,
            "targets": targets,
            "rules_version": RULES_VERSION,
        },
        "diag": {"reason": "ok" if steps else "no_match"},
    }
    if not dispatch:
        out["diag"]["reason"] = "dry_run"
    elif steps:
        out["editor"] = {"transaction": {"origin": "command:set_direction", "steps": steps}}
    return out


if __name__ == "__main__":
    doc = {
        "type": "doc",
        "attrs": {"dir": None},
        "content": [
            {"type": "paragraph", "attrs": {}, "content": [{"type": "text", "text": "hello"}]},
            {"type": "paragraph", "attrs": {}, "content": [{"type": "text", "text": "world"}]},
        ],
    }
    out = b3f1_set_direction({
        "editor": {"doc": doc, "selection": {"from": 1, "to": 9}},
        "command": {"args": {"direction": "rtl"}},
    })
    print(out["command"], out["editor"]["transaction"]["steps"])
