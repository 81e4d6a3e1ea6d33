# Folder: rtl_core/block_3_commands
# File:   b3f2_toggle_direction.py

from __future__ import annotations

from typing import Any, Dict, List

from rtl_core.block_2_attributes.b2f1_direction_attrs import direction_step, document_default, read_direction
from rtl_core.block_2_attributes.b2f2_doc_tree import resolve_block
from rtl_core.kernel.b0f2_options import resolve_options

__all__ = ["b3f2_toggle_direction"]

RULES_VERSION = "1.0"

_OPPOSITE = {"ltr": "rtl", "rtl": "ltr"}


def _get(o: Dict[str, Any], path: List[str], default=None):
    cur = o
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def _not_applicable(pos: Any, why: str) -> Dict[str, Any]:
    return {
        "status": "FAIL",
        "command": {"name": "toggle_direction", "result": "not_applicable", "applied": False, "pos": pos},
        "diag": {"reason": "not_applicable", "detail": why},
    }


def b3f2_toggle_direction(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B3F2 — Direction.Command.ToggleDirection
    Flips the block at the cursor. An unset block counts as the document
    default (document dir, else options.default_direction) before flipping.

    Input:
      { "editor": { "doc": {...}, "selection": {"from": int, "to": int} },
        "command": { "args": { "pos": int? }, "dispatch": bool? }, "options": {...}? }
    Output:
      { "status": "OK|FAIL",
        "command": { "name": "toggle_direction", "result": "applied|not_applicable", "applied": bool,
                     "pos": int, "from_dir": "ltr|rtl", "direction": "ltr|rtl" },
        "editor": { "transaction": {...} }?,
        "diag": { "reason": "ok|dry_run|not_applicable|no_doc" } }
    """
    opts = resolve_options(input_json)
    doc = _get(input_json, ["editor", "doc"])
    if not isinstance(doc, dict):
        return {"status": "FAIL", "command": {"name": "toggle_direction", "applied": False}, "diag": {"reason": "no_doc"}}

    args = _get(input_json, ["command", "args"], {}) or {}
    pos = args.get("pos", _get(input_json, ["editor", "selection", "from"]))
    if not isinstance(pos, int):
        return _not_applicable(pos, "no_position")

    node, node_pos = resolve_block(doc, pos, opts["leaf_types"])
    if node is None:
        return _not_applicable(pos, "no_block")
    if node.get("type") not in set(opts["types"]):
        return _not_applicable(pos, f"ineligible:{node.get('type')}")

    current = read_direction(node) or document_default(doc, opts)
    new_dir = _OPPOSITE[current]

    out: Dict[str, Any] = {
        "status": "OK",
        "command": {
            "name": "toggle_direction",
            "result": "applied",
            "applied": True,
            "pos": node_pos,
            "from_dir": current,
            "direction": new_dir,
            "rules_version": RULES_VERSION,
        },
        "diag": {"reason": "ok"},
    }
    if _get(input_json, ["command", "dispatch"], True) is False:
        out["diag"]["reason"] = "dry_run"
    else:
        out["editor"] = {"transaction": {
            "origin": "command:toggle_direction",
            "steps": [direction_step(node_pos, node, new_dir, "explicit")],
        }}
    return out
