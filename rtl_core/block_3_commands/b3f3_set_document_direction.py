# Folder: rtl_core/block_3_commands
# File:   b3f3_set_document_direction.py

from __future__ import annotations

from typing import Any, Dict, List

from rtl_core.block_2_attributes.b2f1_direction_attrs import DIRECTIONS, document_step, normalize_direction

__all__ = ["b3f3_set_document_direction"]

RULES_VERSION = "1.0"


def _get(o: Dict[str, Any], path: List[str], default=None):
    cur = o
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def b3f3_set_document_direction(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B3F3 — Direction.Command.SetDocumentDirection
    Writes the document-level dir only; blocks are not touched.
    """
    doc = _get(input_json, ["editor", "doc"])
    if not isinstance(doc, dict):
        return {"status": "FAIL", "command": {"name": "set_document_direction", "applied": False},
                "diag": {"reason": "no_doc"}}

    direction = normalize_direction(_get(input_json, ["command", "args", "direction"]))
    if direction is None:
        return {"status": "FAIL", "command": {"name": "set_document_direction", "applied": False},
                "diag": {"reason": "invalid_direction", "allowed": list(DIRECTIONS)}}

    out: Dict[str, Any] = {
        "status": "OK",
        "command": {
            "name": "set_document_direction",
            "result": "applied",
            "applied": True,
            "direction": direction,
            "rules_version": RULES_VERSION,
        },
        "diag": {"reason": "ok"},
    }
    if _get(input_json, ["command", "dispatch"], True) is False:
        out["diag"]["reason"] = "dry_run"
    else:
        out["editor"] = {"transaction": {
            "origin": "command:set_document_direction",
            "steps": [document_step(doc, direction)],
        }}
    return out
