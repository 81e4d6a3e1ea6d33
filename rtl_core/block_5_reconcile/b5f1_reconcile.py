# Folder: rtl_core/block_5_reconcile
# File:   b5f1_reconcile.py

from __future__ import annotations

from typing import Any, Dict, List

from rtl_core.block_1_classifier.b1f1_script_classifier import classify_direction, contains_rtl_script
from rtl_core.block_2_attributes.b2f1_direction_attrs import direction_step, may_auto_clear, read_direction
from rtl_core.block_2_attributes.b2f2_doc_tree import eligible_blocks, text_content
from rtl_core.kernel.b0f2_options import resolve_options

__all__ = ["b5f1_reconcile", "plan_reconcile"]

RULES_VERSION = "1.0"

ORIGIN = "reconcile"


# ------------------------- utils -------------------------

def _get(o: Dict[str, Any], path: List[str], default=None):
    cur = o
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def _doc_changed(inp: Dict[str, Any]) -> bool:
    batch = _get(inp, ["editor", "batch"])
    if isinstance(batch, list):
        return any(isinstance(t, dict) and t.get("doc_changed") for t in batch)
    return bool(_get(inp, ["editor", "last", "doc_changed"], False))


# ------------------------- planning -------------------------

def plan_reconcile(doc: Dict[str, Any], opts: Dict[str, Any]) -> Dict[str, Any]:
    """
    Walks every eligible block once and collects the writes:
      rtl-dominant text on an unset block  -> rtl (auto)
      non-empty text without RTL on an rtl block the engine may clear -> unset
    Empty blocks keep whatever they have.
    """
    threshold = opts["rtl_threshold"]
    preserve = opts["preserve_explicit"]
    steps: List[Dict[str, Any]] = []
    set_rtl: List[int] = []
    cleared: List[int] = []
    kept: List[int] = []

    for node, pos in eligible_blocks(doc, opts["types"], opts["leaf_types"]):
        text = text_content(node)
        if not text:
            continue
        current = read_direction(node)
        if contains_rtl_script(text):
            if current is None and classify_direction(text, threshold) == "rtl":
                steps.append(direction_step(pos, node, "rtl", "auto"))
                set_rtl.append(pos)
        elif current == "rtl":
            if may_auto_clear(node, preserve):
                steps.append(direction_step(pos, node, None, "auto"))
                cleared.append(pos)
            else:
                kept.append(pos)

    return {"steps": steps, "set_rtl": set_rtl, "cleared": cleared, "kept_explicit": kept}


# ------------------------- main -------------------------

def b5f1_reconcile(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B5F1 — Direction.Reconcile.AppendTransaction
    Runs after a batch of transactions; when any of them changed the document,
    returns one appended transaction that brings automatic directions in line
    with the text. Explicit choices are left alone unless preserve_explicit
    is switched off.

    Input:
      { "editor": { "doc": {...}, "last": { "doc_changed": bool } | "batch": [ {"doc_changed": bool}, ... ] },
        "options": {...}? }
    Output:
      { "status": "OK|SKIP|FAIL",
        "reconcile": { "changed": int, "set_rtl": [int], "cleared": [int], "kept_explicit": [int],
                       "meta": {"source": "B5F1", "rules_version": "1.0"} },
        "editor": { "transaction": { "origin": "reconcile", "append": true, "steps": [...] } | None },
        "diag": { "reason": "ok|no_change|auto_detect_off|no_doc_change|no_doc" } }
    """
    opts = resolve_options(input_json)
    doc = _get(input_json, ["editor", "doc"])
    meta = {"source": "B5F1", "rules_version": RULES_VERSION}

    if not isinstance(doc, dict):
        return {"status": "FAIL", "diag": {"reason": "no_doc"}}
    if not opts["auto_detect"]:
        return {"status": "SKIP", "diag": {"reason": "auto_detect_off"}}
    if not _doc_changed(input_json):
        return {"status": "SKIP", "diag": {"reason": "no_doc_change"}}

    plan = plan_reconcile(doc, opts)
    steps = plan.pop("steps")
    tr = {"origin": ORIGIN, "append": True, "steps": steps} if steps else None

    return {
        "status": "OK",
        "reconcile": {"changed": len(steps), **plan, "meta": meta},
        "editor": {"transaction": tr},
        "diag": {"reason": "ok" if steps else "no_change"},
    }


if __name__ == "__main__":
    doc = {
        "type": "doc",
        "attrs": {"dir": None},
        "content": [
            {"type": "paragraph", "attrs": {}, "content": [{"type": "text", "text": "مرحبا بالعالم"}]},
            {"type": "paragraph", "attrs": {"dir": "rtl", "dirSource": "auto"},
             "content": [{"type": "text", "text": "plain latin"}]},
        ],
    }
    out = b5f1_reconcile({"editor": {"doc": doc, "last": {"doc_changed": True}}})
    print(out["reconcile"], out["editor"]["transaction"])
