# Folder: rtl_core/block_6_transactions
# File:   b6f1_transaction_apply.py

from __future__ import annotations

import copy
from typing import Any, Dict, List, Sequence

from rtl_core.block_2_attributes.b2f2_doc_tree import boundary, children, is_text, locate
from rtl_core.kernel.b0f2_options import resolve_options

__all__ = ["b6f1_apply_transaction", "apply_steps", "StepError", "STEP_OPS"]

RULES_VERSION = "1.0"

HISTORY_LIMIT = 50


class StepError(ValueError):
    """A step that cannot be applied to the document it was given."""


# ------------------------- utils -------------------------

def _get(o: Dict[str, Any], path: List[str], default=None):
    cur = o
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def _node_starting_at(doc: Dict[str, Any], pos: Any, leaf_types: Sequence[str]):
    if not isinstance(pos, int):
        raise StepError(f"position must be an int, got {pos!r}")
    hit = locate(doc, pos, leaf_types)
    if hit is None:
        raise StepError(f"no node at {pos}")
    parent, i, start = hit
    node = children(parent)[i]
    if start != pos or is_text(node):
        raise StepError(f"position {pos} is inside text, not at a block")
    return parent, i, node


# ------------------------- steps -------------------------

def _set_node_attrs(doc, step, leaf_types):
    _, _, node = _node_starting_at(doc, step.get("pos"), leaf_types)
    attrs = step.get("attrs")
    if not isinstance(attrs, dict):
        raise StepError("set_node_attrs needs an attrs map")
    node["attrs"] = dict(attrs)


def _set_doc_attrs(doc, step, leaf_types):
    attrs = step.get("attrs")
    if not isinstance(attrs, dict):
        raise StepError("set_doc_attrs needs an attrs map")
    doc["attrs"] = dict(attrs)


def _set_block_text(doc, step, leaf_types):
    _, _, node = _node_starting_at(doc, step.get("pos"), leaf_types)
    if node.get("type") in leaf_types:
        raise StepError(f"{node.get('type')} cannot hold text")
    text = step.get("text")
    if not isinstance(text, str):
        raise StepError("set_block_text needs a text string")
    node["content"] = [{"type": "text", "text": text}] if text else []


def _insert_block(doc, step, leaf_types):
    new_node = step.get("node")
    if not isinstance(new_node, dict) or not new_node.get("type") or is_text(new_node):
        raise StepError("insert_block needs a block node")
    at = boundary(doc, step.get("pos"), leaf_types) if isinstance(step.get("pos"), int) else None
    if at is None:
        raise StepError(f"cannot insert at {step.get('pos')!r}")
    parent, index = at
    parent.setdefault("content", [])
    if not isinstance(parent["content"], list):
        parent["content"] = []
    parent["content"].insert(index, copy.deepcopy(new_node))


def _delete_block(doc, step, leaf_types):
    parent, i, _ = _node_starting_at(doc, step.get("pos"), leaf_types)
    del parent["content"][i]


_HANDLERS = {
    "set_node_attrs": _set_node_attrs,
    "set_doc_attrs": _set_doc_attrs,
    "set_block_text": _set_block_text,
    "insert_block": _insert_block,
    "delete_block": _delete_block,
}

STEP_OPS = tuple(_HANDLERS) + ("replace_doc",)


def apply_steps(doc: Dict[str, Any], steps: List[Dict[str, Any]],
                leaf_types: Sequence[str]) -> Dict[str, Any]:
    """
    Applies steps in order to a copy of doc and returns the copy.
    Raises StepError on the first bad step; the input doc is never touched.
    """
    out = copy.deepcopy(doc)
    for idx, step in enumerate(steps):
        if not isinstance(step, dict):
            raise StepError(f"step {idx} is not a map")
        op = step.get("op")
        if op == "replace_doc":
            new_doc = step.get("doc")
            if not isinstance(new_doc, dict) or new_doc.get("type") != "doc":
                raise StepError("replace_doc needs a doc node")
            out = copy.deepcopy(new_doc)
            continue
        if op not in STEP_OPS:
            raise StepError(f"unknown op {op!r}")
        fn = _HANDLERS[op]
        try:
            fn(out, step, leaf_types)
        except StepError as e:
            raise StepError(f"step {idx} ({op}): {e}") from e
    return out


# ------------------------- main -------------------------

def b6f1_apply_transaction(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B6F1 — Direction.Host.ApplyTransaction
    Applies editor.transaction as one unit. Either every step lands or none does.

    Input:
      { "editor": { "doc": {...}, "transaction": { "origin": str, "steps": [...] } | None,
                    "history": [...]? }, "options": {...}? }
    Output:
      { "status": "OK|SKIP|FAIL",
        "editor": { "doc": {...}, "transaction": None,
                    "last": { "origin": str, "doc_changed": bool, "steps": int },
                    "history": [...] },
        "diag": { "reason": "ok|no_transaction|invalid_step|no_doc", "error": str? } }
    """
    opts = resolve_options(input_json)
    tr = _get(input_json, ["editor", "transaction"])
    if not isinstance(tr, dict):
        return {"status": "SKIP", "diag": {"reason": "no_transaction"}}

    doc = _get(input_json, ["editor", "doc"])
    if not isinstance(doc, dict):
        return {"status": "FAIL", "diag": {"reason": "no_doc"}}

    steps = tr.get("steps") if isinstance(tr.get("steps"), list) else []
    try:
        new_doc = apply_steps(doc, steps, opts["leaf_types"])
    except StepError as e:
        return {
            "status": "FAIL",
            "editor": {"transaction": None},
            "error": f"invalid_step: {e}",
            "diag": {"reason": "invalid_step", "error": str(e)},
        }

    origin = str(tr.get("origin") or "user")
    last = {"origin": origin, "doc_changed": bool(steps), "steps": len(steps), "append": bool(tr.get("append"))}
    history = _get(input_json, ["editor", "history"], [])
    history = list(history)[-(HISTORY_LIMIT - 1):] if isinstance(history, list) else []
    history.append(last)

    return {
        "status": "OK",
        "editor": {"doc": new_doc, "transaction": None, "last": last, "history": history},
        "diag": {"reason": "ok", "rules_version": RULES_VERSION},
    }
