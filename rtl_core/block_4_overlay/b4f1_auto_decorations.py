# Folder: rtl_core/block_4_overlay
# File:   b4f1_auto_decorations.py

from __future__ import annotations

from typing import Any, Dict, Iterator, List

from rtl_core.block_1_classifier.b1f1_script_classifier import classify_direction, contains_rtl_script
from rtl_core.block_2_attributes.b2f1_direction_attrs import read_direction
from rtl_core.block_2_attributes.b2f2_doc_tree import eligible_blocks, node_size, text_content
from rtl_core.kernel.b0f2_options import resolve_options

__all__ = ["b4f1_auto_decorations", "AutoDirectionDecorations"]

RULES_VERSION = "1.0"

DECORATION_CLASS = "rtl-auto-detected"


class AutoDirectionDecorations:
    """
    Render-only view over a document snapshot. Iterating walks the tree again,
    so the sequence can be restarted and always reflects the snapshot as given.
    """

    def __init__(self, doc: Dict[str, Any], options: Dict[str, Any]):
        self.doc = doc
        self.options = options

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        if not self.options.get("auto_detect", True) or not isinstance(self.doc, dict):
            return iter(())
        return self._walk()

    def _walk(self) -> Iterator[Dict[str, Any]]:
        leaf = self.options["leaf_types"]
        threshold = self.options["rtl_threshold"]
        for node, pos in eligible_blocks(self.doc, self.options["types"], leaf):
            if read_direction(node) is not None:
                continue
            text = text_content(node)
            if not text or not contains_rtl_script(text):
                continue
            if classify_direction(text, threshold) != "rtl":
                continue
            yield {
                "from": pos,
                "to": pos + node_size(node, leaf),
                "type": node.get("type"),
                "attrs": {"class": DECORATION_CLASS, "dir": "rtl"},
            }


def _get(o: Dict[str, Any], path: List[str], default=None):
    cur = o
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def b4f1_auto_decorations(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B4F1 — Direction.Overlay.AutoDecorations
    Input:  { "editor": { "doc": {...} }, "options": {...}? }
    Output:
      { "status": "OK|SKIP|FAIL",
        "overlay": { "decorations": [ {"from": int, "to": int, "type": str,
                                       "attrs": {"class": "rtl-auto-detected", "dir": "rtl"}} ],
                     "meta": { "source": "B4F1", "rules_version": "1.0" } },
        "diag": { "reason": "ok|auto_detect_off|no_doc", "count": int } }
    """
    opts = resolve_options(input_json)
    doc = _get(input_json, ["editor", "doc"])
    meta = {"source": "B4F1", "rules_version": RULES_VERSION}
    if not isinstance(doc, dict):
        return {"status": "FAIL", "diag": {"reason": "no_doc"}}
    if not opts["auto_detect"]:
        return {"status": "SKIP", "overlay": {"decorations": [], "meta": meta},
                "diag": {"reason": "auto_detect_off", "count": 0}}

    decos = list(AutoDirectionDecorations(doc, opts))
    return {
        "status": "OK",
        "overlay": {"decorations": decos, "meta": meta},
        "diag": {"reason": "ok", "count": len(decos)},
    }
