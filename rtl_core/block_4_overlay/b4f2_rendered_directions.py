# Folder: rtl_core/block_4_overlay
# File:   b4f2_rendered_directions.py

from __future__ import annotations

from typing import Any, Dict, List

from rtl_core.block_1_classifier.b1f1_script_classifier import classify_direction, contains_rtl_script
from rtl_core.block_2_attributes.b2f1_direction_attrs import (
    normalize_direction,
    read_direction,
    read_source,
    render_html_attrs,
)
from rtl_core.block_2_attributes.b2f2_doc_tree import eligible_blocks, text_content
from rtl_core.kernel.b0f2_options import resolve_options

__all__ = ["b4f2_rendered_directions", "rendered_direction"]

RULES_VERSION = "1.0"


def rendered_direction(node: Dict[str, Any], doc: Dict[str, Any], options: Dict[str, Any]) -> Dict[str, str]:
    """Effective direction of a block: stored value, auto signal, document dir, configured default."""
    d = read_direction(node)
    if d is not None:
        return {"dir": d, "origin": read_source(node) or "explicit"}

    if options.get("auto_detect", True):
        text = text_content(node)
        if text and contains_rtl_script(text) and classify_direction(text, options["rtl_threshold"]) == "rtl":
            return {"dir": "rtl", "origin": "auto"}

    doc_dir = read_direction(doc)
    if doc_dir is not None:
        return {"dir": doc_dir, "origin": "document"}
    return {"dir": normalize_direction(options.get("default_direction")) or "ltr", "origin": "default"}


def b4f2_rendered_directions(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B4F2 — Direction.Overlay.RenderedDirections
    Read-only. One row per eligible block with the direction it renders in.
    """
    opts = resolve_options(input_json)
    editor = input_json.get("editor") if isinstance(input_json.get("editor"), dict) else {}
    doc = editor.get("doc")
    if not isinstance(doc, dict):
        return {"status": "FAIL", "diag": {"reason": "no_doc"}}

    rows: List[Dict[str, Any]] = []
    dist: Dict[str, int] = {}
    for node, pos in eligible_blocks(doc, opts["types"], opts["leaf_types"]):
        r = rendered_direction(node, doc, opts)
        rows.append({
            "pos": pos,
            "type": node.get("type"),
            "dir": r["dir"],
            "origin": r["origin"],
            "html_attrs": render_html_attrs(node),
        })
        dist[r["origin"]] = dist.get(r["origin"], 0) + 1

    return {
        "status": "OK",
        "overlay": {
            "blocks": rows,
            "document": {"dir": read_direction(doc), "html_attrs": render_html_attrs(doc)},
            "meta": {"source": "B4F2", "rules_version": RULES_VERSION},
        },
        "diag": {"reason": "ok", "distribution": dist},
    }
