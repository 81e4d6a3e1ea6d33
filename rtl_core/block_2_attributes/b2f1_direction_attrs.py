# Folder: rtl_core/block_2_attributes
# File:   b2f1_direction_attrs.py

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "DIRECTIONS",
    "SOURCES",
    "normalize_direction",
    "read_direction",
    "read_source",
    "with_direction",
    "direction_step",
    "document_step",
    "may_auto_clear",
    "document_default",
    "render_html_attrs",
    "parse_html_dir",
]

DIRECTIONS = ("ltr", "rtl")
SOURCES = ("auto", "explicit")

ATTR_DIR = "dir"
ATTR_SOURCE = "dirSource"


def normalize_direction(value: Any) -> Optional[str]:
    """None/'' -> unset; 'LTR'/'rtl' etc. -> canonical; anything else -> unset."""
    if not isinstance(value, str):
        return None
    v = value.strip().lower()
    return v if v in DIRECTIONS else None


def _attrs(node: Dict[str, Any]) -> Dict[str, Any]:
    a = node.get("attrs") if isinstance(node, dict) else None
    return a if isinstance(a, dict) else {}


def read_direction(node: Dict[str, Any]) -> Optional[str]:
    return normalize_direction(_attrs(node).get(ATTR_DIR))


def read_source(node: Dict[str, Any]) -> Optional[str]:
    if read_direction(node) is None:
        return None
    s = _attrs(node).get(ATTR_SOURCE)
    return s if s in SOURCES else None


def with_direction(attrs: Dict[str, Any], direction: Optional[str], source: Optional[str]) -> Dict[str, Any]:
    """
    Returns a new attrs map. Both keys are always written so a merge of the
    result over older attrs cannot leave a stale provenance behind.
    """
    d = normalize_direction(direction)
    out = dict(attrs or {})
    out[ATTR_DIR] = d
    out[ATTR_SOURCE] = (source if source in SOURCES else None) if d is not None else None
    return out


def direction_step(pos: int, node: Dict[str, Any], direction: Optional[str], source: str) -> Dict[str, Any]:
    return {
        "op": "set_node_attrs",
        "pos": int(pos),
        "attrs": with_direction(_attrs(node), direction, source),
        "source": source,
    }


def document_step(doc: Dict[str, Any], direction: Optional[str]) -> Dict[str, Any]:
    out = dict(_attrs(doc))
    out[ATTR_DIR] = normalize_direction(direction)
    return {"op": "set_doc_attrs", "attrs": out, "source": "explicit"}


def may_auto_clear(node: Dict[str, Any], preserve_explicit: bool = True) -> bool:
    """
    Whether reconciliation may take a node's rtl back to unset.
    With preserve_explicit only values written by reconciliation qualify;
    rtl of unknown provenance (e.g. parsed from HTML) counts as explicit.
    """
    if read_direction(node) != "rtl":
        return False
    if not preserve_explicit:
        return True
    return read_source(node) == "auto"


def document_default(doc: Dict[str, Any], options: Dict[str, Any]) -> str:
    return read_direction(doc) or normalize_direction(options.get("default_direction")) or "ltr"


def render_html_attrs(node: Dict[str, Any]) -> Dict[str, str]:
    d = read_direction(node)
    return {"dir": d} if d else {}


def parse_html_dir(element_attrs: Dict[str, Any]) -> Dict[str, Any]:
    """Reads `dir` off an element attribute map. Provenance is left unknown."""
    d = normalize_direction((element_attrs or {}).get("dir"))
    return with_direction({}, d, None)
