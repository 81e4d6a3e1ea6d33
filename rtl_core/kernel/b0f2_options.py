# Folder: rtl_core/kernel
# File:   b0f2_options.py

from __future__ import annotations

from typing import Any, Dict, List

__all__ = ["DEFAULT_OPTIONS", "resolve_options"]

DEFAULT_OPTIONS: Dict[str, Any] = {
    "types": ["paragraph", "heading", "blockquote", "listItem"],
    "auto_detect": True,
    "default_direction": "ltr",
    "rtl_threshold": 0.30,
    "preserve_explicit": True,
    "leaf_types": ["horizontalRule", "image", "hardBreak"],
}


def _as_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in {"1", "true", "yes", "on"}:
            return True
        if s in {"0", "false", "no", "off"}:
            return False
    return default


def _as_names(v: Any, default: List[str]) -> List[str]:
    if isinstance(v, str):
        v = [p.strip() for p in v.split(",")]
    if isinstance(v, (list, tuple, set)):
        names = [str(x) for x in v if isinstance(x, str) and x]
        return names
    return list(default)


def resolve_options(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge input_json["options"] over DEFAULT_OPTIONS.
    Invalid values fall back to their defaults rather than failing the step.
    """
    raw = input_json.get("options") if isinstance(input_json, dict) else None
    raw = raw if isinstance(raw, dict) else {}

    out: Dict[str, Any] = {}
    out["types"] = _as_names(raw.get("types"), DEFAULT_OPTIONS["types"])
    out["leaf_types"] = _as_names(raw.get("leaf_types"), DEFAULT_OPTIONS["leaf_types"])
    out["auto_detect"] = _as_bool(raw.get("auto_detect"), DEFAULT_OPTIONS["auto_detect"])
    out["preserve_explicit"] = _as_bool(raw.get("preserve_explicit"), DEFAULT_OPTIONS["preserve_explicit"])

    d = str(raw.get("default_direction") or DEFAULT_OPTIONS["default_direction"]).lower()
    out["default_direction"] = d if d in ("ltr", "rtl") else DEFAULT_OPTIONS["default_direction"]

    try:
        th = float(raw.get("rtl_threshold", DEFAULT_OPTIONS["rtl_threshold"]))
    except (TypeError, ValueError):
        th = DEFAULT_OPTIONS["rtl_threshold"]
    out["rtl_threshold"] = th if 0.0 <= th < 1.0 else DEFAULT_OPTIONS["rtl_threshold"]
    return out
