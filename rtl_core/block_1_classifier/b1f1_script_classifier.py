# Folder: rtl_core/block_1_classifier
# File:   b1f1_script_classifier.py

from __future__ import annotations

from typing import Any, Dict, List, Tuple

__all__ = [
    "b1f1_classify",
    "contains_rtl_script",
    "classify_direction",
    "classify_text",
    "DEFAULT_RTL_THRESHOLD",
]

RULES_VERSION = "1.0"

DEFAULT_RTL_THRESHOLD = 0.30

# Hebrew, Arabic and its supplements / presentation forms
R_RTL: List[Tuple[int, int]] = [
    (0x0590, 0x05FF),
    (0x0600, 0x06FF),
    (0x0750, 0x077F),
    (0x08A0, 0x08FF),
    (0xFB1D, 0xFDFF),
    (0xFE70, 0xFEFF),
]


def _in_ranges(cp: int, ranges: List[Tuple[int, int]]) -> bool:
    for a, b in ranges:
        if a <= cp <= b:
            return True
    return False


def _is_rtl_char(ch: str) -> bool:
    return _in_ranges(ord(ch), R_RTL)


def contains_rtl_script(text: str) -> bool:
    if not isinstance(text, str):
        return False
    return any(_is_rtl_char(ch) for ch in text)


def _counts(text: str) -> Tuple[int, int]:
    rtl = 0
    total = 0
    for ch in text:
        if ch.isspace():
            continue
        total += 1
        if _is_rtl_char(ch):
            rtl += 1
    return rtl, total


def classify_text(text: str, threshold: float = DEFAULT_RTL_THRESHOLD) -> Dict[str, Any]:
    """
    Ratio of RTL code points over non-whitespace code points.
    Text with no non-whitespace characters is ltr by definition (ratio 0.0).
    """
    text = text if isinstance(text, str) else ""
    rtl, total = _counts(text)
    ratio = (rtl / total) if total else 0.0
    dirn = "rtl" if ratio > threshold else "ltr"
    return {
        "dir": dirn,
        "is_rtl_dominant": dirn == "rtl",
        "has_rtl": rtl > 0,
        "ratio": round(ratio, 4),
        "rtl_chars": rtl,
        "total_chars": total,
    }


def classify_direction(text: str, threshold: float = DEFAULT_RTL_THRESHOLD) -> str:
    return classify_text(text, threshold)["dir"]


def _get_texts(inp: Dict[str, Any]) -> Any:
    c = inp.get("classifier", {})
    if not isinstance(c, dict):
        return None
    return c.get("texts")


def _threshold(inp: Dict[str, Any]) -> float:
    opts = inp.get("options") if isinstance(inp.get("options"), dict) else {}
    try:
        return float(opts.get("rtl_threshold", DEFAULT_RTL_THRESHOLD))
    except (TypeError, ValueError):
        return DEFAULT_RTL_THRESHOLD


def b1f1_classify(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B1F1 — Direction.Text.ScriptClassifier
    Input:
      { "classifier": { "texts": [str, ...] }, "options": { "rtl_threshold": float }? }
    Output:
      {
        "status": "OK|SKIP|FAIL",
        "classifier": {
          "results": [ { "dir": "ltr|rtl", "is_rtl_dominant": bool, "has_rtl": bool,
                         "ratio": float, "rtl_chars": int, "total_chars": int } ],
          "meta": { "source": "B1F1", "rules_version": "1.0", "threshold": float }
        },
        "diag": { "reason": "ok|no_texts|invalid_texts", "distribution": {"ltr": int, "rtl": int} }
      }
    """
    texts = _get_texts(input_json)
    threshold = _threshold(input_json)
    meta = {"source": "B1F1", "rules_version": RULES_VERSION, "threshold": threshold}

    if texts is None or (isinstance(texts, list) and len(texts) == 0):
        return {
            "status": "SKIP",
            "classifier": {"results": [], "meta": meta},
            "diag": {"reason": "no_texts", "distribution": {}},
        }
    if not isinstance(texts, list):
        return {"status": "FAIL", "diag": {"reason": "invalid_texts"}}

    results: List[Dict[str, Any]] = []
    dist: Dict[str, int] = {"ltr": 0, "rtl": 0}
    for t in texts:
        res = classify_text(t if isinstance(t, str) else "", threshold)
        results.append(res)
        dist[res["dir"]] += 1

    return {
        "status": "OK",
        "classifier": {"results": results, "meta": meta},
        "diag": {"reason": "ok", "distribution": dist},
    }


if __name__ == "__main__":
    sample = {"classifier": {"texts": ["hello", "שלום עולם", "hello שלום", "مرحبا بالعالم", "   "]}}
    out = b1f1_classify(sample)
    for r in out["classifier"]["results"]:
        print(r)
