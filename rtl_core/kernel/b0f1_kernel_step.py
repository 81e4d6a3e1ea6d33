# Folder: rtl_core/kernel
# File:   b0f1_kernel_step.py

from __future__ import annotations

import copy
import json
from typing import Any, Callable, Dict, List, Tuple

__all__ = ["b0f1_kernel_step", "DEFAULT_ORDER"]

RULES_VERSION = "1.0"

StepFn = Callable[[Dict[str, Any]], Dict[str, Any]]

# Document snapshots and transactions are replaced, never merged key by key.
REPLACE_KEYS = {"doc", "transaction"}


# ------------------------- utils -------------------------

def _deep_merge(dst: Dict[str, Any], src: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merges 'src' into 'dst' (dict-only). Scalars/lists overwrite.
    """
    for k, v in src.items():
        if k not in REPLACE_KEYS and isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_merge(dst[k], v)
        else:
            dst[k] = copy.deepcopy(v)
    return dst


def _call(reg: Dict[str, StepFn], key: str, state: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    fn = reg.get(key)
    if not callable(fn):
        return "SKIP", {}
    try:
        out = fn(copy.deepcopy(state)) or {}
        return str(out.get("status", "OK")).upper(), out
    except Exception as e:
        return "FAIL", {"error": f"{key}: {e.__class__.__name__}: {e}"}


def _fail_reason(out: Dict[str, Any]) -> str:
    if out.get("error"):
        return str(out["error"])
    diag = out.get("diag") if isinstance(out.get("diag"), dict) else {}
    return str(diag.get("reason") or "unknown")


# ------------------------- pipeline -------------------------

DEFAULT_ORDER: List[str] = [
    "b6f1_apply_transaction",
    "b5f1_reconcile",
    "b6f1_apply_transaction",
]


# ------------------------- main -------------------------

def b0f1_kernel_step(input_json: Dict[str, Any], registry: Dict[str, StepFn], order: List[str] = None,
                     halt_on_fail: bool = False) -> Dict[str, Any]:
    """
    B0F1 — Direction.KernelStep
    Composition of available blocks. Each present step is invoked with the current state, and its
    result is deep-merged back. Steps not present in registry are skipped safely.

    Args:
      input_json:   initial state for this step (editor, options, command, ...)
      registry:     dict of { step_name: callable(state)->result_dict }
      order:        optional explicit step order (defaults to DEFAULT_ORDER)
      halt_on_fail: stop at the first failing step instead of carrying on

    Returns:
      {
        "status": "OK|FAIL",
        "kernel": { "ran":[...], "skipped":[...], "errors":[...], "results": {step: diag}, "rules_version":"1.0" },
        "state": { ... merged state after all steps ... }
      }
    """
    steps = list(order or DEFAULT_ORDER)
    state: Dict[str, Any] = copy.deepcopy(input_json or {})
    ran: List[str] = []
    skipped: List[str] = []
    errors: List[Dict[str, Any]] = []
    results: Dict[str, Any] = {}

    for key in steps:
        status, out = _call(registry, key, state)
        results[key] = out.get("diag", {}) if isinstance(out, dict) else {}
        if status == "FAIL":
            errors.append({"step": key, "error": _fail_reason(out), "out": out})
            if halt_on_fail:
                break
            continue
        if status == "SKIP":
            skipped.append(key)
            continue
        ran.append(key)
        _deep_merge(state, out)

    return {
        "status": "OK" if not errors else "FAIL",
        "kernel": {
            "ran": ran,
            "skipped": skipped,
            "errors": errors,
            "results": results,
            "rules_version": RULES_VERSION
        },
        "state": state
    }


if __name__ == "__main__":
    def stub(name):
        def _fn(s):
            return {"status": "OK", "trace": {name: {"ok": True}}}

        return _fn

    REG = {
        "b6f1_apply_transaction": stub("b6f1_apply_transaction"),
        "b5f1_reconcile": stub("b5f1_reconcile"),
    }

    out = b0f1_kernel_step({"editor": {}}, REG)
    print(json.dumps(out["kernel"], ensure_ascii=False, indent=2))
    print("keys in state:", list(out["state"].keys()))
