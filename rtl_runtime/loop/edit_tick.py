# Folder: rtl_runtime/loop
# File:   edit_tick.py

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from rtl_runtime.adapters.registry import COMMAND_STEPS, build_registry
from rtl_core.kernel.b0f1_kernel_step import b0f1_kernel_step

logger = logging.getLogger(__name__)

# appendTransaction-style rounds; reconciliation settles after one in practice
MAX_APPEND_ROUNDS = 8

RECONCILE_ORDER = ["b5f1_reconcile", "b6f1_apply_transaction"]


def _reset_editor(state: Dict[str, Any]) -> Dict[str, Any]:
    editor = state.setdefault("editor", {})
    editor["transaction"] = None
    editor["last"] = {"doc_changed": False}
    return state


def _first_error(out: Dict[str, Any]) -> Dict[str, Any]:
    errors = (out.get("kernel") or {}).get("errors") or []
    return errors[0] if errors else {}


def _reconcile_rounds(state: Dict[str, Any], registry: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[str]]:
    """Returns the settled state and the error of a failed round, if any."""
    rounds = 0
    error: Optional[str] = None
    changed: List[Dict[str, Any]] = []
    while rounds < MAX_APPEND_ROUNDS:
        out = b0f1_kernel_step(state, registry, order=RECONCILE_ORDER, halt_on_fail=True)
        if out["status"] == "FAIL":
            error = str(_first_error(out).get("error") or "reconcile_failed")
            logger.error(f"Reconciliation failed: {error}")
            break
        state = out["state"]
        if "b6f1_apply_transaction" not in out["kernel"]["ran"]:
            break
        rec = state.get("reconcile") or {}
        changed.append({k: rec.get(k, []) for k in ("set_rtl", "cleared", "kept_explicit")})
        rounds += 1
    else:
        logger.warning(f"Reconciliation did not settle after {MAX_APPEND_ROUNDS} rounds")

    state.setdefault("editor", {})["transaction"] = None
    state["reconcile_rounds"] = changed
    return state, error


def run_edit_tick(state: Dict[str, Any], transaction: Dict[str, Any]) -> Dict[str, Any]:
    """
    One logical edit: apply the host transaction, then let reconciliation append
    until nothing more changes. A transaction that fails to apply leaves the
    state untouched.
    """
    registry = build_registry()
    work = _reset_editor(copy.deepcopy(state))
    work["editor"]["transaction"] = transaction

    out = b0f1_kernel_step(work, registry, order=["b6f1_apply_transaction"], halt_on_fail=True)
    if out["status"] == "FAIL":
        err = _first_error(out)
        logger.info(f"Transaction rejected: {err.get('error')}")
        return {"ok": False, "reason": "invalid_step", "error": err.get("error"), "state": state}

    new_state, error = _reconcile_rounds(out["state"], registry)
    return {"ok": True, "state": new_state, "reconcile": new_state.get("reconcile_rounds", []),
            "reconcile_error": error}


def run_command(state: Dict[str, Any], name: str, args: Optional[Dict[str, Any]] = None,
                dispatch: bool = True) -> Dict[str, Any]:
    """
    Runs set_direction / toggle_direction / set_document_direction (or their
    b3f* step names) followed by reconciliation.
    """
    registry = build_registry()
    key = COMMAND_STEPS.get(name, name)
    if not key.startswith("b3f") or key not in registry:
        return {"ok": False, "result": "unknown_command", "reason": "unknown_command", "state": state}

    work = _reset_editor(copy.deepcopy(state))
    work["command"] = {"name": name, "args": dict(args or {}), "dispatch": bool(dispatch)}

    out = b0f1_kernel_step(work, registry, order=[key, "b6f1_apply_transaction"], halt_on_fail=True)
    if out["status"] == "FAIL":
        err = _first_error(out)
        failed = err.get("out") if isinstance(err.get("out"), dict) else {}
        cmd = failed.get("command") if isinstance(failed.get("command"), dict) else {}
        reason = (failed.get("diag") or {}).get("reason") or err.get("error")
        logger.info(f"Command {name} did not apply: {reason}")
        return {
            "ok": False,
            "result": cmd.get("result", "failed"),
            "reason": reason,
            "command": cmd,
            "state": state,
        }

    new_state = out["state"]
    cmd = dict(new_state.get("command") or {})
    error = None
    if dispatch:
        new_state, error = _reconcile_rounds(new_state, registry)
    return {"ok": True, "result": cmd.get("result"), "command": cmd, "state": new_state,
            "reconcile": new_state.get("reconcile_rounds", []), "reconcile_error": error}


def run_key(state: Dict[str, Any], chord: str, pos: Optional[int] = None) -> Dict[str, Any]:
    registry = build_registry()
    out = b0f1_kernel_step({"key": {"chord": chord}}, registry, order=["b7f1_keymap"])
    if "b7f1_keymap" not in out["kernel"]["ran"]:
        reason = out["kernel"]["results"].get("b7f1_keymap", {}).get("reason", "unbound")
        return {"ok": False, "result": "unbound", "reason": reason, "state": state}
    bound = out["state"]["command"]
    args = {"pos": pos} if isinstance(pos, int) else {}
    res = run_command(state, bound["step"], args)
    res["chord"] = bound["chord"]
    return res


def read_view(state: Dict[str, Any], step: str) -> Dict[str, Any]:
    """Runs a read-only block (overlay, rendered directions) against the state."""
    registry = build_registry()
    out = b0f1_kernel_step({"editor": {"doc": (state.get("editor") or {}).get("doc")},
                            "options": state.get("options") or {}}, registry, order=[step])
    return out["state"]
