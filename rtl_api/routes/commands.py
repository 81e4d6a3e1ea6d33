# ============================
# File: rtl_api/routes/commands.py
# ============================

from typing import Any, Dict

from fastapi import APIRouter

from rtl_api.routes.documents import doc_view, require_state
from rtl_api.schemas.schemas import (
    DocumentDirectionRequest,
    KeyRequest,
    SetDirectionRequest,
    ToggleDirectionRequest,
)
from rtl_api.utils.state import doc_lock, update_state, now_iso
from rtl_runtime.loop.edit_tick import run_command, run_key

router = APIRouter(prefix="/documents/{doc_id}", tags=["Commands"])


def _respond(doc_id: str, res: Dict[str, Any]) -> Dict[str, Any]:
    # caller holds doc_lock(doc_id)
    if not res["ok"]:
        return {
            "ok": False,
            "doc_id": doc_id,
            "result": res.get("result"),
            "reason": res.get("reason"),
            "command": res.get("command", {}),
        }
    state = res["state"]
    state["updated_at"] = now_iso()
    update_state(doc_id, state)
    return {
        "ok": True,
        **doc_view(state),
        "result": res.get("result"),
        "command": res.get("command", {}),
        "reconcile": res.get("reconcile", []),
        "reconcile_error": res.get("reconcile_error"),
    }


@router.post("/commands/set-direction", response_model=dict)
def set_direction(doc_id: str, req: SetDirectionRequest):
    """Explicit direction for every block in the range (defaults to the stored selection)."""
    args: Dict[str, Any] = {"direction": req.direction}
    if req.from_ is not None:
        args["from"] = req.from_
        args["to"] = req.to if req.to is not None else req.from_
    with doc_lock(doc_id):
        state = require_state(doc_id)
        return _respond(doc_id, run_command(state, "set_direction", args, dispatch=req.dispatch))


@router.post("/commands/toggle-direction", response_model=dict)
def toggle_direction(doc_id: str, req: ToggleDirectionRequest):
    args = {"pos": req.pos} if req.pos is not None else {}
    with doc_lock(doc_id):
        state = require_state(doc_id)
        return _respond(doc_id, run_command(state, "toggle_direction", args, dispatch=req.dispatch))


@router.post("/commands/document-direction", response_model=dict)
def document_direction(doc_id: str, req: DocumentDirectionRequest):
    with doc_lock(doc_id):
        state = require_state(doc_id)
        res = run_command(state, "set_document_direction", {"direction": req.direction}, dispatch=req.dispatch)
        return _respond(doc_id, res)


@router.post("/keys", response_model=dict)
def key_press(doc_id: str, req: KeyRequest):
    """Keyboard chords, e.g. Ctrl-Shift-r / Cmd-Shift-r toggle the block at the cursor."""
    with doc_lock(doc_id):
        state = require_state(doc_id)
        res = run_key(state, req.chord, req.pos)
        out = _respond(doc_id, res)
    if res.get("chord"):
        out["chord"] = res["chord"]
    return out
