# ============================
# File: rtl_api/routes/documents.py
# ============================

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from rtl_api.schemas.schemas import DocumentCreateRequest, TransactionRequest
from rtl_api.utils.dev_config import dev_config
from rtl_api.utils.state import doc_lock, get_state, list_documents, update_state, now_iso
from rtl_core.block_2_attributes.b2f1_direction_attrs import SOURCES, parse_html_dir
from rtl_core.block_2_attributes.b2f2_doc_tree import empty_doc
from rtl_core.kernel.b0f2_options import resolve_options
from rtl_runtime.loop.edit_tick import read_view, run_edit_tick

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])


def require_state(doc_id: str) -> Dict[str, Any]:
    state = get_state(doc_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"document {doc_id!r} not found")
    return state


def doc_view(state: Dict[str, Any]) -> Dict[str, Any]:
    editor = state.get("editor") or {}
    return {
        "doc_id": state.get("doc_id"),
        "doc": editor.get("doc"),
        "selection": editor.get("selection"),
        "options": state.get("options"),
        "updated_at": state.get("updated_at"),
    }


def import_doc(node: Dict[str, Any]) -> Dict[str, Any]:
    """
    Block `dir` attributes that arrive without a known provenance (pasted HTML,
    older saves) are read like an HTML dir attribute.
    """
    out = dict(node)
    attrs = node.get("attrs")
    if (node.get("type") != "doc" and isinstance(attrs, dict) and "dir" in attrs
            and attrs.get("dirSource") not in SOURCES):
        out["attrs"] = {**attrs, **parse_html_dir(attrs)}
    if isinstance(node.get("content"), list):
        out["content"] = [import_doc(c) if isinstance(c, dict) else c for c in node["content"]]
    return out


@router.post("/", response_model=dict)
def create_document(req: DocumentCreateRequest):
    """Create a document; its initial content goes through reconciliation like any load."""
    with doc_lock(req.doc_id):
        if get_state(req.doc_id) is not None:
            raise HTTPException(status_code=409, detail=f"document {req.doc_id!r} already exists")

        options = dev_config()
        if req.options is not None:
            options.update(req.options.model_dump(exclude_none=True))
        options = resolve_options({"options": options})

        state = {
            "doc_id": req.doc_id,
            "options": options,
            "editor": {"doc": empty_doc(), "selection": {"from": 1, "to": 1}, "history": []},
        }
        reconcile_error = None
        if req.doc is not None:
            load = {"op": "replace_doc", "doc": import_doc(req.doc)}
            res = run_edit_tick(state, {"origin": "load", "steps": [load]})
            if not res["ok"]:
                return {"ok": False, "doc_id": req.doc_id, "reason": res["reason"], "error": res.get("error")}
            state = res["state"]
            reconcile_error = res.get("reconcile_error")

        state["updated_at"] = now_iso()
        update_state(req.doc_id, state)
    logger.info(f"Created document {req.doc_id}")
    return {"ok": True, **doc_view(state), "reconcile_error": reconcile_error}


@router.get("/", response_model=dict)
def documents_index(limit: int = 100):
    return {"ok": True, "documents": list_documents(limit)}


@router.get("/{doc_id}", response_model=dict)
def get_document(doc_id: str):
    return {"ok": True, **doc_view(require_state(doc_id))}


@router.post("/{doc_id}/transactions", response_model=dict)
def apply_transaction(doc_id: str, req: TransactionRequest):
    """Apply one host transaction; reconciliation runs in the same step."""
    tr = {"origin": req.origin, "steps": [s.model_dump(exclude_none=True) for s in req.steps]}
    with doc_lock(doc_id):
        state = require_state(doc_id)
        res = run_edit_tick(state, tr)
        if not res["ok"]:
            return {"ok": False, "doc_id": doc_id, "reason": res["reason"], "error": res.get("error")}

        new_state = res["state"]
        if req.selection is not None:
            new_state["editor"]["selection"] = {"from": req.selection.from_, "to": req.selection.to}
        new_state["updated_at"] = now_iso()
        update_state(doc_id, new_state)
    return {"ok": True, **doc_view(new_state), "reconcile": res["reconcile"],
            "reconcile_error": res.get("reconcile_error")}


@router.get("/{doc_id}/decorations", response_model=dict)
def decorations(doc_id: str):
    """Render-only auto-detected directions, recomputed on every call."""
    view = read_view(require_state(doc_id), "b4f1_auto_decorations")
    overlay = view.get("overlay") or {}
    return {"ok": True, "doc_id": doc_id, "decorations": overlay.get("decorations", [])}


@router.get("/{doc_id}/directions", response_model=dict)
def directions(doc_id: str):
    view = read_view(require_state(doc_id), "b4f2_rendered_directions")
    overlay = view.get("overlay") or {}
    return {
        "ok": True,
        "doc_id": doc_id,
        "document": overlay.get("document", {}),
        "blocks": overlay.get("blocks", []),
    }
