# ============================
# File: rtl_api/http_app.py
# ============================
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rtl_api.routes import commands, documents
from rtl_api.schemas.schemas import ClassifyRequest
from rtl_api.utils.dev_config import dev_config
from rtl_api.utils.state import list_documents
from rtl_runtime.adapters.registry import build_registry
from rtl_core.kernel.b0f1_kernel_step import b0f1_kernel_step

logger = logging.getLogger(__name__)

app = FastAPI(title="RTL Support Dev API", version="0.1.0")

# Allow all CORS origins (for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(documents.router)
app.include_router(commands.router)


@app.get("/health")
def health():
    docs = list_documents()
    return {"ok": True, "name": "rtlsupport-dev-api", "documents": len(docs), "options": dev_config()}


@app.post("/classify")
def classify(req: ClassifyRequest):
    state = {"classifier": {"texts": req.texts}}
    if req.rtl_threshold is not None:
        state["options"] = {"rtl_threshold": req.rtl_threshold}
    out = b0f1_kernel_step(state, build_registry(), order=["b1f1_classify"])
    classifier = out["state"].get("classifier") or {}
    return {"ok": True, "results": classifier.get("results", []), "meta": classifier.get("meta", {})}


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run("rtl_api.http_app:app", host="0.0.0.0", port=8080, reload=True)
