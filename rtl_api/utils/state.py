# rtl_api/utils/state.py

import os, sqlite3, json, threading
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

DB_PATH = os.getenv("RTLSUPPORT_DB", "rtlsupport_state.db")
_CONN_LOCK = threading.Lock()
_STATE_CACHE: dict[str, dict] = {}
_DOC_LOCKS: dict[str, threading.Lock] = {}
_DOC_LOCKS_GUARD = threading.Lock()


def now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _conn():
    conn = sqlite3.connect(DB_PATH, check_same_thread=False)
    conn.execute("PRAGMA journal_mode = WAL")
    conn.execute("""
    CREATE TABLE IF NOT EXISTS document_state(
        doc_id      TEXT PRIMARY KEY,
        state_json  TEXT NOT NULL,
        updated_at  TEXT NOT NULL
    )
    """)
    return conn


def _load(doc_id: str) -> dict | None:
    with _CONN_LOCK:
        with _conn() as c:
            row = c.execute(
                "SELECT state_json FROM document_state WHERE doc_id=?",
                (doc_id,)
            ).fetchone()
    return json.loads(row[0]) if row else None


def _save(doc_id: str, state: dict) -> None:
    blob = json.dumps(state, ensure_ascii=False, separators=(",", ":"))
    ts = now_iso()
    with _CONN_LOCK:
        with _conn() as c:
            c.execute("""
            INSERT INTO document_state(doc_id, state_json, updated_at)
            VALUES (?,?,?)
            ON CONFLICT(doc_id) DO UPDATE SET
              state_json = excluded.state_json,
              updated_at = excluded.updated_at
            """, (doc_id, blob, ts))


def doc_lock(doc_id: str) -> threading.Lock:
    """One lock per document; hold it from read through save so edits run one at a time."""
    with _DOC_LOCKS_GUARD:
        lock = _DOC_LOCKS.get(doc_id)
        if lock is None:
            lock = _DOC_LOCKS[doc_id] = threading.Lock()
        return lock


def get_state(doc_id: str) -> dict | None:
    s = _STATE_CACHE.get(doc_id)
    if s is None:
        s = _load(doc_id)
        if s is not None:
            _STATE_CACHE[doc_id] = s
    return s


def update_state(doc_id: str, new_state: dict) -> None:
    _STATE_CACHE[doc_id] = new_state
    _save(doc_id, new_state)
    logger.debug(f"Saved state for {doc_id}")


def list_documents(limit: int = 100) -> list[dict]:
    with _CONN_LOCK:
        with _conn() as c:
            rows = c.execute(
                "SELECT doc_id, updated_at FROM document_state ORDER BY updated_at DESC LIMIT ?",
                (limit,)
            ).fetchall()
    seen = {doc_id for doc_id, _ in rows}
    docs = [{"doc_id": doc_id, "updated_at": ts} for (doc_id, ts) in rows]
    # in-memory databases do not survive between connections; the cache still knows
    docs.extend({"doc_id": d, "updated_at": None} for d in _STATE_CACHE if d not in seen)
    return docs[:limit]
