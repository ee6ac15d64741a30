from __future__ import annotations
import json
import logging
from typing import Any, Optional
from sqlalchemy import text as sql_text

logger = logging.getLogger(__name__)

def get(engine, client_id: str, key: str) -> Optional[Any]:
    """Return the decoded value stored under (client_id, key), or None."""
    with engine.begin() as conn:
        row = conn.execute(sql_text(
            "SELECT value_json FROM client_storage WHERE client_id=:c AND storage_key=:k"
        ), dict(c=client_id, k=key)).fetchone()
    if not row:
        return None
    try:
        return json.loads(row[0])
    except ValueError:
        logger.warning("Discarding unreadable storage value %s/%s", client_id, key)
        return None

def save(engine, client_id: str, key: str, value: Any) -> None:
    with engine.begin() as conn:
        conn.execute(sql_text("""
            INSERT INTO client_storage (client_id, storage_key, value_json)
            VALUES (:c, :k, :v)
            ON CONFLICT(client_id, storage_key) DO UPDATE
            SET value_json=excluded.value_json, updated_at=CURRENT_TIMESTAMP
        """), dict(c=client_id, k=key, v=json.dumps(value, ensure_ascii=False)))

def remove(engine, client_id: str, key: str) -> bool:
    with engine.begin() as conn:
        res = conn.execute(sql_text(
            "DELETE FROM client_storage WHERE client_id=:c AND storage_key=:k"
        ), dict(c=client_id, k=key))
    return bool(res.rowcount)

def clear(engine, client_id: str) -> int:
    """Drop every key held for one client."""
    with engine.begin() as conn:
        res = conn.execute(sql_text(
            "DELETE FROM client_storage WHERE client_id=:c"
        ), dict(c=client_id))
    return int(res.rowcount or 0)
