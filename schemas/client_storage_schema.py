# schemas/client_storage_schema.py
"""
Durable client-side storage (the dashboard's localStorage).
One JSON value per (client_id, storage_key). Safe to run multiple times.
"""
from __future__ import annotations
import logging
from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine

from core.schema_registry import register

logger = logging.getLogger(__name__)


@register("client_storage")
def install_client_storage(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS client_storage (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id TEXT NOT NULL,
            storage_key TEXT NOT NULL,
            value_json TEXT NOT NULL,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(client_id, storage_key)
        )"""))
        conn.execute(sa_text(
            "CREATE INDEX IF NOT EXISTS ix_client_storage_client ON client_storage(client_id)"
        ))
    logger.info("✓ Installed client_storage")
