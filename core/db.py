# core/db.py
from __future__ import annotations
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from core.schema_registry import auto_discover, run_all

def get_engine(db_url: str) -> Engine:
    if db_url.startswith("sqlite:///") and db_url != "sqlite:///:memory:":
        db_file = db_url.replace("sqlite:///", "")
        Path(db_file).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(db_url, future=True)
    return engine

def init_db(engine: Engine) -> None:
    # 1) import schemas/*.py so their installers register
    auto_discover("schemas")

    # 2) run all registered installers (idempotent DDL)
    run_all(engine)
