from __future__ import annotations
import yaml
from pathlib import Path
from pydantic import BaseModel, Field

class AppConfig(BaseModel):
    name: str = "Scholarship Portal"
    environment: str = "development"
    log_level: str = "INFO"

class ApiConfig(BaseModel):
    base_url: str
    folder_url: str = ""
    timeout_seconds: float = Field(default=15, gt=0)
    per_page: int = Field(default=10, gt=0)

class DBConfig(BaseModel):
    url: str

class Settings(BaseModel):
    app: AppConfig
    api: ApiConfig
    db: DBConfig

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return Settings(
        app=AppConfig(**(data.get("app") or {})),
        api=ApiConfig(**data["api"]),
        db=DBConfig(**data["db"]),
    )
