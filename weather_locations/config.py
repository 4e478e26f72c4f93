"""Configuration loader and typed config objects."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict
import os
import yaml


@dataclass(frozen=True)
class AppSection:
    name: str
    env: str
    data_dir: Path
    journal_dir: Path


@dataclass(frozen=True)
class StoreSection:
    provider: str
    base_url: str
    timeout_seconds: float
    max_retries: int
    backoff_factor: float


@dataclass(frozen=True)
class SessionSection:
    user_id: str


@dataclass(frozen=True)
class LoggingSection:
    level: str
    log_jsonl: bool


@dataclass(frozen=True)
class AppConfig:
    app: AppSection
    store: StoreSection
    session: SessionSection
    logging: LoggingSection

    def resolve_paths(self, project_root: Path) -> "AppConfig":
        """Return a copy with app paths resolved to absolute paths."""
        app = self.app
        resolved = replace(
            app,
            data_dir=(project_root / app.data_dir).resolve() if not app.data_dir.is_absolute() else app.data_dir,
            journal_dir=(project_root / app.journal_dir).resolve()
            if not app.journal_dir.is_absolute()
            else app.journal_dir,
        )
        return replace(self, app=resolved)


_PROVIDERS = {"http", "memory"}


def _load_env() -> None:
    """Load .env unless DISABLE_DOTENV is set."""
    if os.getenv("DISABLE_DOTENV"):
        return
    from dotenv import load_dotenv

    if Path(".env").exists():
        load_dotenv(dotenv_path=Path(".env"), override=False)


def _require_section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    if key not in cfg or not isinstance(cfg[key], dict):
        raise ValueError(f"Missing or invalid config section: {key}")
    return cfg[key]


def load_config(config_path: str = "configs/config.yaml") -> AppConfig:
    """Load YAML config, apply env overrides, return typed AppConfig."""
    _load_env()

    path = Path(config_path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")

    app_cfg = _require_section(data, "app")
    store_cfg = _require_section(data, "store")
    session_cfg = _require_section(data, "session")
    logging_cfg = _require_section(data, "logging")

    # Environment overrides
    base_url = os.getenv("LOCATION_STORE_URL", "") or str(store_cfg.get("base_url", ""))
    provider = os.getenv("LOCATION_STORE_PROVIDER", "") or str(store_cfg.get("provider", "http"))
    user_id = os.getenv("WEATHER_USER_ID", "") or str(session_cfg.get("user_id", "") or "")
    level = os.getenv("LOG_LEVEL", "") or str(logging_cfg.get("level", "INFO"))

    if provider not in _PROVIDERS:
        raise ValueError(f"Unknown store provider: {provider} (expected one of {sorted(_PROVIDERS)})")

    app = AppSection(
        name=str(app_cfg.get("name", "weather_locations")),
        env=str(app_cfg.get("env", "dev")),
        data_dir=Path(str(app_cfg.get("data_dir", "data"))),
        journal_dir=Path(str(app_cfg.get("journal_dir", "data/journal"))),
    )

    store = StoreSection(
        provider=provider,
        base_url=base_url,
        timeout_seconds=float(store_cfg.get("timeout_seconds", 10)),
        max_retries=int(store_cfg.get("max_retries", 2)),
        backoff_factor=float(store_cfg.get("backoff_factor", 0.5)),
    )

    session = SessionSection(user_id=user_id)

    logging = LoggingSection(
        level=level.upper(),
        log_jsonl=bool(logging_cfg.get("log_jsonl", True)),
    )

    return AppConfig(app=app, store=store, session=session, logging=logging)
