from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    include_profiles: bool = True
    log_level: str = "INFO"
    log_path: Path = Path.home() / ".civic_admin.log"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def load_settings() -> Settings:
    """Read settings from the environment (and ``.env`` when present)."""
    supabase_key = (
        os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        or os.getenv("SUPABASE_KEY")
        or os.getenv("SUPABASE_ANON_KEY")
    )
    log_path = os.getenv("CIVIC_ADMIN_LOG_PATH")
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=supabase_key,
        include_profiles=_env_flag("CIVIC_ADMIN_INCLUDE_PROFILES", True),
        log_level=(os.getenv("CIVIC_ADMIN_LOG_LEVEL") or "INFO").upper(),
        log_path=Path(log_path).expanduser() if log_path else Path.home() / ".civic_admin.log",
    )


def configure_logging(level: str = "INFO", log_path: Optional[Path] = None) -> None:
    """
    Install the application's root handler, replacing one installed earlier.

    The terminal dashboard passes ``log_path`` so log lines go to a file
    instead of the screen Textual is drawing on.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_civic_admin", False):
            root.removeHandler(existing)
            existing.close()

    if log_path is not None:
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler._civic_admin = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
