import logging
from pathlib import Path

from civic_admin.config import configure_logging, load_settings


def test_key_fallback_order(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")

    assert load_settings().supabase_key == "anon"

    monkeypatch.setenv("SUPABASE_KEY", "service")
    assert load_settings().supabase_key == "service"

    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "role")
    assert load_settings().supabase_key == "role"


def test_include_profiles_flag(monkeypatch):
    monkeypatch.delenv("CIVIC_ADMIN_INCLUDE_PROFILES", raising=False)
    assert load_settings().include_profiles is True

    monkeypatch.setenv("CIVIC_ADMIN_INCLUDE_PROFILES", "false")
    assert load_settings().include_profiles is False

    monkeypatch.setenv("CIVIC_ADMIN_INCLUDE_PROFILES", "maybe")
    assert load_settings().include_profiles is True


def test_log_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("CIVIC_ADMIN_LOG_LEVEL", "debug")
    monkeypatch.setenv("CIVIC_ADMIN_LOG_PATH", str(tmp_path / "admin.log"))

    settings = load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_path == Path(tmp_path / "admin.log")


def test_configure_logging_replaces_own_handler(tmp_path):
    root = logging.getLogger()
    foreign = [h for h in root.handlers if not getattr(h, "_civic_admin", False)]

    configure_logging("INFO")
    configure_logging("WARNING", tmp_path / "admin.log")

    ours = [h for h in root.handlers if getattr(h, "_civic_admin", False)]
    assert len(ours) == 1
    assert isinstance(ours[0], logging.FileHandler)
    assert len(root.handlers) == len(foreign) + 1
    assert root.level == logging.WARNING
