"""Unit tests for settings and logging setup."""

import logging

from permatrix.config import Settings
from permatrix.logging_config import build_logging_config, configure_logging


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("PROTECTED_ROLES", raising=False)
    settings = Settings(_env_file=None)
    assert settings.manage_permission == "roles.editar"
    assert settings.protected_role_names == {"super_admin", "administrador", "empleado"}
    assert settings.cors_origin_list == ["http://localhost:5173"]


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("SUPER_ADMIN_ROLE", "root")
    settings = Settings(_env_file=None)
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]
    assert settings.super_admin_role == "root"


def test_debug_forces_debug_level() -> None:
    config = build_logging_config(Settings(_env_file=None, debug=True))
    assert config["loggers"]["permatrix"]["level"] == "DEBUG"


def test_configure_logging_sets_level() -> None:
    configure_logging(Settings(_env_file=None, log_level="warning"))
    assert logging.getLogger("permatrix").level == logging.WARNING
