import logging
from pathlib import Path

import pytest

from common.storefront_rules.settings import get_rules_settings


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("STOREFRONT_RULES_PATH", "/etc/rules.yaml")
    monkeypatch.setenv("STOREFRONT_RULES_LOG_LEVEL", "debug")
    settings = get_rules_settings()
    assert settings.rules_path == Path("/etc/rules.yaml")
    assert settings.log_level == logging.DEBUG


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("STOREFRONT_RULES_PATH", raising=False)
    monkeypatch.delenv("STOREFRONT_RULES_LOG_LEVEL", raising=False)
    settings = get_rules_settings()
    assert settings.rules_path is None
    assert settings.log_level == logging.WARNING


def test_settings_invalid_log_level(monkeypatch):
    monkeypatch.setenv("STOREFRONT_RULES_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="STOREFRONT_RULES_LOG_LEVEL"):
        get_rules_settings()
