import pytest

from core import config
from core.exceptions import ConfigurationError
from core.logging_config import build_logging_config


def test_validate_settings_requires_openai_key(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        config.validate_settings()


def test_validate_settings_requires_stripe_key_for_mode(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(config, "STRIPE_MODE", "live")
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", None)
    with pytest.raises(ConfigurationError, match="STRIPE_LIVE_SECRET_KEY"):
        config.validate_settings()


def test_validate_settings_rejects_unknown_mode(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(config, "STRIPE_MODE", "sandbox")
    with pytest.raises(ConfigurationError):
        config.validate_settings()


def test_validate_settings_passes(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(config, "STRIPE_MODE", "test")
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_123")
    config.validate_settings()


def test_logging_config_adds_file_handler(tmp_path):
    assert list(build_logging_config(log_dir=None)["handlers"]) == ["console"]

    cfg = build_logging_config(level="DEBUG", log_dir=str(tmp_path / "logs"))
    assert set(cfg["handlers"]) == {"console", "file"}
    assert cfg["root"]["level"] == "DEBUG"
    assert (tmp_path / "logs").is_dir()
