"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from storefront.infrastructure.config import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("DATA_DIR", "LOG_LEVEL", "LOG_JSON", "CHECKOUT_MAX_RETRIES", "USER_ID"):
        monkeypatch.delenv(f"STOREFRONT_{name}", raising=False)

    settings = Settings()

    assert settings.data_dir == Path("data")
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.checkout_max_retries == 2
    assert settings.user_id is None


def test_reads_prefixed_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STOREFRONT_CHECKOUT_MAX_RETRIES", "5")
    monkeypatch.setenv("STOREFRONT_LOG_JSON", "true")

    settings = Settings()

    assert settings.data_dir == tmp_path
    assert settings.checkout_max_retries == 5
    assert settings.log_json is True


def test_negative_retries_rejected(monkeypatch):
    monkeypatch.setenv("STOREFRONT_CHECKOUT_MAX_RETRIES", "-1")
    with pytest.raises(ValidationError):
        Settings()
