from __future__ import annotations

import pytest

from s3util.common import config
from s3util.common.config import Settings, get_settings


def test_defaults():
    settings = Settings.from_environment()

    assert settings.S3_REGION == "us-east-1"
    assert settings.S3_ACCESS_KEY_ID is None
    assert settings.S3_ENDPOINT_URL is None
    assert settings.S3_USE_SSL is True
    assert settings.ENABLE_METRICS is True
    assert settings.LOG_FORMAT == "json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("S3_REGION", "us-west-2")
    monkeypatch.setenv("S3_ACCESS_KEY_ID", "key")
    monkeypatch.setenv("S3_SECRET_ACCESS_KEY", "secret")
    monkeypatch.setenv("S3_ENDPOINT_URL", "http://localhost:9000")
    monkeypatch.setenv("S3_ADDRESSING_STYLE", "PATH")
    monkeypatch.setenv("S3_USE_SSL", "false")
    monkeypatch.setenv("ENABLE_METRICS", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "plain")

    settings = Settings.from_environment()

    assert settings.S3_REGION == "us-west-2"
    assert settings.S3_ACCESS_KEY_ID == "key"
    assert settings.S3_SECRET_ACCESS_KEY == "secret"
    assert settings.S3_ENDPOINT_URL == "http://localhost:9000"
    assert settings.S3_ADDRESSING_STYLE == "path"
    assert settings.S3_USE_SSL is False
    assert settings.ENABLE_METRICS is False
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "plain"


def test_blank_values_are_unset(monkeypatch):
    monkeypatch.setenv("S3_ENDPOINT_URL", "   ")

    assert Settings.from_environment().S3_ENDPOINT_URL is None


def test_env_file_does_not_override_environment(monkeypatch):
    config.ENV_FILE.write_text(
        "# local overrides\n"
        "S3_REGION='eu-west-1'\n"
        'S3_ACCESS_KEY_ID="file-key"\n'
        "not a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("S3_ACCESS_KEY_ID", "env-key")

    settings = Settings.from_environment()

    assert settings.S3_REGION == "eu-west-1"
    assert settings.S3_ACCESS_KEY_ID == "env-key"


def test_secret_not_in_repr():
    settings = Settings(S3_ACCESS_KEY_ID="key", S3_SECRET_ACCESS_KEY="hunter2")

    assert "hunter2" not in repr(settings)


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"S3_ADDRESSING_STYLE": "sideways"}, "S3_ADDRESSING_STYLE"),
        ({"LOG_FORMAT": "xml"}, "LOG_FORMAT"),
        ({"S3_REGION": ""}, "S3_REGION"),
    ],
)
def test_invalid_values(kwargs, message):
    with pytest.raises(ValueError, match=message):
        Settings(**kwargs)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
