from __future__ import annotations

from datetime import timedelta

import pytest

from domainstatus.config import ServerConfig
from domainstatus.exceptions import ConfigError


def test_defaults() -> None:
    config = ServerConfig()

    assert config.port == 8080
    assert config.sweep_interval == timedelta(hours=1)
    assert config.max_age == timedelta(hours=48)
    assert config.max_body_bytes == 1 << 20


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOMAINSTATUS_PORT", "9090")
    monkeypatch.setenv("DOMAINSTATUS_SWEEP_INTERVAL", "60")
    monkeypatch.setenv("DOMAINSTATUS_MAX_AGE", "3600")
    monkeypatch.setenv("DOMAINSTATUS_LOG_LEVEL", "debug")

    config = ServerConfig.from_env()

    assert config.port == 9090
    assert config.sweep_interval == timedelta(minutes=1)
    assert config.max_age == timedelta(hours=1)
    assert config.log_level == "DEBUG"


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOMAINSTATUS_PORT", "not-a-number")

    assert ServerConfig.from_env(port=1234).port == 1234


@pytest.mark.parametrize(
    ("name", "value"),
    [("DOMAINSTATUS_PORT", "eighty"), ("DOMAINSTATUS_SWEEP_INTERVAL", "-5"), ("DOMAINSTATUS_MAX_AGE", "soon")],
)
def test_invalid_numbers_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError):
        ServerConfig.from_env()
