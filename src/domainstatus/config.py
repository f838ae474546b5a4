"""Server configuration for domainstatus."""

from __future__ import annotations

import dataclasses
import os
from datetime import timedelta
from typing import Any

from domainstatus._constants import (
    DEFAULT_HOST,
    DEFAULT_MAX_AGE_S,
    DEFAULT_PORT,
    DEFAULT_SWEEP_INTERVAL_S,
    MAX_BODY_BYTES,
)
from domainstatus.exceptions import ConfigError


def _env_seconds(name: str, value: str) -> timedelta:
    try:
        seconds = float(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number of seconds, got {value!r}") from exc
    if seconds <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return timedelta(seconds=seconds)


@dataclasses.dataclass(frozen=True)
class ServerConfig:
    """Server configuration.

    Parameters
    ----------
    host : str
        Interface to bind.
    port : int
        TCP port to listen on.
    sweep_interval : timedelta
        Delay between retention sweeps.
    max_age : timedelta
        Updates older than this are removed by the sweep.
    max_body_bytes : int
        Upper bound on ``POST /update`` request bodies.
    log_level : str
        Root log level applied by :func:`domainstatus.server.run`.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    sweep_interval: timedelta = timedelta(seconds=DEFAULT_SWEEP_INTERVAL_S)
    max_age: timedelta = timedelta(seconds=DEFAULT_MAX_AGE_S)
    max_body_bytes: int = MAX_BODY_BYTES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, **overrides: Any) -> ServerConfig:
        """Create configuration from ``DOMAINSTATUS_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        ConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        host = env.get("DOMAINSTATUS_HOST")
        if host is not None:
            config_kwargs["host"] = host

        port_env = env.get("DOMAINSTATUS_PORT")
        if port_env is not None and "port" not in overrides:
            try:
                config_kwargs["port"] = int(port_env)
            except ValueError as exc:
                raise ConfigError(f"DOMAINSTATUS_PORT must be an integer, got {port_env!r}") from exc

        interval_env = env.get("DOMAINSTATUS_SWEEP_INTERVAL")
        if interval_env is not None and "sweep_interval" not in overrides:
            config_kwargs["sweep_interval"] = _env_seconds("DOMAINSTATUS_SWEEP_INTERVAL", interval_env)

        max_age_env = env.get("DOMAINSTATUS_MAX_AGE")
        if max_age_env is not None and "max_age" not in overrides:
            config_kwargs["max_age"] = _env_seconds("DOMAINSTATUS_MAX_AGE", max_age_env)

        level = env.get("DOMAINSTATUS_LOG_LEVEL")
        if level is not None:
            config_kwargs["log_level"] = level.strip().upper()

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
