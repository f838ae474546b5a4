"""Custom exception hierarchy for domainstatus."""

from __future__ import annotations


class StatusRegistryError(Exception):
    """Base exception for all domainstatus errors."""


class ConfigError(StatusRegistryError):
    """Invalid configuration value."""


class SerializationError(StatusRegistryError):
    """Store contents could not be rendered for a response.

    The data model is plain strings, so this indicates a bug rather than
    bad input.
    """
