"""domainstatus - in-memory HTTP registry of per-domain status histories."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("domainstatus")
except PackageNotFoundError:
    __version__ = "0+local"
from domainstatus.config import ServerConfig
from domainstatus.exceptions import ConfigError, SerializationError, StatusRegistryError
from domainstatus.models import StatusUpdate, UpdateRequest, format_timestamp, is_valid_domain, parse_timestamp
from domainstatus.store import StatusStore
from domainstatus.sweeper import RetentionSweeper

__all__ = [
    "__version__",
    "ConfigError",
    "RetentionSweeper",
    "SerializationError",
    "ServerConfig",
    "StatusRegistryError",
    "StatusStore",
    "StatusUpdate",
    "UpdateRequest",
    "format_timestamp",
    "is_valid_domain",
    "parse_timestamp",
]
