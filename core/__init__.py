"""Core functionality for the 0x45 client."""

from .config import Configuration, Settings, default_config_path
from .exceptions import (
    ConfigurationError,
    DecodeError,
    Ox45Error,
    RemoteError,
    TransportError,
    TransportTimeoutError,
    ValidationError,
)
from .log import (
    get_logger,
    set_log_level,
    setup_logging,
    setup_test_logging,
)
from .types import ConfigKey, ListKind, SortKey

__all__ = [
    "ConfigKey",
    "Configuration",
    "ConfigurationError",
    "DecodeError",
    "ListKind",
    "Ox45Error",
    "RemoteError",
    "Settings",
    "SortKey",
    "TransportError",
    "TransportTimeoutError",
    "ValidationError",
    "default_config_path",
    "get_logger",
    "set_log_level",
    "setup_logging",
    "setup_test_logging",
]
