"""Common type definitions for the 0x45 client."""

from enum import Enum


class ConfigKey(str, Enum):
    """Keys recognised in the configuration file."""

    API_URL = "api_url"
    API_KEY = "api_key"
    DEFAULT_EXPIRY = "default_expiry"


class ListKind(str, Enum):
    """Kinds of content that can be listed."""

    PASTES = "pastes"
    URLS = "urls"


class SortKey(str, Enum):
    """Sort keys accepted by the listing endpoints."""

    CREATED_AT = "created_at"
    EXPIRES_AT = "expires_at"
    CLICKS = "clicks"
