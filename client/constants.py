"""Constants for the 0x45 API client."""

from typing import Final

# Endpoint paths, relative to the configured base URL
UPLOAD_PATH: Final[str] = "/upload"
SHORTEN_PATH: Final[str] = "/shorten"
PASTES_PATH: Final[str] = "/pastes"
URLS_PATH: Final[str] = "/urls"
API_KEY_PATH: Final[str] = "/api-key"
DELETE_PATH: Final[str] = "/{delete_id}"
URL_STATS_PATH: Final[str] = "/url/{url_id}/stats"
URL_EXPIRE_PATH: Final[str] = "/url/{url_id}/expire"

# HTTP constants
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "0x45-cli/1.0 (https://0x45.st)"

# Error messages
ERROR_API_KEY_REQUIRED = (
    "API key required for {}. Set it with: 0x45 config set api_key <your-key>"
)
ERROR_PRIVATE_REQUIRES_KEY = "Private uploads require an API key"
