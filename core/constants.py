"""Application constants and configuration values."""

from typing import Final

# Service defaults
DEFAULT_API_URL: Final[str] = "https://0x45.st"

# Environment variables share this prefix (OX45_API_KEY, OX45_API_URL, ...)
ENV_PREFIX: Final[str] = "OX45_"
API_KEY_ENV_VAR: Final[str] = "OX45_API_KEY"

# Config file locations, relative to the user's home directory
CONFIG_FILE_NAME: Final[str] = ".0x45.yaml"
CONFIG_SUBDIR: Final[tuple[str, ...]] = (".config", "0x45")
CONFIG_SUBDIR_FILE_NAME: Final[str] = "config.yaml"

# Expiry limits in days
MAX_EXPIRY_DAYS_WITHOUT_KEY: Final[int] = 128
MAX_EXPIRY_DAYS_WITH_KEY: Final[int] = 730

# List defaults
DEFAULT_PAGE: Final[int] = 1
DEFAULT_LIMIT: Final[int] = 10

# Stdin uploads
STDIN_FILENAME: Final[str] = "paste.txt"
STDIN_EXTENSION: Final[str] = "txt"

# Date format used when printing timestamps
DISPLAY_DATE_FORMAT: Final[str] = "%Y-%m-%d"
