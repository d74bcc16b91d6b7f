"""0x45 API client module."""

from .client import Ox45Client

__all__ = [
    "Ox45Client",
]
