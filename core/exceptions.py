"""Custom exceptions for the 0x45 client."""


class Ox45Error(Exception):
    """Base exception for all 0x45 client errors."""

    pass


class ConfigurationError(Ox45Error):
    """Raised when a required setting is missing or the config file is unusable."""

    pass


class ValidationError(Ox45Error):
    """Raised when a locally checked constraint is violated."""

    pass


class TransportError(Ox45Error):
    """Raised when the HTTP call itself fails."""

    pass


class TransportTimeoutError(TransportError):
    """Raised when an HTTP call times out."""

    pass


class RemoteError(Ox45Error):
    """Raised when the service answers with a non-success status."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(Ox45Error):
    """Raised when a success response does not match the expected shape."""

    pass
