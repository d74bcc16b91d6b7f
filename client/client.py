"""0x45 API client for pastes and shortened URLs."""

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core import get_logger
from core.config import Settings
from core.constants import DEFAULT_API_URL
from core.exceptions import (
    ConfigurationError,
    DecodeError,
    RemoteError,
    TransportError,
    TransportTimeoutError,
    ValidationError,
)
from core.models import (
    DataEnvelope,
    DeleteResult,
    ExpirationUpdateRequest,
    KeyRequest,
    KeyResult,
    ListQuery,
    ListResult,
    PasteListItem,
    ShortenRequest,
    ShortenResult,
    UploadRequest,
    UploadResult,
    UrlListItem,
    UrlStats,
)
from core.types import ListKind
from core.utils import validate_expiry

from .constants import (
    API_KEY_PATH,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    DELETE_PATH,
    ERROR_API_KEY_REQUIRED,
    ERROR_PRIVATE_REQUIRES_KEY,
    PASTES_PATH,
    SHORTEN_PATH,
    UPLOAD_PATH,
    URL_EXPIRE_PATH,
    URL_STATS_PATH,
    URLS_PATH,
)

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class Ox45Client:
    """Client for the 0x45 paste and URL shortening service.

    Every public method performs exactly one HTTP round trip. Preconditions
    that can be checked locally (API key present, expiry within limits) are
    checked before any request is sent.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the service
            api_key: Bearer API key, if any
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key or None
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": DEFAULT_USER_AGENT},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "Ox45Client":
        """Create a client from resolved settings."""
        return cls(base_url=settings.api_url, api_key=settings.api_key, **kwargs)

    def __enter__(self) -> "Ox45Client":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None

    def _require_api_key(self, operation: str) -> None:
        if not self.has_api_key:
            raise ConfigurationError(ERROR_API_KEY_REQUIRED.format(operation))

    def _check_expiry(self, expires: str | None) -> None:
        if expires:
            validate_expiry(expires, self.has_api_key)

    def _request(
        self,
        method: str,
        path: str,
        authenticated: bool = True,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request and return the response if its status is 2xx.

        Raises:
            TransportTimeoutError: If the request times out
            TransportError: If the request could not be sent
            RemoteError: If the service answers with a non-success status
        """
        request_headers = dict(headers or {})
        if authenticated and self.api_key:
            request_headers["Authorization"] = f"Bearer {self.api_key}"

        logger.info(f"{method} {self.base_url}{path}")

        try:
            response = self.client.request(
                method, path, headers=request_headers, **kwargs
            )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout during {method} {path}")
            raise TransportTimeoutError(f"Request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error during {method} {path}: {e}")
            raise TransportError(f"Request failed: {e}") from e

        if not response.is_success:
            body = response.text.strip()
            logger.error(f"HTTP {response.status_code} from {method} {path}")
            raise RemoteError(
                f"Request failed: {response.status_code} "
                f"{response.reason_phrase}: {body}",
                status_code=response.status_code,
                body=body,
            )

        logger.debug(f"Response body: {response.text}")
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response is not valid JSON: {e}") from e

    def _decode(self, response: httpx.Response, model: type[M]) -> M:
        """Decode a success response into ``model``.

        Raises:
            DecodeError: If the body is not JSON or does not fit the model
        """
        payload = self._json(response)
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Unexpected response shape for {model.__name__}: {e}"
            ) from e

    def _decode_data(self, response: httpx.Response, model: type[M]) -> M:
        """Decode a ``{"success": ..., "data": ...}`` envelope and return its data.

        Raises:
            RemoteError: If the envelope reports ``success: false``
            DecodeError: If the body does not fit the envelope
        """
        payload = self._json(response)
        if isinstance(payload, dict) and payload.get("success") is False:
            message = payload.get("error") or payload.get("message") or "unknown error"
            raise RemoteError(
                f"Request was not successful: {message}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            envelope = DataEnvelope[model].model_validate(payload)  # type: ignore[valid-type]
        except PydanticValidationError as e:
            raise DecodeError(
                f"Unexpected response shape for {model.__name__}: {e}"
            ) from e

        return envelope.data

    def check_upload(self, private: bool, expires: str | None) -> None:
        """Check upload preconditions without sending anything.

        Raises:
            ConfigurationError: If a private upload is requested without an API key
            ValidationError: If the expiry is invalid or too long
        """
        if private and not self.has_api_key:
            raise ConfigurationError(ERROR_PRIVATE_REQUIRES_KEY)
        self._check_expiry(expires)

    def upload(self, request: UploadRequest) -> UploadResult:
        """Upload file content as a new paste.

        Args:
            request: Upload content and options

        Returns:
            The created paste

        Raises:
            ConfigurationError: If a private upload is requested without an API key
            ValidationError: If the expiry is invalid or too long
        """
        self.check_upload(private=request.private, expires=request.expires)

        logger.info(f"Uploading {request.filename} ({len(request.content)} bytes)")
        response = self._request(
            "POST",
            UPLOAD_PATH,
            params=request.query_params(),
            content=request.content,
            headers={"Content-Type": "application/octet-stream"},
        )
        return self._decode_data(response, UploadResult)

    def shorten(self, request: ShortenRequest) -> ShortenResult:
        """Create a short URL.

        Raises:
            ConfigurationError: If no API key is configured
            ValidationError: If the expiry is invalid or too long
        """
        self._require_api_key("shortening URLs")
        self._check_expiry(request.expires)

        response = self._request("POST", SHORTEN_PATH, json=request.payload())
        return self._decode_data(response, ShortenResult)

    def list_items(
        self, query: ListQuery
    ) -> ListResult[PasteListItem] | ListResult[UrlListItem]:
        """Fetch one page of pastes or shortened URLs.

        Raises:
            ConfigurationError: If no API key is configured
        """
        self._require_api_key(f"listing {query.kind.value}")

        if query.kind == ListKind.PASTES:
            path, item_model = PASTES_PATH, PasteListItem
        else:
            path, item_model = URLS_PATH, UrlListItem

        response = self._request("GET", path, params=query.query_params())
        return self._decode_data(response, ListResult[item_model])  # type: ignore[valid-type]

    def delete(self, delete_id: str) -> DeleteResult:
        """Delete a paste or shortened URL by its delete ID.

        Raises:
            ConfigurationError: If no API key is configured
            ValidationError: If the delete ID is empty
        """
        self._require_api_key("deleting content")
        delete_id = delete_id.strip()
        if not delete_id:
            raise ValidationError("Delete ID must not be empty")

        response = self._request(
            "DELETE", DELETE_PATH.format(delete_id=quote(delete_id, safe=""))
        )
        if not response.content.strip():
            return DeleteResult(success=True)
        return self._decode(response, DeleteResult)

    def request_api_key(self, request: KeyRequest) -> KeyResult:
        """Ask the service to issue a new API key.

        This request never carries an Authorization header.
        """
        response = self._request(
            "POST", API_KEY_PATH, authenticated=False, json=request.model_dump()
        )
        return self._decode(response, KeyResult)

    def get_url_stats(self, url_id: str) -> UrlStats:
        """Fetch click statistics for a shortened URL.

        Raises:
            ConfigurationError: If no API key is configured
        """
        self._require_api_key("URL statistics")
        response = self._request(
            "GET", URL_STATS_PATH.format(url_id=quote(url_id.strip(), safe=""))
        )
        return self._decode_data(response, UrlStats)

    def update_url_expiration(self, url_id: str, expires: str) -> ShortenResult:
        """Change when a shortened URL expires.

        Raises:
            ConfigurationError: If no API key is configured
            ValidationError: If the expiry is invalid or too long
        """
        self._require_api_key("updating URL expiration")
        self._check_expiry(expires)

        body = ExpirationUpdateRequest(expires_in=expires)
        response = self._request(
            "PUT",
            URL_EXPIRE_PATH.format(url_id=quote(url_id.strip(), safe="")),
            json=body.model_dump(),
        )
        return self._decode_data(response, ShortenResult)
