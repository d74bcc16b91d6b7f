"""API request models."""

from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.constants import DEFAULT_LIMIT, DEFAULT_PAGE, STDIN_EXTENSION, STDIN_FILENAME
from core.exceptions import ValidationError
from core.types import ListKind, SortKey

M = TypeVar("M", bound=BaseModel)


def build_request(model: type[M], **data: Any) -> M:
    """Construct a request model, reporting failures as ValidationError."""
    try:
        return model(**data)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid {model.__name__}: {details}") from e


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class UploadRequest(BaseModel):
    """Request model for uploading a file or piped text."""

    content: bytes = Field(..., description="Raw bytes to upload")
    filename: str = Field(..., min_length=1, description="Name stored with the paste")
    ext: str | None = Field(default=None, description="File extension without dot")
    expires: str | None = Field(default=None, description="Expiry duration")
    private: bool = Field(default=False, description="Hide the paste from listings")

    @field_validator("ext", "expires", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("ext")
    @classmethod
    def strip_leading_dot(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.lstrip(".") or None

    @classmethod
    def from_path(
        cls,
        path: Path,
        filename: str | None = None,
        ext: str | None = None,
        expires: str | None = None,
        private: bool = False,
    ) -> "UploadRequest":
        """Read a file fully and build an upload request for it.

        The stored filename defaults to the file's basename and the extension
        to its suffix; explicit values override both.

        Raises:
            ValidationError: If the file cannot be read
        """
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ValidationError(f"Could not read file {path}: {e}") from e

        return build_request(
            cls,
            content=content,
            filename=filename or path.name,
            ext=ext or path.suffix.lstrip(".") or None,
            expires=expires,
            private=private,
        )

    @classmethod
    def from_stdin(
        cls,
        content: bytes,
        filename: str | None = None,
        ext: str | None = None,
        expires: str | None = None,
        private: bool = False,
    ) -> "UploadRequest":
        """Build an upload request for content read from standard input."""
        return build_request(
            cls,
            content=content,
            filename=filename or STDIN_FILENAME,
            ext=ext or STDIN_EXTENSION,
            expires=expires,
            private=private,
        )

    def query_params(self) -> dict[str, str]:
        """Query parameters sent alongside the raw body."""
        params = {"filename": self.filename}
        if self.ext:
            params["ext"] = self.ext
        if self.expires:
            params["expires"] = self.expires
        if self.private:
            params["private"] = "true"
        return params


class ShortenRequest(BaseModel):
    """Request model for shortening a URL."""

    url: str = Field(..., description="Target URL to shorten")
    title: str | None = Field(default=None, description="Optional title")
    expires: str | None = Field(default=None, description="Expiry duration")

    @field_validator("title", "expires", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        parsed = urlparse(value.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"'{value}' is not a valid http(s) URL")
        return value.strip()

    def payload(self) -> dict[str, str]:
        """JSON body with empty optional fields omitted."""
        return self.model_dump(exclude_none=True)


class ListQuery(BaseModel):
    """Request model for listing pastes or URLs."""

    kind: ListKind = Field(..., description="Whether to list pastes or urls")
    page: int = Field(default=DEFAULT_PAGE, ge=1, description="Page number")
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, description="Items per page")
    sort: SortKey = Field(default=SortKey.CREATED_AT, description="Sort key")

    def query_params(self) -> dict[str, str]:
        return {
            "page": str(self.page),
            "limit": str(self.limit),
            "sort": self.sort.value,
        }


class KeyRequest(BaseModel):
    """Request model for asking the service for a new API key."""

    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1)


class ExpirationUpdateRequest(BaseModel):
    """Request model for changing when a shortened URL expires."""

    expires_in: str = Field(..., min_length=1, description="New expiry duration")
