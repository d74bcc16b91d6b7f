"""API response models.

The service wraps payloads in an envelope: ``{"success": true, "data": {...}}``
for operations that return a record, and ``{"success": true, "message": "..."}``
for operations that only acknowledge.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

from core.utils import page_count

T = TypeVar("T")


class ResponseModel(BaseModel):
    """Base for service records.

    The service sends JSON null for optional fields it has no value for;
    those keys are dropped so the field default applies.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class DataEnvelope(BaseModel, Generic[T]):
    """Envelope around a single record or page."""

    success: bool = True
    data: T


class UploadResult(ResponseModel):
    """Response model for an uploaded paste."""

    id: str
    url: str
    raw_url: str = ""
    download_url: str = ""
    delete_url: str = ""
    filename: str = ""
    mime_type: str = ""
    size: int = 0
    private: bool = False
    created_at: datetime | None = None
    expires_at: datetime | None = None


class ShortenResult(ResponseModel):
    """Response model for a shortened URL."""

    id: str
    short_url: str
    url: str
    title: str | None = None
    delete_url: str = ""
    clicks: int = 0
    last_click: datetime | None = None
    created_at: datetime | None = None
    expires_at: datetime | None = None


class UrlStats(ResponseModel):
    """Response model for shortened URL statistics."""

    id: str
    url: str
    short_url: str = ""
    clicks: int = 0
    last_click: datetime | None = None
    created_at: datetime | None = None
    expires_at: datetime | None = None


class ListItemBase(ResponseModel):
    """Fields shared by paste and URL list entries."""

    id: str
    url: str = ""
    created_at: datetime | None = None
    expires_at: datetime | None = None
    delete_url: str = ""
    delete_id: str | None = None


class PasteListItem(ListItemBase):
    """A paste as shown in a listing."""

    filename: str = ""
    size: int = 0
    mime_type: str = ""
    private: bool = False
    raw_url: str = ""
    download_url: str = ""


class UrlListItem(ListItemBase):
    """A shortened URL as shown in a listing."""

    short_url: str = ""
    title: str | None = None
    clicks: int = 0
    last_click: datetime | None = None


class ListResult(ResponseModel, Generic[T]):
    """One page of a listing."""

    items: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def page_count(self) -> int:
        """Number of pages, derived from total and limit."""
        return page_count(self.total, self.limit)


class MessageResult(ResponseModel):
    """Acknowledgement carrying a success flag and optional message."""

    success: bool = True
    message: str | None = None
    error: str | None = None


class DeleteResult(MessageResult):
    """Response model for a delete request."""

    pass


class KeyResult(MessageResult):
    """Response model for an API key request."""

    pass
