"""Unified models package for the 0x45 client."""

# API models (request/response)
from core.models.api.requests import (
    ExpirationUpdateRequest,
    KeyRequest,
    ListQuery,
    ShortenRequest,
    UploadRequest,
    build_request,
)
from core.models.api.responses import (
    DataEnvelope,
    DeleteResult,
    KeyResult,
    ListItemBase,
    ListResult,
    MessageResult,
    ResponseModel,
    PasteListItem,
    ShortenResult,
    UploadResult,
    UrlListItem,
    UrlStats,
)

__all__ = [
    # Requests
    "ExpirationUpdateRequest",
    "KeyRequest",
    "ListQuery",
    "ShortenRequest",
    "UploadRequest",
    "build_request",
    # Responses
    "DataEnvelope",
    "DeleteResult",
    "KeyResult",
    "ListItemBase",
    "ListResult",
    "MessageResult",
    "ResponseModel",
    "PasteListItem",
    "ShortenResult",
    "UploadResult",
    "UrlListItem",
    "UrlStats",
]
