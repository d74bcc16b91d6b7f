"""Global pytest configuration and fixtures."""

import json
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from pytest_httpserver import HTTPServer
from werkzeug.wrappers import Request, Response

from client import Ox45Client
from core import setup_test_logging

from tests.shared_test_data import (
    SHORTEN_DATA,
    TEST_API_KEY,
    TOTAL_ITEMS,
    UPLOAD_DATA,
    URL_STATS_DATA,
    make_paste_item,
    make_url_item,
)


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory and drop any OX45_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if name.startswith("OX45_"):
            monkeypatch.delenv(name)
    return home


def _json_response(payload: dict[str, Any], status: int = 200) -> Response:
    return Response(
        json.dumps(payload),
        status=status,
        headers={"Content-Type": "application/json"},
    )


def _is_authorized(request: Request) -> bool:
    return request.headers.get("Authorization") == f"Bearer {TEST_API_KEY}"


def _unauthorized() -> Response:
    return _json_response({"success": False, "error": "invalid api key"}, status=401)


@pytest.fixture
def mock_ox45_server(httpserver: HTTPServer) -> HTTPServer:
    """Set up a fake 0x45 service that checks bearer tokens."""

    def upload_handler(request: Request) -> Response:
        # Anonymous uploads are allowed, but a wrong key is still rejected
        if "Authorization" in request.headers and not _is_authorized(request):
            return _unauthorized()
        data = dict(UPLOAD_DATA)
        data["filename"] = request.args.get("filename", "")
        data["size"] = len(request.get_data())
        data["private"] = request.args.get("private") == "true"
        return _json_response({"success": True, "data": data})

    def shorten_handler(request: Request) -> Response:
        if not _is_authorized(request):
            return _unauthorized()
        body = json.loads(request.get_data(as_text=True))
        data = dict(SHORTEN_DATA)
        data["url"] = body["url"]
        data["title"] = body.get("title")
        return _json_response({"success": True, "data": data})

    def list_handler(make_item: Any) -> Any:
        def handler(request: Request) -> Response:
            if not _is_authorized(request):
                return _unauthorized()
            page = int(request.args.get("page", "1"))
            limit = int(request.args.get("limit", "10"))
            items = [make_item(i) for i in range(TOTAL_ITEMS)]
            start = (page - 1) * limit
            return _json_response(
                {
                    "success": True,
                    "data": {
                        "items": items[start : start + limit],
                        "total": TOTAL_ITEMS,
                        "page": page,
                        "limit": limit,
                    },
                }
            )

        return handler

    def delete_handler(request: Request) -> Response:
        if not _is_authorized(request):
            return _unauthorized()
        return _json_response({"success": True, "message": "Content deleted"})

    def api_key_handler(request: Request) -> Response:
        if "Authorization" in request.headers:
            return _json_response({"success": False, "error": "unexpected auth"}, 400)
        body = json.loads(request.get_data(as_text=True))
        return _json_response(
            {
                "success": True,
                "message": f"Verification email sent to {body['email']}",
            }
        )

    def stats_handler(request: Request) -> Response:
        if not _is_authorized(request):
            return _unauthorized()
        return _json_response({"success": True, "data": URL_STATS_DATA})

    def expire_handler(request: Request) -> Response:
        if not _is_authorized(request):
            return _unauthorized()
        data = dict(SHORTEN_DATA)
        data["expires_at"] = "2024-03-01T00:00:00Z"
        return _json_response({"success": True, "data": data})

    httpserver.expect_request("/upload", method="POST").respond_with_handler(
        upload_handler
    )
    httpserver.expect_request("/shorten", method="POST").respond_with_handler(
        shorten_handler
    )
    httpserver.expect_request("/pastes", method="GET").respond_with_handler(
        list_handler(make_paste_item)
    )
    httpserver.expect_request("/urls", method="GET").respond_with_handler(
        list_handler(make_url_item)
    )
    httpserver.expect_request("/abc123", method="DELETE").respond_with_handler(
        delete_handler
    )
    httpserver.expect_request("/api-key", method="POST").respond_with_handler(
        api_key_handler
    )
    httpserver.expect_request("/url/abc123/stats", method="GET").respond_with_handler(
        stats_handler
    )
    httpserver.expect_request("/url/abc123/expire", method="PUT").respond_with_handler(
        expire_handler
    )

    return httpserver


@pytest.fixture
def base_url(httpserver: HTTPServer) -> str:
    """Base URL of the local fake service."""
    return f"http://{httpserver.host}:{httpserver.port}"


@pytest.fixture
def mock_client(
    mock_ox45_server: HTTPServer, base_url: str
) -> Generator[Ox45Client, None, None]:
    """Provide a client with a valid API key, pointed at the fake service."""
    with Ox45Client(base_url=base_url, api_key=TEST_API_KEY) as client:
        yield client


@pytest.fixture
def anonymous_client(
    mock_ox45_server: HTTPServer, base_url: str
) -> Generator[Ox45Client, None, None]:
    """Provide a client without an API key, pointed at the fake service."""
    with Ox45Client(base_url=base_url) as client:
        yield client
