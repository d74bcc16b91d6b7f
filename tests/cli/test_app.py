"""Tests for the command-line interface."""

from pathlib import Path

import pytest
import yaml
from pytest_httpserver import HTTPServer
from typer.testing import CliRunner, Result

from cli import app

from tests.shared_test_data import TEST_API_KEY


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, mock_ox45_server: HTTPServer, base_url: str):
    """Invoke the CLI against the fake service with a valid key."""

    def _invoke(*args: str, api_key: str | None = TEST_API_KEY, **kwargs) -> Result:
        options = ["--api-url", base_url]
        if api_key is not None:
            options += ["--api-key", api_key]
        return runner.invoke(app, [*options, *args], **kwargs)

    return _invoke


class TestConfigCommands:
    """Test config set/get/list/unset."""

    def test_set_get_unset(self, runner: CliRunner, isolated_home: Path):
        """Test a full round trip through the home config file."""
        result = runner.invoke(app, ["config", "set", "default_expiry", "7d"])
        assert result.exit_code == 0
        assert "default_expiry set to 7d" in result.output

        config_file = isolated_home / ".0x45.yaml"
        assert yaml.safe_load(config_file.read_text()) == {"default_expiry": "7d"}

        result = runner.invoke(app, ["config", "get", "default_expiry"])
        assert result.exit_code == 0
        assert result.output.strip() == "7d"

        result = runner.invoke(app, ["config", "unset", "default_expiry"])
        assert result.exit_code == 0
        assert "Removed config key default_expiry" in result.output

        result = runner.invoke(app, ["config", "get", "default_expiry"])
        assert result.exit_code == 0
        assert "Config key 'default_expiry' not found" in result.output

    def test_list(self, runner: CliRunner):
        """Test listing resolved values includes defaults."""
        runner.invoke(app, ["config", "set", "api_key", "abc"])

        result = runner.invoke(app, ["config", "list"])

        assert result.exit_code == 0
        assert "api_key: abc" in result.output
        assert "api_url: https://0x45.st" in result.output

    def test_unset_missing_key(self, runner: CliRunner):
        """Test unsetting an absent key warns but succeeds."""
        result = runner.invoke(app, ["config", "unset", "api_key"])

        assert result.exit_code == 0
        assert "Config key 'api_key' not found" in result.output

    def test_set_unknown_key(self, runner: CliRunner):
        """Test unknown keys fail with exit code 1."""
        result = runner.invoke(app, ["config", "set", "colour", "blue"])

        assert result.exit_code == 1
        assert "Error: Unknown config key 'colour'" in result.output

    def test_explicit_config_path(self, runner: CliRunner, tmp_path: Path):
        """Test --config points reads and writes at another file."""
        config_file = tmp_path / "custom.yaml"

        result = runner.invoke(
            app, ["--config", str(config_file), "config", "set", "api_key", "xyz"]
        )

        assert result.exit_code == 0
        assert yaml.safe_load(config_file.read_text()) == {"api_key": "xyz"}

    def test_malformed_config_file(self, runner: CliRunner, isolated_home: Path):
        """Test an unreadable config file fails every command."""
        (isolated_home / ".0x45.yaml").write_text("api_key: [broken\n")

        result = runner.invoke(app, ["key", "status"])

        assert result.exit_code == 1
        assert "Error reading config file" in result.output


class TestUploadCommand:
    """Test the upload command."""

    def test_upload_stdin(self, invoke, mock_ox45_server: HTTPServer):
        """Test piped content is uploaded as paste.txt."""
        result = invoke("upload", api_key=None, input="hello world!")

        assert result.exit_code == 0
        assert "Upload complete!" in result.output
        assert "https://0x45.st/paste123" in result.output

        request, _ = mock_ox45_server.log[0]
        assert request.get_data() == b"hello world!"
        assert request.args["filename"] == "paste.txt"

    def test_upload_file(self, invoke, mock_ox45_server: HTTPServer, tmp_path: Path):
        """Test uploading a file with an explicit filename."""
        path = tmp_path / "notes.md"
        path.write_text("# Notes")

        result = invoke("upload", str(path), "-f", "renamed.md", "-e", "1d")

        assert result.exit_code == 0
        request, _ = mock_ox45_server.log[0]
        assert request.args["filename"] == "renamed.md"
        assert request.args["ext"] == "md"
        assert request.args["expires"] == "1d"

    def test_upload_uses_default_expiry(
        self, invoke, runner: CliRunner, mock_ox45_server: HTTPServer
    ):
        """Test the configured default expiry applies when -e is omitted."""
        runner.invoke(app, ["config", "set", "default_expiry", "3d"])

        result = invoke("upload", input="data")

        assert result.exit_code == 0
        request, _ = mock_ox45_server.log[0]
        assert request.args["expires"] == "3d"

    def test_private_without_key(self, invoke, mock_ox45_server: HTTPServer):
        """Test private uploads fail locally without a key."""
        result = invoke("upload", "--private", api_key=None, input="secret")

        assert result.exit_code == 1
        assert "Private uploads require an API key" in result.output
        assert len(mock_ox45_server.log) == 0

    def test_expiry_too_long_without_key(self, invoke, mock_ox45_server: HTTPServer):
        """Test the anonymous expiry cap is enforced before sending."""
        result = invoke("upload", "-e", "129d", api_key=None, input="data")

        assert result.exit_code == 1
        assert "128 days" in result.output
        assert len(mock_ox45_server.log) == 0

    def test_missing_file(self, invoke, tmp_path: Path):
        """Test a missing file fails with a readable error."""
        result = invoke("upload", str(tmp_path / "nope.txt"))

        assert result.exit_code == 1
        assert "Could not read file" in result.output


class TestShortenCommand:
    """Test the shorten command."""

    def test_shorten(self, invoke):
        """Test the short URL and target are printed."""
        result = invoke("shorten", "https://example.com", "-t", "Example")

        assert result.exit_code == 0
        assert "URL shortened!" in result.output
        assert "https://svc/abc123" in result.output
        assert "→ https://example.com" in result.output
        assert "Title: Example" in result.output

    def test_shorten_without_key(self, invoke, mock_ox45_server: HTTPServer):
        """Test shortening without a key fails locally."""
        result = invoke("shorten", "https://example.com", api_key=None)

        assert result.exit_code == 1
        assert "API key required" in result.output
        assert len(mock_ox45_server.log) == 0

    def test_shorten_invalid_key(self, invoke):
        """Test a rejected key exits with code 1."""
        result = invoke("shorten", "https://example.com", api_key="wrong-key")

        assert result.exit_code == 1
        assert "Error: Request failed: 401" in result.output

    def test_shorten_invalid_url(self, invoke, mock_ox45_server: HTTPServer):
        """Test malformed URLs are rejected locally."""
        result = invoke("shorten", "not a url")

        assert result.exit_code == 1
        assert "Invalid ShortenRequest" in result.output
        assert len(mock_ox45_server.log) == 0


class TestListCommand:
    """Test the list command."""

    def test_list_second_page(self, invoke):
        """Test the pagination footer."""
        result = invoke("list", "pastes", "--page", "2", "--limit", "10")

        assert result.exit_code == 0
        assert "file10.txt" in result.output
        assert "Page 2 of 2 (showing 5 of 15 total)" in result.output

    def test_list_urls(self, invoke, mock_ox45_server: HTTPServer):
        """Test listing URLs with a sort key and mixed-case kind."""
        result = invoke("list", "URLs", "-s", "clicks", "-l", "5")

        assert result.exit_code == 0
        assert "Clicks: 4" in result.output
        assert "Page 1 of 3 (showing 5 of 15 total)" in result.output

        request, _ = mock_ox45_server.log[0]
        assert request.args["sort"] == "clicks"

    def test_list_empty_page(self, invoke):
        """Test a page past the end prints the empty message."""
        result = invoke("list", "pastes", "--page", "9")

        assert result.exit_code == 0
        assert "No items found." in result.output

    def test_invalid_kind(self, invoke, mock_ox45_server: HTTPServer):
        """Test unknown kinds fail before any request."""
        result = invoke("list", "folders")

        assert result.exit_code == 1
        assert "Invalid ListQuery" in result.output
        assert len(mock_ox45_server.log) == 0


class TestDeleteCommand:
    """Test the delete command."""

    def test_delete(self, invoke):
        """Test the service message is printed."""
        result = invoke("delete", "abc123")

        assert result.exit_code == 0
        assert "Content deleted" in result.output

    def test_delete_unsuccessful(self, runner: CliRunner, httpserver: HTTPServer, base_url: str):
        """Test an unsuccessful acknowledgement exits with code 1."""
        httpserver.expect_request("/gone", method="DELETE").respond_with_json(
            {"success": False, "error": "not found"}
        )

        result = runner.invoke(
            app, ["--api-url", base_url, "--api-key", TEST_API_KEY, "delete", "gone"]
        )

        assert result.exit_code == 1
        assert "Error: not found" in result.output


class TestKeyCommands:
    """Test key request and key status."""

    def test_key_request(self, invoke, monkeypatch: pytest.MonkeyPatch):
        """Test requesting a key never sends the configured key."""
        monkeypatch.setenv("OX45_API_KEY", TEST_API_KEY)

        result = invoke(
            "key", "request", "--email", "you@example.com", "--name", "You", api_key=None
        )

        assert result.exit_code == 0
        assert "Verification email sent to you@example.com" in result.output

    def test_key_request_missing_fields(self, invoke, mock_ox45_server: HTTPServer):
        """Test email and name are both required."""
        result = invoke("key", "request", "--email", "you@example.com")

        assert result.exit_code == 1
        assert "email and name are required" in result.output
        assert len(mock_ox45_server.log) == 0

    def test_key_status_without_key(self, runner: CliRunner):
        """Test the anonymous status."""
        result = runner.invoke(app, ["key", "status"])

        assert result.exit_code == 0
        assert "No API key configured" in result.output
        assert "Max Expiry: 128 days" in result.output
        assert "Private Pastes: Disabled" in result.output

    def test_key_status_from_env(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
        """Test OX45_API_KEY is picked up and masked."""
        monkeypatch.setenv("OX45_API_KEY", "abcdefgh1234")

        result = runner.invoke(app, ["key", "status"])

        assert result.exit_code == 0
        assert "API Key: ********1234" in result.output
        assert "abcdefgh" not in result.output
        assert "Max Expiry: 730 days" in result.output
        assert "Private Pastes: Enabled" in result.output


class TestUrlCommands:
    """Test url stats and url expire."""

    def test_url_stats(self, invoke):
        """Test click statistics are printed."""
        result = invoke("url", "stats", "abc123")

        assert result.exit_code == 0
        assert "Clicks: 42" in result.output
        assert "Last click: 2024-02-01" in result.output

    def test_url_expire(self, invoke, mock_ox45_server: HTTPServer):
        """Test the new expiry is sent and printed."""
        result = invoke("url", "expire", "abc123", "30d")

        assert result.exit_code == 0
        assert "Expires: 2024-03-01" in result.output
        request, _ = mock_ox45_server.log[0]
        assert request.get_json() == {"expires_in": "30d"}


def test_no_args_shows_help(runner: CliRunner):
    """Test running without a command prints usage."""
    result = runner.invoke(app, [])

    assert "Usage" in result.output
    assert "upload" in result.output
