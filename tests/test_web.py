"""Tests for the HTTP API.

The web front end exposes the command dispatcher through Flask.  Tests
use ``pytest.importorskip`` so they are skipped gracefully when Flask
is not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from mfs.config import MfsConfig, StorageBackend  # noqa: E402
from mfs.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404


def _create_client() -> Any:
    """Create a test client over an in-memory file system."""
    app = create_app(MfsConfig(backend=StorageBackend.MEMORY))
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        app = create_app(MfsConfig(backend=StorageBackend.MEMORY))
        assert isinstance(app, flask.Flask)


class TestExecuteEndpoint:
    """Verify the /api/execute POST endpoint."""

    def test_batch_output(self) -> None:
        """Commands run in order and their output is returned."""
        client = _create_client()
        batch = "mkdir root-a touch root-b ls root"
        response = client.post("/api/execute", json={"command": batch})
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["output"] == ["Directory: a", "File: b"]
        assert data["error"] is None
        assert data["executed"] == 3

    def test_state_shared_between_requests(self) -> None:
        """One file system serves every request."""
        client = _create_client()
        client.post("/api/execute", json={"command": "touch root-a"})
        response = client.post("/api/execute", json={"command": "ls root"})
        assert response.get_json()["output"] == ["File: a"]

    def test_error_reported(self) -> None:
        """A failing command is reported in the error field."""
        client = _create_client()
        response = client.post("/api/execute", json={"command": "cat root-nope"})
        assert response.status_code == HTTP_OK
        assert response.get_json()["error"] == "Error: File not found: root-nope"

    def test_missing_command_field(self) -> None:
        """A body without 'command' is a bad request."""
        client = _create_client()
        response = client.post("/api/execute", json={"cmd": "ls root"})
        assert response.status_code == HTTP_BAD_REQUEST

    def test_non_json_body(self) -> None:
        """A non-JSON body is a bad request."""
        client = _create_client()
        response = client.post("/api/execute", data="ls root")
        assert response.status_code == HTTP_BAD_REQUEST

    @pytest.mark.parametrize("body", [7, ["ls root"], {"command": 7}, {"command": None}])
    def test_malformed_body(self, body: object) -> None:
        """Bodies that are not an object with a string command are bad requests."""
        client = _create_client()
        response = client.post("/api/execute", json=body)
        assert response.status_code == HTTP_BAD_REQUEST


class TestListEndpoint:
    """Verify the /api/list GET endpoint."""

    def test_lists_root_by_default(self) -> None:
        """Without ?path= the root is listed."""
        client = _create_client()
        client.post("/api/execute", json={"command": "mkdir root-docs touch root-a"})
        response = client.get("/api/list")
        assert response.status_code == HTTP_OK
        assert response.get_json() == {
            "path": "root",
            "entries": [
                {"kind": "File", "name": "a"},
                {"kind": "Directory", "name": "docs"},
            ],
        }

    def test_missing_directory_is_404(self) -> None:
        """Unknown directories are not found."""
        client = _create_client()
        response = client.get("/api/list", query_string={"path": "root-nope"})
        assert response.status_code == HTTP_NOT_FOUND

    def test_invalid_path_is_400(self) -> None:
        """Paths outside the root are bad requests."""
        client = _create_client()
        response = client.get("/api/list", query_string={"path": "elsewhere"})
        assert response.status_code == HTTP_BAD_REQUEST
