"""Flask application factory for the MFS HTTP API.

The ``create_app`` function opens a file system, creates a command
runner, and returns a Flask app with two endpoints:

- ``POST /api/execute`` — run a command batch and return JSON.
- ``GET /api/list?path=root-docs`` — return one directory listing.

Flask may serve requests on several threads, but catalogs must be read
and rewritten by one operation at a time.  Every request therefore
runs under a single lock.
"""

from __future__ import annotations

import threading

from flask import Flask, Response, jsonify, request

from mfs.commands import CommandRunner
from mfs.config import MfsConfig
from mfs.fs.errors import DirectoryNotFoundError, MfsError
from mfs.fs.filesystem import MiniFileSystem
from mfs.fs.path import parse_path

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404


def create_app(config: MfsConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: File system settings; defaults to ``MfsConfig()``.

    Returns:
        A configured Flask application ready to serve.

    """
    fs = MiniFileSystem(config=config)
    runner = CommandRunner(fs)
    lock = threading.Lock()

    app = Flask(__name__)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a command batch and return its output.

        Expects JSON body: ``{"command": "touch root-a ls root"}``

        Returns:
            JSON with ``output``, ``error``, and ``executed`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command = data["command"]  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(command, str):
            return jsonify({"error": "'command' must be a string"}), _HTTP_BAD_REQUEST
        with lock:
            result = runner.execute(command)
        return jsonify(
            {"output": result.output, "error": result.error, "executed": result.executed}
        )

    @app.route("/api/list")
    def list_dir() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the sorted listing of the directory named by ``?path=``.

        Returns:
            JSON with ``path`` and ``entries`` (``[{"kind", "name"}]``).

        """
        text = request.args.get("path", fs.config.root_name)
        try:
            path = parse_path(text, root_name=fs.config.root_name)
            with lock:
                rows = fs.list(path)
        except DirectoryNotFoundError as e:
            return jsonify({"error": str(e)}), _HTTP_NOT_FOUND
        except MfsError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST
        entries = [{"kind": label.removesuffix(": "), "name": name} for label, name in rows]
        return jsonify({"path": str(path), "entries": entries})

    return app


def main() -> None:
    """Run the HTTP API development server.

    This is the ``mfs-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
