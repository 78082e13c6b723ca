"""Browser-facing HTTP API for MFS.

This package provides a Flask application that exposes the command
dispatcher over HTTP.  It is an **optional** extra — install with::

    pip install py-mfs[web]

The ``create_app`` factory in ``app.py`` opens a file system, creates a
command runner, and serves two endpoints:

- ``POST /api/execute`` — run a batch of commands and return JSON.
- ``GET /api/list`` — list one directory as JSON rows.
"""
