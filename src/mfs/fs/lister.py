"""Directory listings.

The catalog stores children in whatever order they were appended.
Listings sort them by name (plain ``str`` ordering, so case-sensitive)
and label each one::

    Directory: drafts
    File: notes.txt
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mfs.fs.catalog import Catalog
    from mfs.fs.path import VirtualPath


class Lister:
    """Render a directory's catalog as a sorted, labelled listing."""

    def __init__(self, catalog: Catalog) -> None:
        """Create a lister reading from *catalog*."""
        self._catalog = catalog

    def render(self, dir_path: VirtualPath) -> list[tuple[str, str]]:
        """Return ``(label, name)`` rows sorted by name.

        Raises:
            DirectoryNotFoundError: If the directory does not exist.

        """
        entries = sorted(self._catalog.list_children(dir_path), key=lambda e: e.name)
        return [(entry.kind.label, entry.name) for entry in entries]


def format_listing(rows: list[tuple[str, str]]) -> str:
    """Join rendered rows into newline-separated ``<label><name>`` lines."""
    return "\n".join(label + name for label, name in rows)
