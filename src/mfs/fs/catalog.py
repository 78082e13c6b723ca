"""Catalogs — the per-directory child listings.

A directory owns exactly one host entry: its catalog file, stored under
``<host key>.mfs``.  The catalog is plain text with one line per
immediate child::

    Fnotes.txt
    Ddrafts

The first character is the kind tag (``F`` for a file, ``D`` for a
directory); the rest of the line is the child's last segment only.
There is no header and no separator between tag and name.  Line order
carries no meaning — listings are sorted when they are rendered.

The catalog is the single source of truth for what lives directly
under a directory.  Nothing here walks host storage looking for
children.

Design choices:
    - **Rewrite on removal.**  Removing a child reads every line,
      filters, and writes the rest back.  Directories are small, so
      the simplicity wins.
    - **Removal is idempotent.**  Removing a child that is not listed
      is a no-op, which lets an interrupted delete be re-issued.
    - **Adding is not.**  Callers check for collisions before adding;
      a duplicate line is a bug, not a state to tolerate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from mfs.fs.errors import CatalogCorruptError, DirectoryNotFoundError
from mfs.fs.path import catalog_key, move_marker_key, validate_segment
from mfs.logging import LogLevel

if TYPE_CHECKING:
    from mfs.fs.path import VirtualPath
    from mfs.fs.storage import HostStorage
    from mfs.logging import Logger

_ENCODING = "utf-8"


class EntryKind(StrEnum):
    """The kind of a catalog entry, valued by its one-character tag."""

    FILE = "F"
    DIRECTORY = "D"

    @property
    def label(self) -> str:
        """Return the listing label: ``"File: "`` or ``"Directory: "``."""
        return "File: " if self is EntryKind.FILE else "Directory: "


@dataclass(frozen=True)
class CatalogEntry:
    """One (kind, name) record in a catalog."""

    kind: EntryKind
    name: str

    def to_line(self) -> str:
        """Serialise as ``<tag><name>`` without a terminator."""
        return f"{self.kind.value}{self.name}"

    @classmethod
    def from_line(cls, line: str) -> CatalogEntry:
        """Parse one catalog line.

        Raises:
            CatalogCorruptError: If the tag is unknown or the name is
                missing or invalid.

        """
        if not line:
            msg = "Empty catalog line"
            raise CatalogCorruptError(msg)
        tag, name = line[0], line[1:]
        try:
            kind = EntryKind(tag)
        except ValueError:
            msg = f"Unknown catalog tag {tag!r} in line {line!r}"
            raise CatalogCorruptError(msg) from None
        try:
            validate_segment(name)
        except ValueError as e:
            msg = f"Bad catalog line {line!r}: {e}"
            raise CatalogCorruptError(msg) from e
        return cls(kind=kind, name=name)


class Catalog:
    """Read, append to, and rewrite directory catalogs in host storage."""

    def __init__(self, storage: HostStorage, *, logger: Logger | None = None) -> None:
        """Create a catalog store over *storage*."""
        self._storage = storage
        self._logger = logger

    def exists(self, dir_path: VirtualPath) -> bool:
        """Return True if *dir_path* has a catalog file."""
        return self._storage.exists(catalog_key(dir_path))

    def create(self, dir_path: VirtualPath) -> None:
        """Create an empty catalog file for *dir_path*.

        Raises:
            FileExistsError: If the catalog file already exists.

        """
        self._storage.create(catalog_key(dir_path))
        self._debug("created catalog", dir_path)

    def drop(self, dir_path: VirtualPath) -> None:
        """Delete the catalog file of *dir_path*.

        Raises:
            DirectoryNotFoundError: If there is no catalog file.

        """
        key = catalog_key(dir_path)
        try:
            self._storage.delete(key)
        except FileNotFoundError:
            msg = f"Directory not found: {dir_path}"
            raise DirectoryNotFoundError(msg) from None
        self._debug("dropped catalog", dir_path)

    def list_children(self, dir_path: VirtualPath) -> list[CatalogEntry]:
        """Return the entries of *dir_path*'s catalog in storage order.

        Raises:
            DirectoryNotFoundError: If the catalog file is absent.
            CatalogCorruptError: If a line cannot be parsed.

        """
        try:
            lines = self._storage.read_lines(catalog_key(dir_path))
        except FileNotFoundError:
            msg = f"Directory not found: {dir_path}"
            raise DirectoryNotFoundError(msg) from None
        return [CatalogEntry.from_line(_decode_line(line)) for line in lines]

    def find_child(self, dir_path: VirtualPath, name: str) -> CatalogEntry | None:
        """Return the entry called *name* under *dir_path*, if listed."""
        for entry in self.list_children(dir_path):
            if entry.name == name:
                return entry
        return None

    def add_child(self, parent: VirtualPath, name: str, kind: EntryKind) -> None:
        """Append one entry to *parent*'s catalog.

        Raises:
            DirectoryNotFoundError: If *parent* has no catalog file.

        """
        line = CatalogEntry(kind=kind, name=name).to_line() + "\n"
        try:
            self._storage.append(catalog_key(parent), line.encode(_ENCODING))
        except FileNotFoundError:
            msg = f"Directory not found: {parent}"
            raise DirectoryNotFoundError(msg) from None
        self._debug(f"added {kind.name.lower()} {name}", parent)

    def remove_child(self, parent: VirtualPath, name: str, kind: EntryKind) -> None:
        """Rewrite *parent*'s catalog without the ``(kind, name)`` lines.

        Does nothing if no such line exists.

        Raises:
            DirectoryNotFoundError: If *parent* has no catalog file.

        """
        entries = self.list_children(parent)
        target = CatalogEntry(kind=kind, name=name)
        kept = [e for e in entries if e != target]
        if len(kept) == len(entries):
            return
        text = "".join(e.to_line() + "\n" for e in kept)
        self._storage.write_bytes(catalog_key(parent), text.encode(_ENCODING))
        self._debug(f"removed {kind.name.lower()} {name}", parent)

    # -- Unfinished moves ---------------------------------------------------

    def mark_move(self, destination: VirtualPath, source: VirtualPath) -> None:
        """Record that *source* is being moved to *destination*."""
        text = str(source)
        self._storage.write_bytes(move_marker_key(destination), text.encode(_ENCODING))
        self._debug(f"marked move from {source}", destination)

    def pending_move(self, destination: VirtualPath) -> str | None:
        """Return the source recorded for an unfinished move, if any."""
        key = move_marker_key(destination)
        if not self._storage.exists(key):
            return None
        return self._storage.read_bytes(key).decode(_ENCODING, errors="replace")

    def clear_move(self, destination: VirtualPath) -> None:
        """Forget the move record for *destination*, if there is one."""
        key = move_marker_key(destination)
        if self._storage.exists(key):
            self._storage.delete(key)
            self._debug("cleared move record", destination)

    def _debug(self, message: str, path: VirtualPath) -> None:
        if self._logger is not None:
            self._logger.log(LogLevel.DEBUG, message, source="catalog", path=path)


def _decode_line(raw: bytes) -> str:
    try:
        return raw.decode(_ENCODING)
    except UnicodeDecodeError as e:
        msg = f"Catalog line {raw!r} is not valid {_ENCODING}"
        raise CatalogCorruptError(msg) from e
