"""Single-entry operations on files.

Each operation touches one content entry in host storage and the
matching line in the parent's catalog.  Together those two form one
logical file, so every operation here keeps them in step:

- ``create_file`` — content entry first, then the catalog line.  If
  the catalog append fails the content entry is removed again.
- ``delete_file`` — content entry first, then the catalog line.  A
  catalog line left behind by an interrupted delete is cleaned up when
  the delete is re-issued.
- ``relocate_file`` / ``duplicate_file`` — rename or copy the content
  to ``<target dir>-<name>``, list it in the target catalog, and (for a
  move) drop it from the old parent's catalog.

Names are unique per directory regardless of kind, so a file cannot be
created where a directory of the same name already lives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mfs.fs.catalog import EntryKind
from mfs.fs.errors import AlreadyExistsError, DirectoryNotFoundError, NotFoundError
from mfs.fs.path import encode_host_key
from mfs.logging import LogLevel

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mfs.fs.catalog import Catalog
    from mfs.fs.path import VirtualPath
    from mfs.fs.storage import HostStorage
    from mfs.logging import Logger


class EntryOps:
    """Create, delete, write, read, move, and copy individual files."""

    def __init__(
        self,
        storage: HostStorage,
        catalog: Catalog,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create the entry operations over *storage* and *catalog*."""
        self._storage = storage
        self._catalog = catalog
        self._logger = logger

    # -- Queries ------------------------------------------------------------

    def file_exists(self, path: VirtualPath) -> bool:
        """Return True if *path* has a content entry."""
        return self._storage.exists(encode_host_key(path))

    def name_taken(self, path: VirtualPath) -> bool:
        """Return True if a file or a directory already lives at *path*."""
        return self.file_exists(path) or self._catalog.exists(path)

    def require_directory(self, path: VirtualPath) -> None:
        """Check that *path* is an existing directory.

        Raises:
            DirectoryNotFoundError: If *path* has no catalog file.

        """
        if not self._catalog.exists(path):
            msg = f"Directory not found: {path}"
            raise DirectoryNotFoundError(msg)

    def _require_file(self, path: VirtualPath) -> None:
        if not self.file_exists(path):
            msg = f"File not found: {path}"
            raise NotFoundError(msg)

    def _require_free(self, path: VirtualPath) -> None:
        if self.name_taken(path):
            msg = f"Already exists: {path}"
            raise AlreadyExistsError(msg)

    # -- Mutations ----------------------------------------------------------

    def create_file(self, path: VirtualPath) -> None:
        """Create an empty file and list it in its parent's catalog.

        Raises:
            AlreadyExistsError: If a file or directory already uses the name.
            DirectoryNotFoundError: If the parent directory does not exist.

        """
        self._require_free(path)
        parent = path.parent
        self.require_directory(parent)

        key = encode_host_key(path)
        self._storage.create(key)
        try:
            self._catalog.add_child(parent, path.name, EntryKind.FILE)
        except Exception:
            self._storage.delete(key)
            raise
        self._info("created file", path)

    def delete_file(self, path: VirtualPath) -> None:
        """Delete a file's content, then its line in the parent's catalog.

        Raises:
            NotFoundError: If neither the content nor a catalog line exists.

        """
        parent = path.parent
        key = encode_host_key(path)
        if self._storage.exists(key):
            self._storage.delete(key)
            self._catalog.remove_child(parent, path.name, EntryKind.FILE)
            self._info("deleted file", path)
            return

        if self._catalog.exists(parent):
            entry = self._catalog.find_child(parent, path.name)
            if entry is not None and entry.kind is EntryKind.FILE:
                self._catalog.remove_child(parent, path.name, EntryKind.FILE)
                self._warn("removed stale file entry", path)
                return

        msg = f"File not found: {path}"
        raise NotFoundError(msg)

    def append_content(self, path: VirtualPath, data: bytes) -> None:
        """Append *data* to a file, keeping what is already there.

        Raises:
            NotFoundError: If the file does not exist.

        """
        self._require_file(path)
        self._storage.append(encode_host_key(path), data)
        self._info(f"appended {len(data)} bytes", path)

    def read_content(self, path: VirtualPath) -> Iterator[bytes]:
        """Return a lazy, single-pass iterator over the file's lines.

        Raises:
            NotFoundError: If the file does not exist.  Raised by this
                call, not when the iterator is first advanced.

        """
        try:
            return self._storage.read_lines(encode_host_key(path))
        except FileNotFoundError:
            msg = f"File not found: {path}"
            raise NotFoundError(msg) from None

    def relocate_file(self, source: VirtualPath, target_dir: VirtualPath) -> None:
        """Move a file into *target_dir*, keeping its name.

        Raises:
            NotFoundError: If *source* is not a file.
            DirectoryNotFoundError: If *target_dir* does not exist.
            AlreadyExistsError: If *target_dir* already holds the name.

        """
        destination = self._prepare_transfer(source, target_dir)
        self._storage.rename(encode_host_key(source), encode_host_key(destination))
        self._catalog.add_child(target_dir, source.name, EntryKind.FILE)
        self._catalog.remove_child(source.parent, source.name, EntryKind.FILE)
        self._info(f"moved file to {destination}", source)

    def duplicate_file(self, source: VirtualPath, target_dir: VirtualPath) -> None:
        """Copy a file into *target_dir*, keeping its name and the original.

        Raises:
            NotFoundError: If *source* is not a file.
            DirectoryNotFoundError: If *target_dir* does not exist.
            AlreadyExistsError: If *target_dir* already holds the name.

        """
        destination = self._prepare_transfer(source, target_dir)
        self._storage.copy(encode_host_key(source), encode_host_key(destination))
        self._catalog.add_child(target_dir, source.name, EntryKind.FILE)
        self._info(f"copied file to {destination}", source)

    def _prepare_transfer(self, source: VirtualPath, target_dir: VirtualPath) -> VirtualPath:
        """Run the shared move/copy checks and return the destination path."""
        self._require_file(source)
        self.require_directory(target_dir)
        destination = target_dir.child(source.name)
        self._require_free(destination)
        return destination

    # -- Logging ------------------------------------------------------------

    def _info(self, message: str, path: VirtualPath) -> None:
        if self._logger is not None:
            self._logger.log(LogLevel.INFO, message, source="entries", path=path)

    def _warn(self, message: str, path: VirtualPath) -> None:
        if self._logger is not None:
            self._logger.log(LogLevel.WARNING, message, source="entries", path=path)
