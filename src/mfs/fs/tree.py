"""Recursive directory operations built on catalogs.

A directory is nothing but its catalog file, so every tree algorithm
here walks catalogs, never the host file system:

- **create** — make an empty catalog, then list the directory in its
  parent's catalog.
- **delete subtree** — read the catalog, delete every child (files via
  ``EntryOps``, directories recursively), then drop the directory's
  own catalog, then its line in the parent.  Children go first and the
  parent line goes last, so an interrupted delete leaves at worst a
  stale parent line that a repeated delete cleans up.
- **move subtree** — create the directory under the target, relocate
  every child into it, then drop the emptied source catalog and its
  parent line.  A move record (``<destination>.mfs-moving``) lives
  for the duration, so a move that stopped partway resumes when it is
  re-issued instead of colliding with its own half-built destination.

Cycle detection compares path segments as a prefix relation.  Testing
whether the encoded target *string* contains the encoded source string
gets ``root-ab`` versus ``root-a`` wrong, so it is never done here.

Recursion depth is bounded by the real directory depth; creation
enforces a tree, so no cycle can make it unbounded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mfs.fs.catalog import EntryKind
from mfs.fs.errors import (
    AlreadyExistsError,
    CycleError,
    DirectoryNotFoundError,
    RootHasNoParentError,
)
from mfs.logging import LogLevel

if TYPE_CHECKING:
    from mfs.fs.catalog import Catalog
    from mfs.fs.entries import EntryOps
    from mfs.fs.path import VirtualPath
    from mfs.logging import Logger


class TreeOps:
    """Create, recursively delete, and recursively move directories."""

    def __init__(
        self,
        catalog: Catalog,
        entries: EntryOps,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create the tree operations over *catalog* and *entries*."""
        self._catalog = catalog
        self._entries = entries
        self._logger = logger

    def create_directory(self, path: VirtualPath) -> None:
        """Create an empty directory and list it in its parent's catalog.

        Raises:
            AlreadyExistsError: If a file or directory already uses the name.
            DirectoryNotFoundError: If the parent directory does not exist.

        """
        if self._entries.name_taken(path):
            msg = f"Already exists: {path}"
            raise AlreadyExistsError(msg)
        parent = path.parent
        self._entries.require_directory(parent)

        self._catalog.create(path)
        try:
            self._catalog.add_child(parent, path.name, EntryKind.DIRECTORY)
        except Exception:
            self._catalog.drop(path)
            raise
        self._log(LogLevel.INFO, "created directory", path)

    def delete_directory_subtree(self, path: VirtualPath) -> None:
        """Delete a directory and everything beneath it.

        Raises:
            RootHasNoParentError: If *path* is the root.
            DirectoryNotFoundError: If the directory does not exist and
                its parent does not list it either.

        """
        if path.is_root:
            msg = f"Cannot delete root directory: {path}"
            raise RootHasNoParentError(msg)

        if not self._catalog.exists(path):
            self._remove_stale_entry(path)
            return

        for entry in self._catalog.list_children(path):
            child = path.child(entry.name)
            if entry.kind is EntryKind.FILE:
                self._entries.delete_file(child)
            else:
                self.delete_directory_subtree(child)

        self._catalog.drop(path)
        self._catalog.clear_move(path)
        self._catalog.remove_child(path.parent, path.name, EntryKind.DIRECTORY)
        self._log(LogLevel.INFO, "deleted directory", path)

    def move_directory_subtree(self, source: VirtualPath, target_dir: VirtualPath) -> None:
        """Move a directory and everything beneath it into *target_dir*.

        The move is recorded before the destination is created and the
        record is cleared once the source is gone.  Re-issuing a move
        that stopped partway picks up where it left off.

        Raises:
            CycleError: If *target_dir* is *source* or lies beneath it.
            DirectoryNotFoundError: If *source* or *target_dir* does not exist.
            AlreadyExistsError: If *target_dir* already holds the name.

        """
        if source == target_dir or source.is_ancestor_of(target_dir):
            msg = f"Moving {source} into {target_dir} would create a cycle"
            raise CycleError(msg)

        destination = target_dir.child(source.name)
        if self._is_unfinished_move(source, destination):
            self._log(LogLevel.WARNING, f"resuming move to {destination}", source)
        else:
            self._entries.require_directory(source)
            self._entries.require_directory(target_dir)
            if self._entries.name_taken(destination):
                msg = f"Already exists: {destination}"
                raise AlreadyExistsError(msg)
            self._catalog.mark_move(destination, source)
            self.create_directory(destination)

        if self._catalog.exists(source):
            for entry in self._catalog.list_children(source):
                child = source.child(entry.name)
                if entry.kind is EntryKind.DIRECTORY:
                    self.move_directory_subtree(child, destination)
                elif self._already_relocated(child, destination):
                    self._catalog.remove_child(source, entry.name, EntryKind.FILE)
                else:
                    self._entries.relocate_file(child, destination)
            self._catalog.drop(source)

        self._catalog.remove_child(source.parent, source.name, EntryKind.DIRECTORY)
        self._catalog.clear_move(destination)
        self._log(LogLevel.INFO, f"moved directory to {destination}", source)

    def _is_unfinished_move(self, source: VirtualPath, destination: VirtualPath) -> bool:
        """Return True if an earlier move of *source* to *destination* stopped partway."""
        if not self._catalog.exists(destination):
            return False
        return self._catalog.pending_move(destination) == str(source)

    def _already_relocated(self, child: VirtualPath, destination: VirtualPath) -> bool:
        """Return True if *child*'s content left but its source line stayed."""
        if self._entries.file_exists(child):
            return False
        return self._catalog.find_child(destination, child.name) is not None

    def _remove_stale_entry(self, path: VirtualPath) -> None:
        """Drop a parent line whose catalog is already gone, or raise."""
        parent = path.parent
        if self._catalog.exists(parent):
            entry = self._catalog.find_child(parent, path.name)
            if entry is not None and entry.kind is EntryKind.DIRECTORY:
                self._catalog.remove_child(parent, path.name, EntryKind.DIRECTORY)
                self._log(LogLevel.WARNING, "removed stale directory entry", path)
                return
        msg = f"Directory not found: {path}"
        raise DirectoryNotFoundError(msg)

    def _log(self, level: LogLevel, message: str, path: VirtualPath) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="tree", path=path)
