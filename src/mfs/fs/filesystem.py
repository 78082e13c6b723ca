"""The file system facade — one object wiring every layer together.

``MiniFileSystem`` owns a host storage backend and builds the layers on
top of it, leaves first::

    HostStorage → Catalog → EntryOps → TreeOps
                        ↘ Lister

Its public methods are the command surface: ``list``, ``make_dir``,
``remove_dir``, ``move_dir``, ``create_file``, ``append``,
``read_file``, ``delete_file``, ``copy_file``, and ``move_file``.  Each
takes already-parsed ``VirtualPath`` values; turning user strings into
paths is the command dispatcher's job.

The root directory's catalog is created on construction if it is not
there yet, so the root always exists once a ``MiniFileSystem`` does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mfs.config import MfsConfig
from mfs.fs.catalog import Catalog
from mfs.fs.entries import EntryOps
from mfs.fs.lister import Lister
from mfs.fs.path import VirtualPath
from mfs.fs.tree import TreeOps
from mfs.logging import Logger, LogLevel

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mfs.fs.storage import HostStorage


class MiniFileSystem:
    """A hierarchical namespace stored in one flat host directory."""

    def __init__(
        self,
        storage: HostStorage | None = None,
        *,
        config: MfsConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create the file system and make sure its root exists.

        Args:
            storage: Host storage to use.  If None, the backend named by
                *config* is opened.
            config: Settings; defaults to ``MfsConfig()``.
            logger: Log buffer shared by every layer; a new one is
                created if None.

        """
        self._config = config if config is not None else MfsConfig()
        self._storage = storage if storage is not None else self._config.open_storage()
        self._logger = logger if logger is not None else Logger()
        self._catalog = Catalog(self._storage, logger=self._logger)
        self._entries = EntryOps(self._storage, self._catalog, logger=self._logger)
        self._tree = TreeOps(self._catalog, self._entries, logger=self._logger)
        self._lister = Lister(self._catalog)
        self._root = VirtualPath.root(self._config.root_name)
        self._init_root()

    def _init_root(self) -> None:
        if not self._catalog.exists(self._root):
            self._catalog.create(self._root)
            self._logger.log(LogLevel.INFO, "initialised root", source="fs", path=self._root)

    @property
    def root(self) -> VirtualPath:
        """Return the root directory's path."""
        return self._root

    @property
    def config(self) -> MfsConfig:
        """Return the active configuration."""
        return self._config

    @property
    def storage(self) -> HostStorage:
        """Return the host storage backend."""
        return self._storage

    @property
    def catalog(self) -> Catalog:
        """Return the catalog store."""
        return self._catalog

    @property
    def logger(self) -> Logger:
        """Return the shared log buffer."""
        return self._logger

    # -- Queries ------------------------------------------------------------

    def is_dir(self, path: VirtualPath) -> bool:
        """Return True if *path* is an existing directory."""
        return self._catalog.exists(path)

    def is_file(self, path: VirtualPath) -> bool:
        """Return True if *path* is an existing file."""
        return self._entries.file_exists(path)

    def list(self, dir_path: VirtualPath) -> list[tuple[str, str]]:
        """Return the sorted ``(label, name)`` listing of a directory."""
        return self._lister.render(dir_path)

    def read_file(self, path: VirtualPath) -> Iterator[str]:
        """Return a lazy iterator over a file's lines, decoded as text.

        On disk the host file stays open until the iterator is drained
        or garbage collected, so callers should consume it fully.
        """
        lines = self._entries.read_content(path)
        encoding = self._config.encoding
        return (line.decode(encoding) for line in lines)

    # -- Directories --------------------------------------------------------

    def make_dir(self, path: VirtualPath) -> None:
        """Create an empty directory."""
        self._tree.create_directory(path)

    def remove_dir(self, path: VirtualPath) -> None:
        """Delete a directory and its whole subtree."""
        self._tree.delete_directory_subtree(path)

    def move_dir(self, source: VirtualPath, target_dir: VirtualPath) -> None:
        """Move a directory and its subtree into *target_dir*."""
        self._tree.move_directory_subtree(source, target_dir)

    # -- Files --------------------------------------------------------------

    def create_file(self, path: VirtualPath) -> None:
        """Create an empty file."""
        self._entries.create_file(path)

    def append(self, path: VirtualPath, text: str) -> None:
        """Append *text* to a file, encoded with the configured encoding."""
        self._entries.append_content(path, text.encode(self._config.encoding))

    def delete_file(self, path: VirtualPath) -> None:
        """Delete a file."""
        self._entries.delete_file(path)

    def copy_file(self, source: VirtualPath, target_dir: VirtualPath) -> None:
        """Copy a file into *target_dir*."""
        self._entries.duplicate_file(source, target_dir)

    def move_file(self, source: VirtualPath, target_dir: VirtualPath) -> None:
        """Move a file into *target_dir*."""
        self._entries.relocate_file(source, target_dir)
