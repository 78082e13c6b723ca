"""Flat-storage file system — paths, catalogs, entry and tree operations.

Re-exports public symbols so callers can write::

    from mfs.fs import Catalog, VirtualPath, parse_path

The facade that wires every layer together lives in
``mfs.fs.filesystem`` (``MiniFileSystem``).
"""

from mfs.fs.catalog import Catalog, CatalogEntry, EntryKind
from mfs.fs.entries import EntryOps
from mfs.fs.errors import (
    AlreadyExistsError,
    CatalogCorruptError,
    CycleError,
    DirectoryNotFoundError,
    EmptyPathError,
    HostStorageError,
    InvalidPathError,
    MfsError,
    NotFoundError,
    RootHasNoParentError,
)
from mfs.fs.lister import Lister, format_listing
from mfs.fs.path import (
    CATALOG_SUFFIX,
    DEFAULT_ROOT_NAME,
    SEPARATOR,
    VirtualPath,
    catalog_key,
    encode_host_key,
    last_segment,
    move_marker_key,
    parent_catalog_key,
    parse_path,
    validate_segment,
)
from mfs.fs.storage import DiskStorage, HostStorage, MemoryStorage
from mfs.fs.tree import TreeOps

__all__ = [
    "CATALOG_SUFFIX",
    "DEFAULT_ROOT_NAME",
    "SEPARATOR",
    "AlreadyExistsError",
    "Catalog",
    "CatalogCorruptError",
    "CatalogEntry",
    "CycleError",
    "DirectoryNotFoundError",
    "DiskStorage",
    "EmptyPathError",
    "EntryKind",
    "EntryOps",
    "HostStorage",
    "HostStorageError",
    "InvalidPathError",
    "Lister",
    "MemoryStorage",
    "MfsError",
    "NotFoundError",
    "RootHasNoParentError",
    "TreeOps",
    "VirtualPath",
    "catalog_key",
    "encode_host_key",
    "format_listing",
    "last_segment",
    "move_marker_key",
    "parent_catalog_key",
    "parse_path",
    "validate_segment",
]
