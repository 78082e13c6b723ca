"""Shared fixtures for the MFS test suite."""

from collections.abc import Callable

import pytest

from mfs.fs.catalog import EntryKind
from mfs.fs.filesystem import MiniFileSystem
from mfs.fs.path import VirtualPath, catalog_key, encode_host_key
from mfs.fs.storage import MemoryStorage


def collect_host_keys(fs: MiniFileSystem) -> set[str]:
    """Walk every catalog from the root and return the host keys it implies.

    Asserts along the way that every listed child has its host entry.
    """
    expected: set[str] = set()
    pending: list[VirtualPath] = [fs.root]
    while pending:
        directory = pending.pop()
        expected.add(catalog_key(directory))
        entries = fs.catalog.list_children(directory)
        names = [e.name for e in entries]
        assert len(names) == len(set(names)), f"duplicate names in {directory}: {names}"
        for entry in entries:
            child = directory.child(entry.name)
            if entry.kind is EntryKind.FILE:
                key = encode_host_key(child)
                assert fs.storage.exists(key), f"catalog lists missing file {child}"
                expected.add(key)
            else:
                assert fs.catalog.exists(child), f"catalog lists missing directory {child}"
                pending.append(child)
    return expected


def assert_consistent(fs: MiniFileSystem) -> None:
    """Check that catalogs and host storage describe the same tree."""
    expected = collect_host_keys(fs)
    actual = set(fs.storage.keys())
    assert actual == expected, f"orphans: {actual - expected}, missing: {expected - actual}"


@pytest.fixture
def fs() -> MiniFileSystem:
    """Return a fresh in-memory file system."""
    return MiniFileSystem(MemoryStorage())


@pytest.fixture
def consistent() -> Callable[[MiniFileSystem], None]:
    """Return the catalog/storage consistency checker."""
    return assert_consistent
