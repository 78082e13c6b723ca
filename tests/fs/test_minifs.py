"""Tests for the ``MiniFileSystem`` facade.

The facade wires storage, catalogs, entry and tree operations together
and exposes the command surface.  These tests run the same scenarios
the command line would, against memory and against a real directory.
"""

from collections.abc import Callable
from typing import TypeAlias
from pathlib import Path

import pytest

from mfs.config import MfsConfig, StorageBackend
from mfs.fs.errors import NotFoundError
from mfs.fs.filesystem import MiniFileSystem
from mfs.fs.path import VirtualPath
from mfs.fs.storage import DiskStorage, MemoryStorage
from mfs.logging import LogLevel

Checker: TypeAlias = Callable[[MiniFileSystem], None]

ROOT = VirtualPath.root()


class TestInitialisation:
    """Verify the root is always present."""

    def test_root_catalog_created(self) -> None:
        """A fresh file system has an empty root catalog."""
        fs = MiniFileSystem(MemoryStorage())
        assert fs.storage.keys() == ["root.mfs"]
        assert fs.list(ROOT) == []

    def test_existing_root_is_kept(self) -> None:
        """Opening a storage that already has a root leaves it alone."""
        storage = MemoryStorage()
        MiniFileSystem(storage).create_file(ROOT.child("a"))
        reopened = MiniFileSystem(storage)
        assert reopened.list(ROOT) == [("File: ", "a")]

    def test_custom_root_name(self) -> None:
        """The configured root name is used for the root catalog."""
        fs = MiniFileSystem(MemoryStorage(), config=MfsConfig(root_name="home"))
        assert fs.root == VirtualPath.of("home")
        assert fs.storage.keys() == ["home.mfs"]

    def test_storage_from_config(self) -> None:
        """Without an explicit storage the configured backend is opened."""
        fs = MiniFileSystem(config=MfsConfig(backend=StorageBackend.MEMORY))
        assert isinstance(fs.storage, MemoryStorage)

    def test_root_initialisation_logged(self) -> None:
        """Creating the root leaves an INFO record."""
        fs = MiniFileSystem(MemoryStorage())
        assert fs.logger.filter(min_level=LogLevel.INFO)[0].message == "initialised root"


class TestTextContent:
    """Verify text in, text out."""

    def test_append_then_read(self, fs: MiniFileSystem) -> None:
        """Appended text reads back as one line."""
        notes = ROOT.child("notes")
        fs.create_file(notes)
        fs.append(notes, "hello,")
        fs.append(notes, "Jack")
        assert list(fs.read_file(notes)) == ["hello,Jack"]

    def test_non_ascii_round_trip(self, fs: MiniFileSystem) -> None:
        """Text is encoded with the configured encoding."""
        notes = ROOT.child("notes")
        fs.create_file(notes)
        fs.append(notes, "привет ✓")
        assert list(fs.read_file(notes)) == ["привет ✓"]

    def test_read_missing_raises(self, fs: MiniFileSystem) -> None:
        """Reading a file that does not exist fails immediately."""
        with pytest.raises(NotFoundError):
            fs.read_file(ROOT.child("nope"))


class TestCatalogConsistency:
    """Verify catalogs and storage agree after mixed operation sequences."""

    def test_mixed_sequence(self, fs: MiniFileSystem, consistent: Checker) -> None:
        """Every step leaves catalogs and host entries in agreement."""
        docs = ROOT.child("docs")
        archive = ROOT.child("archive")
        steps: list[Callable[[], None]] = [
            lambda: fs.make_dir(docs),
            lambda: fs.make_dir(archive),
            lambda: fs.create_file(docs.child("a.txt")),
            lambda: fs.create_file(docs.child("b.txt")),
            lambda: fs.copy_file(docs.child("a.txt"), archive),
            lambda: fs.move_file(docs.child("b.txt"), ROOT),
            lambda: fs.move_dir(docs, archive),
            lambda: fs.delete_file(ROOT.child("b.txt")),
            lambda: fs.remove_dir(archive),
        ]
        for step in steps:
            step()
            consistent(fs)
        assert fs.storage.keys() == ["root.mfs"]

    def test_copy_vs_move(self, fs: MiniFileSystem) -> None:
        """Copy keeps the source listing; move removes it."""
        docs = ROOT.child("docs")
        fs.make_dir(docs)
        fs.create_file(ROOT.child("c"))
        fs.create_file(ROOT.child("m"))
        fs.copy_file(ROOT.child("c"), docs)
        fs.move_file(ROOT.child("m"), docs)
        assert fs.list(ROOT) == [("File: ", "c"), ("Directory: ", "docs")]
        assert fs.list(docs) == [("File: ", "c"), ("File: ", "m")]


class TestOnDisk:
    """Replay the original command scenario against a real directory."""

    def test_scenario(self, tmp_path: Path) -> None:
        """Create, list, remove, move, write, copy, and delete in sequence."""
        fs = MiniFileSystem(DiskStorage(tmp_path))
        first_file = ROOT.child("firstFile!")
        first_dir = ROOT.child("firstDirectory")
        second_dir = ROOT.child("secondDirectory")

        fs.create_file(first_file)
        assert fs.list(ROOT) == [("File: ", "firstFile!")]

        fs.make_dir(ROOT.child("firstDirectory!"))
        assert fs.list(ROOT) == [
            ("Directory: ", "firstDirectory!"),
            ("File: ", "firstFile!"),
        ]

        fs.remove_dir(ROOT.child("firstDirectory!"))
        assert fs.list(ROOT) == [("File: ", "firstFile!")]

        fs.make_dir(first_dir)
        fs.make_dir(second_dir)
        fs.move_dir(second_dir, first_dir)
        assert fs.list(first_dir.child("secondDirectory")) == []

        fs.append(first_file, "hello,Jack")
        assert list(fs.read_file(first_file)) == ["hello,Jack"]

        fs.copy_file(first_file, first_dir)
        assert fs.list(first_dir) == [
            ("File: ", "firstFile!"),
            ("Directory: ", "secondDirectory"),
        ]

        fs.delete_file(first_file)
        assert fs.list(ROOT) == [("Directory: ", "firstDirectory")]

        assert all(p.is_file() for p in tmp_path.iterdir())

    def test_state_survives_reopen(self, tmp_path: Path) -> None:
        """A second instance over the same directory sees the same tree."""
        fs = MiniFileSystem(DiskStorage(tmp_path))
        fs.make_dir(ROOT.child("docs"))
        fs.create_file(ROOT.child("docs").child("a"))
        fs.append(ROOT.child("docs").child("a"), "kept")

        reopened = MiniFileSystem(DiskStorage(tmp_path))
        assert reopened.list(ROOT.child("docs")) == [("File: ", "a")]
        assert list(reopened.read_file(ROOT.child("docs").child("a"))) == ["kept"]
