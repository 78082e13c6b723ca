"""Host storage — the flat key/bytes layer underneath the namespace.

The catalog and entry code never touch a real directory tree.  They
talk to a ``HostStorage``: a flat mapping from string keys to byte
content, with just enough primitives to create, append, read line by
line, rename, copy, and delete an entry.

Two backends ship:

- ``DiskStorage`` — one host directory; each key is a plain file
  directly inside it.  This is the production backend.
- ``MemoryStorage`` — a dict of bytearrays.  Same semantics, no disk,
  which keeps the tests fast and isolated.

Missing and existing keys use the builtin ``FileNotFoundError`` and
``FileExistsError``; the layers above translate them into the file
system's own error kinds.  Every other host failure is already a
``HostStorageError``.
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING

from mfs.fs.errors import HostStorageError

if TYPE_CHECKING:
    from collections.abc import Generator, Iterator
    from pathlib import Path

_NEWLINE = b"\n"


class HostStorage(ABC):
    """Flat key → bytes store used by the catalog and entry layers."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if *key* is present."""

    @abstractmethod
    def create(self, key: str) -> None:
        """Create an empty entry.

        Raises:
            FileExistsError: If *key* is already present.

        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove an entry.

        Raises:
            FileNotFoundError: If *key* is absent.

        """

    @abstractmethod
    def append(self, key: str, data: bytes) -> None:
        """Append *data* to an existing entry.

        Raises:
            FileNotFoundError: If *key* is absent.

        """

    @abstractmethod
    def read_bytes(self, key: str) -> bytes:
        """Return the full content of an entry.

        Raises:
            FileNotFoundError: If *key* is absent.

        """

    @abstractmethod
    def write_bytes(self, key: str, data: bytes) -> None:
        """Replace the content of an entry, creating it if needed."""

    @abstractmethod
    def rename(self, source: str, target: str) -> None:
        """Move an entry to a new key.

        Raises:
            FileNotFoundError: If *source* is absent.
            FileExistsError: If *target* is already present.

        """

    @abstractmethod
    def copy(self, source: str, target: str) -> None:
        """Duplicate an entry under a new key.

        Raises:
            FileNotFoundError: If *source* is absent.
            FileExistsError: If *target* is already present.

        """

    @abstractmethod
    def keys(self) -> list[str]:
        """Return every key, sorted."""

    def read_lines(self, key: str) -> Generator[bytes, None, None]:
        r"""Return a lazy, single-pass iterator over the lines of an entry.

        Lines are yielded in storage order without their ``\n``
        terminator.  The existence check happens here, before the
        iterator is returned, not on the first ``next()``.  Callers that stop
        early should ``close()`` the iterator so a backend holding the
        host file open can release it.

        Raises:
            FileNotFoundError: If *key* is absent.

        """
        data = self.read_bytes(key)
        return _split_lines(data)


def _split_lines(data: bytes) -> Generator[bytes, None, None]:
    """Yield the lines of *data*, dropping the final empty remainder."""
    start = 0
    while start < len(data):
        end = data.find(_NEWLINE, start)
        if end == -1:
            yield data[start:]
            return
        yield data[start:end]
        start = end + 1


class MemoryStorage(HostStorage):
    """In-memory backend: a dict of bytearrays."""

    def __init__(self) -> None:
        """Create an empty store."""
        self._data: dict[str, bytearray] = {}

    def _get(self, key: str) -> bytearray:
        try:
            return self._data[key]
        except KeyError:
            msg = f"No such host entry: {key}"
            raise FileNotFoundError(msg) from None

    def _reserve(self, key: str) -> None:
        if key in self._data:
            msg = f"Host entry exists: {key}"
            raise FileExistsError(msg)

    def exists(self, key: str) -> bool:
        return key in self._data

    def create(self, key: str) -> None:
        self._reserve(key)
        self._data[key] = bytearray()

    def delete(self, key: str) -> None:
        self._get(key)
        del self._data[key]

    def append(self, key: str, data: bytes) -> None:
        self._get(key).extend(data)

    def read_bytes(self, key: str) -> bytes:
        return bytes(self._get(key))

    def write_bytes(self, key: str, data: bytes) -> None:
        self._data[key] = bytearray(data)

    def rename(self, source: str, target: str) -> None:
        content = self._get(source)
        self._reserve(target)
        self._data[target] = content
        del self._data[source]

    def copy(self, source: str, target: str) -> None:
        content = self._get(source)
        self._reserve(target)
        self._data[target] = bytearray(content)

    def keys(self) -> list[str]:
        return sorted(self._data)


class DiskStorage(HostStorage):
    """Backend storing every key as a file directly inside one host directory.

    Nothing ever creates a sub-directory under *root*: the whole
    virtual hierarchy is encoded in the file names.

    Missing and already existing keys surface as ``FileNotFoundError``
    and ``FileExistsError`` like the other backend.  Any other refusal
    from the host (a name too long, no permission) is raised as
    ``HostStorageError``.
    """

    def __init__(self, root: Path) -> None:
        """Create the backend, making *root* if it does not exist yet."""
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        """Return the host directory."""
        return self._root

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key:
            msg = f"Invalid host key: {key!r}"
            raise ValueError(msg)
        return self._root / key

    def exists(self, key: str) -> bool:
        with _host_errors(key):
            return self._path(key).is_file()

    def create(self, key: str) -> None:
        # "x" mode raises FileExistsError for us.
        with _host_errors(key), self._path(key).open("xb"):
            pass

    def delete(self, key: str) -> None:
        with _host_errors(key):
            self._path(key).unlink()

    def append(self, key: str, data: bytes) -> None:
        with _host_errors(key):
            path = self._path(key)
            if not path.is_file():
                msg = f"No such host entry: {key}"
                raise FileNotFoundError(msg)
            with path.open("ab") as f:
                f.write(data)

    def read_bytes(self, key: str) -> bytes:
        with _host_errors(key):
            return self._path(key).read_bytes()

    def write_bytes(self, key: str, data: bytes) -> None:
        with _host_errors(key):
            self._path(key).write_bytes(data)

    def read_lines(self, key: str) -> Generator[bytes, None, None]:
        """Stream lines straight from the host file.

        The host file is opened on the first ``next()`` and stays open
        until the iterator is exhausted or closed.
        """
        with _host_errors(key):
            path = self._path(key)
            if not path.is_file():
                msg = f"No such host entry: {key}"
                raise FileNotFoundError(msg)
        return _stream_lines(path, key)

    def rename(self, source: str, target: str) -> None:
        with _host_errors(source):
            src, dst = self._check_transfer(source, target)
            src.rename(dst)

    def copy(self, source: str, target: str) -> None:
        with _host_errors(source):
            src, dst = self._check_transfer(source, target)
            shutil.copyfile(src, dst)

    def _check_transfer(self, source: str, target: str) -> tuple[Path, Path]:
        src = self._path(source)
        dst = self._path(target)
        if not src.is_file():
            msg = f"No such host entry: {source}"
            raise FileNotFoundError(msg)
        if dst.exists():
            msg = f"Host entry exists: {target}"
            raise FileExistsError(msg)
        return src, dst

    def keys(self) -> list[str]:
        with _host_errors(str(self._root)):
            return sorted(p.name for p in self._root.iterdir() if p.is_file())


@contextmanager
def _host_errors(key: str) -> Iterator[None]:
    """Translate host failures other than missing/existing keys."""
    try:
        yield
    except (FileNotFoundError, FileExistsError):
        raise
    except OSError as e:
        msg = f"Host storage refused {key}: {e.strerror or e}"
        raise HostStorageError(msg) from e


def _stream_lines(path: Path, key: str) -> Generator[bytes, None, None]:
    with _host_errors(key), path.open("rb") as f:
        for line in f:
            yield line.removesuffix(_NEWLINE)
