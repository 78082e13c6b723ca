"""Runtime configuration.

A configuration tells the file system where its flat host directory
lives, what the root directory is called, and how text is encoded when
the ``echo``/``cat`` commands turn strings into file content.

Configuration can come from a JSON file::

    {
        "storage_dir": "mfs-data",
        "root_name": "root",
        "encoding": "utf-8",
        "backend": "disk"
    }

Missing keys fall back to the defaults on ``MfsConfig``.
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from mfs.fs.path import DEFAULT_ROOT_NAME, validate_segment
from mfs.fs.storage import DiskStorage, HostStorage, MemoryStorage

DEFAULT_STORAGE_DIR = Path("mfs-data")


class StorageBackend(StrEnum):
    """Which ``HostStorage`` implementation to build."""

    DISK = "disk"
    MEMORY = "memory"


class ConfigError(ValueError):
    """Raise when a configuration file cannot be read or is invalid."""


@dataclass(frozen=True)
class MfsConfig:
    """Settings for one file system instance."""

    storage_dir: Path = field(default=DEFAULT_STORAGE_DIR)
    root_name: str = DEFAULT_ROOT_NAME
    encoding: str = "utf-8"
    backend: StorageBackend = StorageBackend.DISK

    def __post_init__(self) -> None:
        """Validate the root name and encoding.

        Raises:
            ConfigError: If either value is unusable.

        """
        try:
            validate_segment(self.root_name)
        except ValueError as e:
            msg = f"Invalid root name: {e}"
            raise ConfigError(msg) from e
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            msg = f"Unknown encoding: {self.encoding}"
            raise ConfigError(msg) from e

    def open_storage(self) -> HostStorage:
        """Build the configured storage backend."""
        if self.backend is StorageBackend.MEMORY:
            return MemoryStorage()
        return DiskStorage(self.storage_dir)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "storage_dir": str(self.storage_dir),
            "root_name": self.root_name,
            "encoding": self.encoding,
            "backend": self.backend.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MfsConfig:
        """Build a configuration from a dictionary, defaulting missing keys.

        Raises:
            ConfigError: If a value has the wrong type or is unknown.

        """
        try:
            return cls(
                storage_dir=Path(data.get("storage_dir", DEFAULT_STORAGE_DIR)),
                root_name=data.get("root_name", DEFAULT_ROOT_NAME),
                encoding=data.get("encoding", "utf-8"),
                backend=StorageBackend(data.get("backend", StorageBackend.DISK)),
            )
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigError(msg) from e


def load_config(path: Path) -> MfsConfig:
    """Load a configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or
            holds invalid values.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load configuration: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = f"Configuration must be a JSON object: {path}"
        raise ConfigError(msg)
    return MfsConfig.from_dict(data)
