"""Error kinds raised by the flat-storage file system.

Every component-level operation either succeeds or raises exactly one
of the classes below.  Each kind also derives from the closest builtin
exception, so callers that only know the standard library can still
write ``except FileNotFoundError`` and get sensible behaviour:

- ``NotFoundError`` / ``DirectoryNotFoundError`` — ``FileNotFoundError``
- ``AlreadyExistsError`` — ``FileExistsError``
- ``CycleError``, ``HostStorageError`` — ``OSError``
- ``CatalogCorruptError``, ``RootHasNoParentError``, ``EmptyPathError``,
  ``InvalidPathError`` — ``ValueError``

The last three are contract violations: a correct caller never
triggers them, but user input parsed at the command boundary can.
"""


class MfsError(Exception):
    """Base class for every error raised by the file system."""


class NotFoundError(MfsError, FileNotFoundError):
    """Raise when a referenced file or directory does not exist."""


class DirectoryNotFoundError(NotFoundError):
    """Raise when a directory's catalog is absent."""


class AlreadyExistsError(MfsError, FileExistsError):
    """Raise when a create, copy, or move target is already taken."""


class CycleError(MfsError, OSError):
    """Raise when a directory would be moved into itself or a descendant."""


class CatalogCorruptError(MfsError, ValueError):
    """Raise when a catalog line cannot be parsed."""


class RootHasNoParentError(MfsError, ValueError):
    """Raise when the parent of the root directory is requested."""


class EmptyPathError(MfsError, ValueError):
    """Raise when a virtual path has no segments."""


class InvalidPathError(MfsError, ValueError):
    """Raise when a segment name cannot be stored unambiguously."""


class HostStorageError(MfsError, OSError):
    """Raise when the host directory refuses an operation.

    Covers host failures other than a missing or already existing key,
    such as a file name the host considers too long or a permission
    problem.
    """
