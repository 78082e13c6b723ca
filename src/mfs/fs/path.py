"""Virtual paths and their flat host keys.

The whole namespace lives inside one flat host directory, so a
hierarchical name has to be squeezed into a single storage key:

- **VirtualPath** — an ordered, non-empty tuple of segment names.  The
  first segment is always the namespace root (``root`` by default).
- **Host key** — the segments joined by ``-``.  For a file this key
  holds its bytes directly; ``root-docs-notes.txt`` is the content of
  ``notes.txt`` inside ``docs``.
- **Catalog key** — the host key of a directory plus ``.mfs``.  A
  directory has no other host representation: ``root-docs.mfs`` is
  the whole of ``docs``.

Everything in this module is a pure transform.  No other module joins
segments by hand.

Because one character separates segments inside a key, a name that
contains it would decode ambiguously (``a-b`` inside ``root`` versus
``b`` inside ``root-a``).  Names are therefore validated when a path is
built.  A name ending in ``.mfs`` is rejected as well: a file called
``docs.mfs`` would share its key with the catalog of a sibling
directory called ``docs``.  Line breaks are refused because a catalog
stores one child per line.
"""

from __future__ import annotations

from dataclasses import dataclass

from mfs.fs.errors import EmptyPathError, InvalidPathError, RootHasNoParentError

SEPARATOR = "-"
"""Joins segments inside a host key."""

CATALOG_SUFFIX = ".mfs"
"""Appended to a directory's host key to name its catalog file."""

DEFAULT_ROOT_NAME = "root"

MOVE_MARKER_SUFFIX = CATALOG_SUFFIX + SEPARATOR + "moving"
"""Names the record of a directory move that has not finished yet."""

_FORBIDDEN_CHARS = frozenset({SEPARATOR, "/", "\\", "\0", "\n", "\r"})
_RESERVED_NAMES = frozenset({".", ".."})


def validate_segment(name: str) -> None:
    """Check that *name* can be stored as one path segment.

    Raises:
        InvalidPathError: If the name is empty, reserved, contains a
            forbidden character, or ends with the catalog suffix.

    """
    if not name:
        msg = "Empty segment name"
        raise InvalidPathError(msg)
    if name in _RESERVED_NAMES:
        msg = f"Reserved segment name: {name}"
        raise InvalidPathError(msg)
    bad = sorted(_FORBIDDEN_CHARS.intersection(name))
    if bad:
        msg = f"Segment name {name!r} contains forbidden character {bad[0]!r}"
        raise InvalidPathError(msg)
    if name.endswith(CATALOG_SUFFIX):
        msg = f"Segment name {name!r} ends with reserved suffix {CATALOG_SUFFIX}"
        raise InvalidPathError(msg)


@dataclass(frozen=True)
class VirtualPath:
    """A hierarchical address inside the namespace.

    Two paths are equal iff their segment tuples are equal.  Ancestry
    is a segment-wise prefix relation, never a substring test.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate every segment.

        Raises:
            EmptyPathError: If there are no segments.
            InvalidPathError: If any segment is invalid.

        """
        if not self.segments:
            msg = "Virtual path has no segments"
            raise EmptyPathError(msg)
        for name in self.segments:
            validate_segment(name)

    @classmethod
    def root(cls, name: str = DEFAULT_ROOT_NAME) -> VirtualPath:
        """Return the namespace root."""
        return cls((name,))

    @classmethod
    def of(cls, *segments: str) -> VirtualPath:
        """Build a path from positional segments: ``VirtualPath.of("root", "a")``."""
        return cls(tuple(segments))

    @property
    def is_root(self) -> bool:
        """Return True if this path has a single segment."""
        return len(self.segments) == 1

    @property
    def name(self) -> str:
        """Return the last segment."""
        return last_segment(self)

    @property
    def parent(self) -> VirtualPath:
        """Return the enclosing directory.

        Raises:
            RootHasNoParentError: If this path is the root.

        """
        if self.is_root:
            msg = f"Root directory has no parent: {self}"
            raise RootHasNoParentError(msg)
        return VirtualPath(self.segments[:-1])

    def child(self, name: str) -> VirtualPath:
        """Return the path of *name* directly under this path."""
        return VirtualPath((*self.segments, name))

    def is_ancestor_of(self, other: VirtualPath) -> bool:
        """Return True if this path's segments are a proper prefix of *other*'s."""
        size = len(self.segments)
        return size < len(other.segments) and other.segments[:size] == self.segments

    def __str__(self) -> str:
        """Format as the user types it: ``root-docs-notes.txt``."""
        return encode_host_key(self)


def encode_host_key(path: VirtualPath) -> str:
    """Join the segments of *path* into its flat host key."""
    return SEPARATOR.join(path.segments)


def catalog_key(path: VirtualPath) -> str:
    """Return the host key of the catalog file for directory *path*."""
    return encode_host_key(path) + CATALOG_SUFFIX


def move_marker_key(path: VirtualPath) -> str:
    """Return the host key recording an unfinished move into directory *path*.

    No file key can collide with it: the segment before the separator would
    have to end with the catalog suffix, which names may not do.
    """
    return encode_host_key(path) + MOVE_MARKER_SUFFIX


def parent_catalog_key(path: VirtualPath) -> str:
    """Return the catalog key of the directory that contains *path*.

    Raises:
        RootHasNoParentError: If *path* is the root.

    """
    return catalog_key(path.parent)


def last_segment(path: VirtualPath) -> str:
    """Return the final segment of *path*.

    Raises:
        EmptyPathError: If *path* has no segments.

    """
    if not path.segments:  # pragma: no cover
        msg = "Virtual path has no segments"
        raise EmptyPathError(msg)
    return path.segments[-1]


def parse_path(text: str, *, root_name: str = DEFAULT_ROOT_NAME) -> VirtualPath:
    """Split a hyphen-joined user string into a validated path.

    Examples::

        "root"                → ("root",)
        "root-docs-notes.txt" → ("root", "docs", "notes.txt")

    Raises:
        EmptyPathError: If *text* is empty.
        InvalidPathError: If a segment is empty or the first segment
            is not the namespace root.

    """
    if not text:
        msg = "Empty path"
        raise EmptyPathError(msg)
    segments = tuple(text.split(SEPARATOR))
    if segments[0] != root_name:
        msg = f"Path must start at {root_name}: {text}"
        raise InvalidPathError(msg)
    return VirtualPath(segments)
