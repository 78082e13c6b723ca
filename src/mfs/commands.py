"""Batch command dispatcher.

Commands arrive as one flat token stream, the way they appear on the
command line::

    touch root-notes.txt echo root-notes.txt hello cat root-notes.txt

Each command name consumes a fixed number of following tokens as its
arguments.  Paths are fully qualified, hyphen-joined strings
(``root-docs-notes.txt``) and are parsed into ``VirtualPath`` values
here, at the boundary, so nothing below ever re-parses a string.

Design choices:
    - **Returns output lines, not prints.**  The caller decides where
      output goes (terminal, HTTP response, test assertion).
    - **Command dispatch via a dict.**  Adding a command means writing
      a handler and adding one table entry.
    - **The batch stops at the first error.**  Commands that already
      ran stay applied; nothing is rolled back.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from mfs.fs.errors import MfsError
from mfs.fs.lister import format_listing
from mfs.fs.path import parse_path
from mfs.logging import LogLevel

if TYPE_CHECKING:
    from mfs.fs.filesystem import MiniFileSystem
    from mfs.fs.path import VirtualPath

# Type alias for a command handler: takes its arguments, returns output lines.
_Handler: TypeAlias = Callable[[list[str]], list[str]]

HELP_HEADER = "MFS (My File System) - a hierarchical file system stored in a single directory"
HELP_FOOTER = "Note: directory and file names must be fully qualified, e.g. root-123.txt."


@dataclass(frozen=True)
class _Command:
    """One dispatch table entry."""

    usage: str
    description: str
    arity: int
    handler: _Handler


@dataclass
class BatchResult:
    """What a batch run produced.

    Attributes:
        output: Output lines from every command that completed.
        error: The message that stopped the batch, or None.
        executed: Number of commands that completed.

    """

    output: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    error: str | None = None
    executed: int = 0

    @property
    def ok(self) -> bool:
        """Return True if the whole batch ran."""
        return self.error is None

    @property
    def text(self) -> str:
        """Return the output as one newline-joined string."""
        return "\n".join(self.output)


class CommandRunner:
    """Run token streams against a ``MiniFileSystem``."""

    def __init__(self, fs: MiniFileSystem) -> None:
        """Create a runner bound to *fs*."""
        self._fs = fs
        self._commands: dict[str, _Command] = {
            "ls": _Command("ls <dir>", "List the contents of a directory.", 1, self._cmd_ls),
            "mkdir": _Command("mkdir <dir>", "Create a directory.", 1, self._cmd_mkdir),
            "rmdir": _Command(
                "rmdir <dir>", "Remove a directory and everything in it.", 1, self._cmd_rmdir
            ),
            "mvdir": _Command(
                "mvdir <src_dir> <target_dir>",
                "Move src_dir into target_dir.",
                2,
                self._cmd_mvdir,
            ),
            "touch": _Command("touch <file>", "Create an empty file.", 1, self._cmd_touch),
            "echo": _Command(
                "echo <file> <content>", "Append content to a file.", 2, self._cmd_echo
            ),
            "cat": _Command("cat <file>", "Display the contents of a file.", 1, self._cmd_cat),
            "delete": _Command("delete <file>", "Delete a file.", 1, self._cmd_delete),
            "copy": _Command(
                "copy <src_file> <target_dir>",
                "Copy src_file into target_dir.",
                2,
                self._cmd_copy,
            ),
            "mv": _Command(
                "mv <src_file> <target_dir>",
                "Move src_file into target_dir.",
                2,
                self._cmd_mv,
            ),
            "log": _Command("log", "Show the operation log.", 0, self._cmd_log),
            "clearlog": _Command(
                "clearlog", "Empty the operation log.", 0, self._cmd_clearlog
            ),
            "help": _Command("help", "Display this help.", 0, self._cmd_help),
        }

    @property
    def command_names(self) -> list[str]:
        """Return every command name, sorted."""
        return sorted(self._commands)

    def execute(self, line: str) -> BatchResult:
        """Split *line* on whitespace and run it as a batch."""
        return self.run(line.split())

    def run(self, tokens: Sequence[str]) -> BatchResult:
        """Run every command in *tokens* until the end or the first error."""
        result = BatchResult()
        i = 0
        while i < len(tokens):
            name = tokens[i]
            command = self._commands.get(name)
            if command is None:
                result.error = f"Unknown command: {name}"
                break

            args = list(tokens[i + 1 : i + 1 + command.arity])
            if len(args) < command.arity:
                result.error = f"Usage: {command.usage}"
                break

            try:
                result.output.extend(command.handler(args))
            except MfsError as e:
                result.error = f"Error: {e}"
                break

            result.executed += 1
            i += 1 + command.arity

        if result.error is not None:
            self._fs.logger.log(LogLevel.ERROR, result.error, source="commands")
        return result

    def help_text(self) -> str:
        """Return the full help message."""
        lines = [HELP_HEADER, "Supported commands:"]
        lines.extend(f"  {c.usage} - {c.description}" for c in self._commands.values())
        lines.append(HELP_FOOTER)
        return "\n".join(lines)

    def _path(self, text: str) -> VirtualPath:
        return parse_path(text, root_name=self._fs.config.root_name)

    # -- Handlers -----------------------------------------------------------

    def _cmd_ls(self, args: list[str]) -> list[str]:
        """List directory contents."""
        listing = format_listing(self._fs.list(self._path(args[0])))
        return listing.splitlines()

    def _cmd_mkdir(self, args: list[str]) -> list[str]:
        self._fs.make_dir(self._path(args[0]))
        return []

    def _cmd_rmdir(self, args: list[str]) -> list[str]:
        self._fs.remove_dir(self._path(args[0]))
        return []

    def _cmd_mvdir(self, args: list[str]) -> list[str]:
        self._fs.move_dir(self._path(args[0]), self._path(args[1]))
        return []

    def _cmd_touch(self, args: list[str]) -> list[str]:
        self._fs.create_file(self._path(args[0]))
        return []

    def _cmd_echo(self, args: list[str]) -> list[str]:
        self._fs.append(self._path(args[0]), args[1])
        return []

    def _cmd_cat(self, args: list[str]) -> list[str]:
        """Read the file line by line."""
        return list(self._fs.read_file(self._path(args[0])))

    def _cmd_delete(self, args: list[str]) -> list[str]:
        self._fs.delete_file(self._path(args[0]))
        return []

    def _cmd_copy(self, args: list[str]) -> list[str]:
        self._fs.copy_file(self._path(args[0]), self._path(args[1]))
        return []

    def _cmd_mv(self, args: list[str]) -> list[str]:
        self._fs.move_file(self._path(args[0]), self._path(args[1]))
        return []

    def _cmd_log(self, _args: list[str]) -> list[str]:
        """Show the operation log."""
        return [str(entry) for entry in self._fs.logger.entries]

    def _cmd_clearlog(self, _args: list[str]) -> list[str]:
        self._fs.logger.clear()
        return []

    def _cmd_help(self, _args: list[str]) -> list[str]:
        return self.help_text().splitlines()
