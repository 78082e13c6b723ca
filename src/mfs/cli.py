"""Command-line entry point.

Two ways in:

1. **Batch** — commands given as arguments run in order, exactly like
   the token stream the dispatcher consumes::

       mfs mkdir root-docs touch root-docs-a.txt ls root-docs

2. **Interactive** — with no commands, read one line at a time from
   standard input until ``exit`` or end of input.

Output goes to stdout, errors to stderr.  A batch that stops on an
error exits with status 1.  ``--verbose`` dumps the operation log to
stderr when the run ends.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from mfs.commands import BatchResult, CommandRunner
from mfs.config import ConfigError, MfsConfig, StorageBackend, load_config
from mfs.fs.errors import MfsError
from mfs.fs.filesystem import MiniFileSystem

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_COMMAND = "exit"
PROMPT = "mfs> "


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mfs",
        description="Hierarchical file system stored in a single flat directory.",
    )
    parser.add_argument("--config", type=Path, help="JSON configuration file")
    parser.add_argument("--storage", type=Path, help="host directory holding the entries")
    parser.add_argument(
        "--memory", action="store_true", help="keep everything in memory (nothing is saved)"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="print the operation log to stderr"
    )
    parser.add_argument("commands", nargs=argparse.REMAINDER, help="commands to run, e.g. ls root")
    return parser


def resolve_config(args: argparse.Namespace) -> MfsConfig:
    """Combine the configuration file with command-line overrides.

    Raises:
        ConfigError: If the configuration file is unusable.

    """
    config = load_config(args.config) if args.config is not None else MfsConfig()
    data = config.to_dict()
    if args.storage is not None:
        data["storage_dir"] = str(args.storage)
    if args.memory:
        data["backend"] = StorageBackend.MEMORY.value
    return MfsConfig.from_dict(data)


def _report(result: BatchResult) -> None:
    if result.output:
        print(result.text)  # noqa: T201
    if result.error is not None:
        print(result.error, file=sys.stderr)  # noqa: T201


def _interactive(runner: CommandRunner) -> int:
    """Read-eval-print until ``exit`` or end of input."""
    status = 0
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()  # noqa: T201
            break
        except KeyboardInterrupt:
            print("\nInterrupted.")  # noqa: T201
            break
        if line.strip() == EXIT_COMMAND:
            break
        result = runner.execute(line)
        _report(result)
        status = 0 if result.ok else 1
    return status


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``mfs`` command.

    This is the ``mfs`` console entry point.

    Returns:
        The process exit status.

    """
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
        fs = MiniFileSystem(config=config)
    except (ConfigError, MfsError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        return 2

    runner = CommandRunner(fs)
    if args.commands:
        result = runner.run(args.commands)
        _report(result)
        status = 0 if result.ok else 1
    else:
        status = _interactive(runner)

    if args.verbose:
        for entry in fs.logger.entries:
            print(entry, file=sys.stderr)  # noqa: T201
    return status


if __name__ == "__main__":
    sys.exit(main())
