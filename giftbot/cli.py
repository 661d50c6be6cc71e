"""Command-line entry point: version information and backup management."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from giftbot.backup import BackupError, create_backup, restore_backup

PROG = "steamgifts-bot"
VERSION = "dev"
COMMIT = "none"
DATE = "unknown"

_DESCRIPTION = """\
steamgifts-bot is a small, fast, multi-account giveaway bot.

Back up and restore its config, state and log files, or print the
build version."""


class CommandError(Exception):
    """A command failed; the message is shown to the user."""


def _add_common_flags(parser: argparse.ArgumentParser, *, suppress: bool) -> None:
    def default(value: str) -> object:
        return argparse.SUPPRESS if suppress else value

    parser.add_argument(
        "-c",
        "--config",
        default=default(""),
        help="path to config.yml (default: auto-discovered)",
    )
    parser.add_argument(
        "--log-level",
        default=default("info"),
        help="log level: debug, info, warn, error",
    )
    parser.add_argument(
        "--log-format",
        default=default("auto"),
        help="log format: auto, text, json",
    )


def _cmd_version(args: argparse.Namespace, out: TextIO) -> None:
    out.write(f"{PROG} {args.build_version} (commit {args.build_commit}, built {args.build_date})\n")


def _cmd_backup_create(args: argparse.Namespace, out: TextIO) -> None:
    try:
        archive, names = create_backup(args.config or None, args.output or None)
    except BackupError as exc:
        raise CommandError(str(exc)) from exc
    for name in names:
        out.write(f"  + {name}\n")
    out.write(f"✓ backed up {len(names)} files to {archive}\n")


def _cmd_backup_restore(args: argparse.Namespace, out: TextIO) -> None:
    dest_dir = Path(args.config).parent if args.config else None
    try:
        restored, skipped = restore_backup(args.archive, dest_dir)
    except BackupError as exc:
        raise CommandError(str(exc)) from exc
    for name in skipped:
        out.write(f"  ? skipping unknown file: {name}\n")
    for name in restored:
        out.write(f"  ✓ {name}\n")
    out.write(f"✓ restored {len(restored)} files from {args.archive}\n")


def build_parser(version: str = VERSION, commit: str = COMMIT, date: str = DATE) -> argparse.ArgumentParser:
    """The full command tree for the given build information."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s version {version} (commit {commit}, built {date})",
    )
    _add_common_flags(parser, suppress=False)
    parser.set_defaults(
        handler=None,
        help_parser=parser,
        build_version=version,
        build_commit=commit,
        build_date=date,
    )

    common = argparse.ArgumentParser(add_help=False)
    _add_common_flags(common, suppress=True)

    commands = parser.add_subparsers(title="commands", metavar="COMMAND")

    version_cmd = commands.add_parser(
        "version", parents=[common], help="Print the build version and exit"
    )
    version_cmd.set_defaults(handler=_cmd_version)

    backup = commands.add_parser(
        "backup", parents=[common], help="Back up config, state, and logs to a zip file"
    )
    backup.set_defaults(handler=None, help_parser=backup)
    backup_commands = backup.add_subparsers(title="commands", metavar="COMMAND")

    create = backup_commands.add_parser(
        "create",
        parents=[common],
        help="Create a backup zip of config.yml, state.json, and logs",
    )
    create.add_argument("output", nargs="?", default="", metavar="output.zip")
    create.set_defaults(handler=_cmd_backup_create)

    restore = backup_commands.add_parser(
        "restore",
        parents=[common],
        help="Restore config, state, and logs from a backup zip",
    )
    restore.add_argument("archive", metavar="backup.zip")
    restore.set_defaults(handler=_cmd_backup_restore)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.handler is None:
        args.help_parser.print_help(sys.stdout)
        return 0
    try:
        args.handler(args, sys.stdout)
    except CommandError as exc:
        message = str(exc)
        if message:
            print(f"error: {message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())