"""Command-line interface for Odyc.js helper commands."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from odyc_cli.sprites import SUCCESS, SpriteError, generate, logger

PROG = "odyc-cli"
ODYC = logging.INFO + 3

_STYLES = {
    logging.DEBUG: ("DEBUG", "0", "8"),
    logging.INFO: ("INFO", "0", "6"),
    SUCCESS: ("SUCCESS", "0", "40"),
    ODYC: ("ODYC", "0", "165"),
    logging.WARNING: ("WARN", "192", None),
    logging.ERROR: ("ERROR!", "0", "1"),
}


class _LevelFormatter(logging.Formatter):
    def __init__(self, colour: bool) -> None:
        super().__init__()
        self._colour = colour

    def format(self, record: logging.LogRecord) -> str:
        label, foreground, background = _STYLES.get(
            record.levelno, (record.levelname, "0", None)
        )
        if self._colour:
            codes = ["1", f"38;5;{foreground}"]
            if background is not None:
                codes.append(f"48;5;{background}")
                label = f" {label} "
            label = f"\x1b[{';'.join(codes)}m{label}\x1b[0m"
        return f"{label} {record.getMessage()}"


class _Formatter(argparse.HelpFormatter):
    def add_usage(self, usage, actions, groups, prefix=None):
        return super().add_usage(usage, actions, groups, "Usage: " if prefix is None else prefix)


def _is_terminal(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def configure_logging(stream: TextIO) -> logging.Handler:
    """Send the package's log records to ``stream`` with level labels."""
    logging.addLevelName(SUCCESS, "SUCCESS")
    logging.addLevelName(ODYC, "ODYC")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(_LevelFormatter(_is_terminal(stream)))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return handler


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``odyc-cli`` command."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "CLI tool with handy commands for Odyc.js developers. Generate code from "
            "sprite, or do similar actions making your life with Odyc.js easier."
        ),
        formatter_class=_Formatter,
    )
    commands = parser.add_subparsers(title="Available Commands", dest="command", metavar="COMMAND")
    sprites = commands.add_parser(
        "sprites",
        help="Generate code from sprites directory",
        description=(
            "Output JavaScript file containing definitions for colors and sprites "
            "based on multiple images in assets directory."
        ),
        formatter_class=_Formatter,
    )
    sprites.add_argument("-a", "--assets", help="path to assets directory")
    sprites.add_argument("-o", "--output", help="path to output file")
    sprites.add_argument(
        "-f", "--force", action="store_true", help="overwrite output file if it exists"
    )
    sprites.set_defaults(command_parser=sprites)
    return parser


def _exit_code(code) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_sprites(args: argparse.Namespace) -> int:
    missing = [f'"{name}"' for name in ("assets", "output") if getattr(args, name) is None]
    if missing:
        print(f"Error: required flag(s) {', '.join(missing)} not set", file=sys.stderr)
        args.command_parser.print_usage(sys.stderr)
        return 1
    try:
        generate(args.assets, args.output, args.force)
    except SpriteError as exc:
        logger.error(str(exc))
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    configure_logging(sys.stderr)
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return _exit_code(exc.code)

    if args.command is None:
        logger.log(ODYC, "Welcome to Odyc.js CLI!")
        logger.info("Add --help to learn how to use this command")
        return 0
    return _run_sprites(args)


if __name__ == "__main__":
    sys.exit(main())