"""Command-line entry point running the editor in the current terminal."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from kilo_engine import __version__
from kilo_engine.editor.controller import EditorController
from kilo_engine.errors import EditorError
from kilo_engine.input.decoder import InputDecoder
from kilo_engine.io.terminal import Terminal
from kilo_engine.runtime import telemetry
from kilo_engine.runtime.config import EditorConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kilo-engine", description="Edit a text file in the terminal."
    )
    parser.add_argument("path", nargs="?", help="file to open")
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        help="telelog preset (overrides KILO_ENGINE_LOG_* variables)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    try:
        config = EditorConfig.from_env()
    except ValueError as exc:
        print(f"kilo-engine: {exc}", file=sys.stderr)
        return 1

    terminal = Terminal(
        sys.stdin.fileno(), sys.stdout.fileno(), read_timeout=config.read_timeout
    )
    try:
        with terminal.raw_mode:
            rows, cols = terminal.size()
            if args.path:
                editor = EditorController.open(
                    args.path, screen_rows=rows, screen_cols=cols, config=config
                )
            else:
                editor = EditorController.create(
                    screen_rows=rows, screen_cols=cols, config=config
                )
            editor.greet()
            decoder = InputDecoder(terminal.source)
            editor.run(decoder, terminal.write)
            terminal.clear()
    except (EditorError, ValueError) as exc:
        terminal.clear()
        telemetry.record_event("editor.fatal", level="error", data={"error": exc})
        print(f"kilo-engine: {exc}", file=sys.stderr)
        return 1
    return 0


__all__ = ["build_parser", "main"]
