"""Command-line front door for chopsticks.

Parses CLI options, resolves the snippet document, and configures logging.
Then dispatches into the interactive runtime (or prints and exits).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import load_list_pane_percent, load_shell, load_snippets_path, load_style
from .errors import ChopsticksError
from .runtime import run_app
from .snippet import Snippet
from .store import SnippetStore

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None) -> None:
    """Send ``chopsticks`` logs to ``log_file``, or nowhere.

    The TUI owns the terminal, so logging never targets stdout/stderr.
    """
    package_logger = logging.getLogger("chopsticks")
    package_logger.propagate = False
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)


def resolve_snippets_path(cli_path: str | None) -> Path | None:
    """Pick the snippet document: CLI option, then config, then default."""
    if cli_path is not None:
        return Path(cli_path).expanduser()
    return load_snippets_path()


def format_snippet_listing(snippets: list[Snippet]) -> str:
    out: list[str] = []
    for snippet in snippets:
        out.append(snippet.cmd)
        out.append("\n")
        for line in snippet.description.splitlines():
            out.append(f"    {line}\n")
    return "".join(out)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the snippet picker."""
    parser = argparse.ArgumentParser(
        prog="chopsticks",
        description="Store, fuzzy-search, edit, and run command snippets.",
    )
    parser.add_argument("--snippets", metavar="PATH", default=None, help="Snippet file to use instead of the default.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write diagnostic logs to PATH.")
    parser.add_argument("--list", action="store_true", help="Print stored snippets and exit.")
    parser.add_argument("--style", default=None, help="Pygments style name for command highlighting.")
    parser.add_argument("--no-color", action="store_true", help="Disable command highlighting.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    configure_logging(Path(args.log_file) if args.log_file else None)
    store = SnippetStore(resolve_snippets_path(args.snippets))

    try:
        if args.list:
            sys.stdout.write(format_snippet_listing(store.load()))
            return
        style = None if args.no_color else (args.style or load_style())
        run_app(store, shell=load_shell(), list_pane_percent=load_list_pane_percent(), style=style)
    except ChopsticksError as exc:
        raise SystemExit(f"chopsticks: {exc}") from exc


if __name__ == "__main__":
    main()
