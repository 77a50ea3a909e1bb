"""Command-line entry point.

Usage::

    pipeask "summarize" < notes.txt
    git diff | pipeask "write a commit message for this diff"
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import IO, Any

from pipeask import __version__
from pipeask._config import Settings
from pipeask._exceptions import ConfigError, InputError, PipeaskError
from pipeask._input import build_query, read_input
from pipeask._logging import configure_logging
from pipeask.llm import Client

logger = logging.getLogger(__name__)

USAGE = "Usage: send a query to o1 via typing something or cat a file"

# Only these are read as options, and only before the prompt.
_OPTIONS = frozenset({"-h", "--help", "-v", "--verbose", "--version"})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pipeask",
        description="Send a prompt, plus anything piped on stdin, to a chat model.",
        epilog=(
            "The first argument that is not one of the options above is the prompt, "
            "even if it starts with '-'. Use '--' to send a prompt such as '-v'."
        ),
    )
    parser.add_argument("prompt", nargs="?", help="prompt text")
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log request details to stderr"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _split_argv(argv: Sequence[str]) -> list[str]:
    """Stop option parsing at the prompt so it is never taken for an option."""
    for i, arg in enumerate(argv):
        if arg == "--":
            return list(argv)
        if arg not in _OPTIONS:
            return [*argv[:i], "--", *argv[i:]]
    return list(argv)


def run(client: Client, prompt: str, stdin: IO[Any] | None, stdout: IO[str]) -> None:
    """Assemble the query, send it, and print the first choice."""
    query = build_query(prompt, read_input(stdin))
    logger.debug("sending %d-character query to %s", len(query), client.model)
    response = client.chat(query)
    print(response.first_choice().message.content, file=stdout)


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(_split_argv(argv))
    configure_logging(args.verbose)

    if args.prompt is None:
        print(USAGE, file=sys.stdout)
        return 1

    try:
        client = Client(Settings.from_env())
        run(client, args.prompt, sys.stdin, sys.stdout)
    except (ConfigError, InputError) as exc:
        logger.error("%s", exc)
        return 1
    except PipeaskError as exc:
        logger.error("Failed to get chat completion: %s", exc)
        return 1
    return 0


def entrypoint() -> None:
    sys.exit(main())
