"""
Entry point for the aicommand command-line interface.

aicommand runs a shell command (or reads piped text), sends the captured
output to an OpenAI chat model together with a short analysis request,
and prints the model's explanation.

Usage examples::

    # Explain the output of a command, in Japanese
    aicommand -l ja ls -la

    # Quote the command line to use pipes or redirections
    aicommand "dmesg | tail -n 20"

    # Explain piped input with extra context for the model
    journalctl -u nginx --since today | aicommand -p "focus on security"

    # Long options may also follow a quoted command line
    aicommand "ls -la" --language=ja

Options for aicommand should come before the command.  After the first
command token, only the long forms (--language, --model, --prompt,
--log-level) are still taken as aicommand options; everything else is
passed to the shell unchanged.  A leading ``--`` ends option parsing and
the rest is always the command.

The pipeline is strictly sequential: acquire input, compose the prompt,
call the API once, print the reply.  Any failure stops it and the
process exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence, Tuple

from .acquire import acquire_input, resolve_shell
from .config import LOG_LEVELS, InvocationRequest, Settings
from .errors import AICommandError, CommandExecutionError, InvalidLanguageError
from .openai_client import OpenAIClient
from .prompts import compose_prompt
from .render import Presenter

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Create the argument parser, using `settings` for flag defaults."""
    parser = argparse.ArgumentParser(
        prog="aicommand",
        description=(
            "Shell command result analyzer using OpenAI GPT. Runs the given command "
            "(or reads standard input when no command is given) and asks the model "
            "to explain the output."
        ),
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command line to execute through $SHELL. If omitted, standard input is read.",
    )
    parser.add_argument(
        "-l",
        "--language",
        type=str,
        default=settings.default_language.value,
        help="Language for the explanation (en/ja). Default derived from LANG.",
    )
    parser.add_argument(
        "-m",
        "--model",
        type=str,
        default=settings.default_model,
        help=f"The model to be used for the OpenAI GPT (default: {settings.default_model}).",
    )
    parser.add_argument(
        "-p",
        "--prompt",
        type=str,
        default="",
        help="Custom prompt text added to the analysis request as context.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=list(LOG_LEVELS),
        default=settings.log_level,
        help="Logging verbosity (default from env AICOMMAND_LOGLEVEL or WARNING).",
    )
    return parser


# Long options that are recognized even when written after the command,
# e.g. ``aicommand "ls -la" --language=ja``.  Short forms after the
# command are left alone since they clash with common tool flags
# (``grep -l``, ``ssh -p``).
TRAILING_OPTIONS = ("--language", "--model", "--prompt", "--log-level")


def _is_trailing_option(token: str) -> bool:
    return token in TRAILING_OPTIONS or token.startswith(tuple(f"{opt}=" for opt in TRAILING_OPTIONS))


def split_trailing_options(command: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split `command` into the command proper and trailing aicommand options.

    Everything from the first long aicommand option after the first
    command token onwards is returned as the second element.  A command
    that starts with ``--`` is taken literally and never split.
    """
    tokens = list(command)
    if tokens and tokens[0] == "--":
        return tokens, []
    for index, token in enumerate(tokens[1:], start=1):
        if _is_trailing_option(token):
            return tokens[:index], tokens[index:]
    return tokens, []


def parse_command_line(parser: argparse.ArgumentParser, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse `argv`, also honoring long aicommand options given after the command."""
    args = parser.parse_args(argv)
    command, trailing = split_trailing_options(args.command or [])
    if not trailing:
        return args
    logger.debug("Parsing trailing options %s", trailing)
    # Values already on the namespace are kept unless the tail sets them
    args.command = []
    args = parser.parse_args(trailing, namespace=args)
    if args.command:
        parser.error(
            "unexpected arguments after aicommand options: %s "
            "(quote the command line or put options before it)" % " ".join(args.command)
        )
    args.command = command
    return args


def configure_logging(log_level: Optional[str]) -> None:
    level = getattr(logging, (log_level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(asctime)s %(name)s:%(lineno)d - %(message)s",
    )
    logging.getLogger().setLevel(level)
    logging.getLogger("httpx").setLevel(level)
    logging.getLogger("openai").setLevel(level)
    # Also surface httpcore (wire) when DEBUG to help diagnose networking
    if level <= logging.DEBUG:
        logging.getLogger("httpcore").setLevel(level)


def run(request: InvocationRequest, settings: Settings, presenter: Presenter) -> int:
    """Execute the acquire -> compose -> complete -> present pipeline.

    Returns the process exit code.
    """
    logger.debug(
        "Invocation: args=%s language=%s model=%s custom_prompt=%s",
        list(request.args),
        request.language.value,
        request.model,
        bool(request.custom_prompt),
    )
    try:
        shell = resolve_shell(settings.shell, notify=presenter.notice) if request.args else None
        captured = acquire_input(request.args, shell=shell)
        prompt = compose_prompt(request.language, captured.label, captured.body, request.custom_prompt)

        client = OpenAIClient(settings.openai_api_key, model=request.model, base_url=settings.base_url)

        presenter.received()
        presenter.show_captured(captured)
        with presenter.waiting():
            reply = client.complete(prompt)
    except CommandExecutionError as exc:
        presenter.error(str(exc), exc.stderr)
        return 1
    except AICommandError as exc:
        presenter.error(str(exc))
        return 1

    presenter.show_reply(reply)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Primary CLI entry point.  Returns an exit code."""
    settings = Settings.load()
    parser = build_parser(settings)
    args = parse_command_line(parser, argv)

    configure_logging(args.log_level)
    presenter = Presenter()

    try:
        request = InvocationRequest.from_args(args)
    except InvalidLanguageError as exc:
        parser.print_usage()
        presenter.error(str(exc))
        return 1

    return run(request, settings, presenter)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
