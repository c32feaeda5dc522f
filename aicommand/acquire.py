"""
Input acquisition for aicommand.

The data to be explained comes from one of two places:

* Standard input, when no command tokens were given (``echo hi | aicommand``).
* The standard output of a command line run through the user's shell
  (``aicommand ls -la``).

Command tokens are joined with single spaces and handed to ``$SHELL -c``.
Shell interpretation is intentional so pipes, globs and redirections in
the command line keep working; the tool trusts the local operator and
this module does not try to sanitize the command line.

The child runs to completion with no timeout.  Both pipes are drained and
the process is reaped by `subprocess.run` on success and failure alike.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TextIO

from .errors import CommandExecutionError, StdinReadError

logger = logging.getLogger(__name__)

PIPELINE_LABEL = "Input from pipeline"
DEFAULT_SHELL = "/bin/sh"


@dataclass(frozen=True)
class CapturedOutput:
    """Text obtained from stdin or a command, plus where it came from."""

    label: str
    body: str
    stderr: str = ""


def resolve_shell(
    configured: Optional[str] = None,
    notify: Optional[Callable[[str], None]] = None,
) -> str:
    """Return the interpreter used to run command lines.

    Uses `configured` (normally ``$SHELL``) when non-empty; otherwise falls
    back to `DEFAULT_SHELL` and reports the fallback through `notify`
    (module logger by default).
    """
    shell = (configured or "").strip()
    if shell:
        return shell
    message = f"Using {DEFAULT_SHELL} as a fallback since the SHELL environment variable is not set."
    if notify is None:
        logger.info(message)
    else:
        notify(message)
    return DEFAULT_SHELL


def read_stdin(stream: Optional[TextIO] = None) -> CapturedOutput:
    """Read `stream` (default: ``sys.stdin``) until end-of-stream."""
    stream = sys.stdin if stream is None else stream
    if stream is None:
        # Detached or closed standard input
        raise StdinReadError("Error reading from stdin: standard input is not available")
    try:
        data = stream.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise StdinReadError(f"Error reading from stdin: {exc}") from exc
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    logger.debug("Read %d characters from stdin", len(data))
    return CapturedOutput(label=PIPELINE_LABEL, body=data)


def run_command(args: Sequence[str], shell: str) -> CapturedOutput:
    """Run the joined command line through `shell` and capture its output."""
    command_line = " ".join(args)
    logger.debug("Running %s -c %r", shell, command_line)
    try:
        proc = subprocess.run(
            [shell, "-c", command_line],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise CommandExecutionError(command_line, None, reason=str(exc)) from exc

    if proc.returncode != 0:
        logger.debug("Command exited with status %s", proc.returncode)
        raise CommandExecutionError(command_line, proc.returncode, stderr=proc.stderr or "")

    return CapturedOutput(label=command_line, body=proc.stdout or "", stderr=proc.stderr or "")


def acquire_input(
    args: Sequence[str],
    *,
    shell: Optional[str] = None,
    stdin: Optional[TextIO] = None,
) -> CapturedOutput:
    """Produce the captured output for an invocation.

    An empty `args` reads standard input and never spawns a process.
    Otherwise the arguments are run as a single shell command line.
    """
    if not args:
        return read_stdin(stdin)
    return run_command(args, shell or resolve_shell(os.environ.get("SHELL")))
