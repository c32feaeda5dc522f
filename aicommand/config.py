"""
Configuration management for aicommand.

This module centralizes loading of settings from environment variables
and defines the immutable `InvocationRequest` built once from the parsed
command line.  Nothing here is module-level mutable state: the CLI loads
a `Settings` object, parses flags using its defaults, and passes the
resulting request down the pipeline by parameter.

Environment variables consumed:

* ``OPENAI_API_KEY``: API credential (required to call the API).
* ``OPENAI_BASE_URL``: alternative OpenAI-compatible endpoint (optional).
* ``SHELL``: interpreter used to run command lines (optional).
* ``LANG``: picks the default language (``ja*`` selects Japanese).
* ``AICOMMAND_MODEL``: overrides the built-in default model (optional).
* ``AICOMMAND_LOGLEVEL``: default for `--log-level` (optional).

Precedence is: command-line flag, then environment, then built-in default.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .prompts import Language, default_language, parse_language

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _log_level(value: Optional[str]) -> str:
    level = (value or "").strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class Settings:
    """Environment-derived settings for one run.

    Attributes
    ----------
    openai_api_key: Optional[str]
        Loaded from ``OPENAI_API_KEY``.  Absence is reported by the
        completion client before any request is made.

    base_url: Optional[str]
        Loaded from ``OPENAI_BASE_URL``.  None keeps the library default.

    shell: Optional[str]
        Loaded from ``SHELL``.  None when unset or empty.

    default_language: Language
        Derived from the ``LANG`` prefix.

    default_model: str
        ``AICOMMAND_MODEL`` when set, else `DEFAULT_MODEL`.

    log_level: str
        ``AICOMMAND_LOGLEVEL`` upper-cased when it names a known level,
        else ``WARNING``.
    """

    openai_api_key: Optional[str]
    base_url: Optional[str] = None
    shell: Optional[str] = None
    default_language: Language = Language.EN
    default_model: str = DEFAULT_MODEL
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def load(environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Load settings from the environment (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        return Settings(
            openai_api_key=(env.get("OPENAI_API_KEY") or "").strip() or None,
            base_url=(env.get("OPENAI_BASE_URL") or "").strip() or None,
            shell=(env.get("SHELL") or "").strip() or None,
            default_language=default_language(env),
            default_model=(env.get("AICOMMAND_MODEL") or "").strip() or DEFAULT_MODEL,
            log_level=_log_level(env.get("AICOMMAND_LOGLEVEL")),
        )


@dataclass(frozen=True)
class InvocationRequest:
    """Everything the pipeline needs from the command line, fixed at parse time."""

    args: Tuple[str, ...]
    language: Language = Language.EN
    model: str = DEFAULT_MODEL
    custom_prompt: str = ""

    @classmethod
    def from_args(cls, namespace: argparse.Namespace) -> "InvocationRequest":
        """Build a request from parsed arguments.

        A leading ``--`` separator is not part of the command.  Raises
        `InvalidLanguageError` if the language flag is not supported.
        """
        command = list(namespace.command or ())
        if command[:1] == ["--"]:
            command = command[1:]
        return cls(
            args=tuple(command),
            language=parse_language(namespace.language),
            model=namespace.model,
            custom_prompt=namespace.prompt or "",
        )
