"""
Prompt templates and composition for aicommand.

A prompt is built from three ordered pieces: the source of the data (the
command line that was executed, or the pipeline marker), the captured
output itself, and a free-text context slot.  The context slot holds the
user's `--prompt` text when one was given and `NO_CONTEXT` otherwise;
the language-specific analysis instructions are always kept.

Captured output is interpolated whole.  No truncation, escaping or size
limit is applied, and composition is deterministic so the same inputs
always give the same prompt.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from .errors import InvalidLanguageError


class Language(str, Enum):
    """Supported reply languages."""

    EN = "en"
    JA = "ja"


NO_CONTEXT = "No additional context provided."

TEMPLATES: Dict[Language, str] = {
    Language.EN: (
        "Executed command or input source: {source}\n"
        "Output:\n"
        "{output}\n"
        "What does this output indicate? Are there any issues or further actions required?\n"
        "Additional context: {context}"
    ),
    Language.JA: (
        "実行されたコマンドまたは入力ソース: {source}\n"
        "出力:\n"
        "{output}\n"
        "この出力が示すものは何ですか？ 問題はありますか、またはさらなるアクションが必要ですか？\n"
        "追加のコンテキスト: {context}"
    ),
}


def parse_language(value: str) -> Language:
    """Return the `Language` for `value` or raise `InvalidLanguageError`."""
    try:
        return Language((value or "").strip().lower())
    except ValueError:
        raise InvalidLanguageError(value) from None


def default_language(environ: Optional[Mapping[str, str]] = None) -> Language:
    """Derive the default language from the `LANG` locale prefix."""
    env = os.environ if environ is None else environ
    lang_env = env.get("LANG", "")
    if lang_env[:2].lower() == "ja":
        return Language.JA
    return Language.EN


def select_template(language: Union[Language, str]) -> str:
    # Unmatched codes get the English template
    try:
        return TEMPLATES[Language(language)]
    except ValueError:
        return TEMPLATES[Language.EN]


def resolve_context(custom_prompt: Optional[str]) -> str:
    """Return the custom prompt verbatim, or the sentinel when none is given."""
    if custom_prompt:
        return custom_prompt
    return NO_CONTEXT


def compose_prompt(
    language: Union[Language, str],
    source: str,
    output: str,
    custom_prompt: Optional[str] = "",
) -> str:
    """Assemble the final prompt string sent to the model.

    Parameters
    ----------
    language: Language | str
        Selects the template.  Unknown codes use English.

    source: str
        The executed command line or the pipeline marker.

    output: str
        The captured output body, passed through unchanged.

    custom_prompt: str
        Optional user text for the context slot.
    """
    template = select_template(language)
    return template.format(
        source=source,
        output=output,
        context=resolve_context(custom_prompt),
    )
