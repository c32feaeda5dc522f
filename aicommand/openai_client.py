"""
OpenAI client wrapper for aicommand.

This module encapsulates the single interaction aicommand has with the
OpenAI Chat Completions API: one blocking request carrying one user
message, with no system instruction and no conversation history.  By
keeping the OpenAI library behind this class, the rest of the
application only deals with plain strings and aicommand's own errors.

The request is made with retries disabled and no client-side timeout;
a failure of any kind is reported once and ends the invocation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import openai
import tiktoken

from .config import DEFAULT_MODEL
from .errors import CompletionRequestError, MissingCredentialError

logger = logging.getLogger(__name__)


class OpenAIClient:
    """Wrapper around the OpenAI chat API with uniform error handling."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        client: Any = None,
        base_url: Optional[str] = None,
    ) -> None:
        if not api_key:
            raise MissingCredentialError("Error: OPENAI_API_KEY is not set")
        self.api_key = api_key
        self.model = model
        if client is None:
            client = openai.OpenAI(api_key=api_key, base_url=base_url, max_retries=0, timeout=None)
        self.client = client

    def estimate_tokens(self, text: str) -> int:
        """Estimate the number of tokens used by a text for the configured model."""
        try:
            encoding = tiktoken.encoding_for_model(self.model)
        except KeyError:
            # Default to cl100k_base if model unknown
            encoding = tiktoken.get_encoding("cl100k_base")
        return len(encoding.encode(text))

    @staticmethod
    def build_messages(prompt: str) -> List[Dict[str, str]]:
        return [{"role": "user", "content": prompt}]

    @staticmethod
    def extract_reply(response: Any) -> str:
        """Return the first choice's message text or raise `CompletionRequestError`."""
        choices = getattr(response, "choices", None)
        if not choices:
            raise CompletionRequestError("ChatCompletion error: the response contained no choices")
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise CompletionRequestError("ChatCompletion error: the first choice carried no text content")
        return content

    def complete(self, prompt: str) -> str:
        """Send `prompt` as a single user message and return the reply text."""
        if logger.isEnabledFor(logging.INFO):
            try:
                input_tokens = self.estimate_tokens(prompt)
            except Exception as exc:
                logger.warning("Failed to estimate tokens precisely (%s). Falling back to heuristic.", exc)
                input_tokens = max(1, len(prompt) // 4)
            logger.info("Sending ~%s input tokens to model=%s", input_tokens, self.model)
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(prompt),
            )
        except openai.OpenAIError as exc:
            raise CompletionRequestError(f"ChatCompletion error: {exc}") from exc

        reply = self.extract_reply(response)
        logger.debug(
            "Response summary: id=%s output_len=%s", getattr(response, "id", None), len(reply)
        )
        return reply
