"""
aicommand package.

This package provides a command-line interface (CLI) that runs a shell
command, or reads piped text, and asks an OpenAI chat model to explain
the captured output.  The work is split into small modules:

* `acquire`: read standard input or run the command through the shell.
* `prompts`: language-specific templates and prompt composition.
* `openai_client`: the single chat-completion request.
* `render`: colored terminal output and the progress spinner.
* `config`: environment settings and the immutable invocation request.

See `cli.py` for the entry point.
"""

__all__ = [
    "cli",
]
