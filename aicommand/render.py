"""Terminal output for aicommand: colored status lines and a spinner."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.text import Text

from .acquire import CapturedOutput


class Presenter:
    """Prints pipeline progress and results to a `rich` console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True)

    def notice(self, message: str) -> None:
        self.console.print(Text(message))

    def received(self) -> None:
        self.console.print(Text("Data received for analysis.", style="cyan"))

    def show_captured(self, captured: CapturedOutput) -> None:
        """Show where the data came from and the data itself, verbatim."""
        self.console.print(Text(f"Executed command or input source: {captured.label}", style="cyan"))
        self.console.print(Text("Result:", style="green"))
        # Captured text may contain square brackets; never treat it as markup
        self.console.print(Text(captured.body, style="green"))
        self.console.print()

    @contextmanager
    def waiting(self, message: str = "Waiting for AI response...") -> Iterator[None]:
        self.console.print(Text(message, style="yellow"))
        with self.console.status("", spinner="line"):
            yield

    def show_reply(self, reply: str) -> None:
        self.console.print(Text("✔ AI response received!", style="green"))
        self.console.print()
        self.console.print(Text(reply))

    def error(self, message: str, detail: str = "") -> None:
        self.console.print(Text(message, style="red"))
        if detail.strip():
            self.console.print(Text(detail.rstrip(), style="dim"))
