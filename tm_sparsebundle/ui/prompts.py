"""Console prompts for the interactive workflow."""

from __future__ import annotations

import getpass
from dataclasses import dataclass
from typing import Callable

from tm_sparsebundle.storage.validation import is_affirmative


@dataclass
class Console:
    """Reads answers from the user and prints messages.

    The I/O callables are injectable so the workflow can be driven from tests.
    """

    input_func: Callable[[str], str] = input
    secret_func: Callable[[str], str] = getpass.getpass
    output_func: Callable[[str], None] = print

    def ask(self, prompt: str) -> str:
        """Prompt for a line of text, stripped of surrounding whitespace."""
        return self.input_func(prompt).strip()

    def ask_secret(self, prompt: str) -> str:
        """Prompt for a secret without echoing it.

        The secret is returned as typed; only a trailing newline is dropped.
        """
        return self.secret_func(prompt).rstrip("\r\n")

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question; anything but y/yes counts as no."""
        return is_affirmative(self.input_func(prompt))

    def say(self, message: str = "") -> None:
        self.output_func(message)

    def say_lines(self, lines: list[str]) -> None:
        for line in lines:
            self.output_func(line)
