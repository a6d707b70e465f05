"""Console prompts with defaults for the interactive entry point."""

from __future__ import annotations

import os
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

_YES = {"y", "yes", "true"}
_NO = {"n", "no", "false"}


class ConsolePrompter:
    """Asks questions on the console; empty or invalid answers select the default.

    ``input_fn`` and ``output_fn`` default to ``input`` and ``print`` and can be
    replaced for scripted use.
    """

    def __init__(self, input_fn: InputFn | None = None, output_fn: OutputFn | None = None) -> None:
        self._input = input_fn or input
        self._output = output_fn or print

    def _read(self, prompt: str) -> str:
        try:
            return (self._input(prompt) or "").strip()
        except EOFError:
            return ""

    def ask_choice(
        self,
        title: str,
        description: str,
        options: Sequence[T],
        default: T,
        label: Callable[[T], str] = str,
    ) -> T:
        """Show a numbered menu and return the chosen option."""
        self._output(title)
        self._output(description)
        for index, option in enumerate(options, start=1):
            self._output(f" {index}. {label(option)}")

        answer = self._read(f"Enter number [default: {label(default)}]: ")
        if not answer:
            return default
        if answer.isdigit():
            index = int(answer) - 1
            if 0 <= index < len(options):
                return options[index]

        self._output("Invalid input; using default.")
        return default

    def ask_path(self, prompt: str, default: str) -> str:
        """Ask for a filesystem path and return it as an absolute path."""
        answer = self._read(f"{prompt} [default: {default}]: ")
        return os.path.abspath(os.path.expanduser(answer or default))

    def ask_yes_no(self, prompt: str, default_yes: bool) -> bool:
        """Ask a yes/no question."""
        marker = "Y" if default_yes else "N"
        answer = self._read(f"{prompt} (y/n) [default: {marker}]: ").lower()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        return default_yes
