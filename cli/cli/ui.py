"""Rich console implementation of the user interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.prompt import Confirm, Prompt

from core.interfaces import UserInterface

if TYPE_CHECKING:
    from collections.abc import Sequence


class RichUserInterface(UserInterface):
    """Prompts and messages on a rich console.

    With ``assume_yes`` every prompt is answered with its default, which
    lets the command run unattended.
    """

    def __init__(self, console: Console | None = None, assume_yes: bool = False) -> None:
        self.console = console or Console()
        self.assume_yes = assume_yes

    def notice(self, text: str) -> None:
        self.console.print()
        self.console.print(text, markup=False, highlight=False)
        self.console.print()

    def warning(self, text: str) -> None:
        self.console.print(text, style="yellow", markup=False, highlight=False)

    def select(
        self,
        question: str,
        choices: Sequence[tuple[str, str]],
        default: str,
        intro: str = "",
    ) -> str:
        if intro:
            self.console.print(intro, markup=False, highlight=False)
            self.console.print()

        default_index = 1
        for index, (label, value) in enumerate(choices, start=1):
            self.console.print(f"  ({index})\t{label}", markup=False, highlight=False)
            if value == default:
                default_index = index
        self.console.print()

        if self.assume_yes:
            self.console.print(f"{question}: {default_index}", markup=False, highlight=False)
            return choices[default_index - 1][1]

        answer = Prompt.ask(
            question,
            console=self.console,
            choices=[str(i) for i in range(1, len(choices) + 1)],
            default=str(default_index),
        )
        return choices[int(answer) - 1][1]

    def confirm(self, question: str, default: bool = True) -> bool:
        if self.assume_yes:
            answer = "Y" if default else "N"
            self.console.print(f"{question} {answer}", markup=False, highlight=False)
            return default
        return Confirm.ask(question, console=self.console, default=default)
