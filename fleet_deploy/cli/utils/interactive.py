"""Interactive utilities for CLI commands"""

from typing import List, Optional

from rich.console import Console
from rich.prompt import IntPrompt, Prompt
from rich.table import Table


class Prompter:
    """Asks the user questions on the terminal"""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def ask(self, question: str, default: Optional[str] = None, password: bool = False) -> str:
        """Ask a free-form question"""
        return Prompt.ask(question, default=default, password=password, console=self.console)

    def ask_with(self, question: str, choices: List[str]) -> int:
        """Ask the user to pick one of several choices

        Args:
            question: Question to display
            choices: Choices, displayed numbered from 1

        Returns:
            1-based position of the chosen entry
        """
        table = Table(show_header=False, box=None)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Choice")
        for position, choice in enumerate(choices, 1):
            table.add_row(str(position), choice)

        self.console.print(table)

        return IntPrompt.ask(
            question,
            choices=[str(position) for position in range(1, len(choices) + 1)],
            show_choices=False,
            console=self.console
        )
