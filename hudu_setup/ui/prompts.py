"""
Interactive prompts with validation for the setup package.
"""

import getpass
from typing import Callable, Optional, Tuple

from hudu_setup.errors import InputCancelled
from hudu_setup.ui.console import Console
from hudu_setup.validators.env_keys import validate_required

INDENT = "    "


def clean_input(value: str) -> str:
    """Strip pasted newline/carriage-return artifacts and surrounding whitespace."""
    return value.replace("\r", "").replace("\n", "").strip()


class Prompts:
    """Interactive prompts with validation."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize prompts.

        Args:
            console: Console instance for output
        """
        self.console = console or Console()

    def _read(self, prompt: str, sensitive: bool = False) -> str:
        try:
            if sensitive:
                return getpass.getpass(prompt)
            return input(prompt)
        except EOFError:
            raise InputCancelled("Input closed before setup finished") from None

    def _label(self, label: str, hint: str = "", optional: bool = False) -> str:
        parts = [p for p in (hint, "optional" if optional else "") if p]
        if parts:
            return f"{INDENT}{label} ({', '.join(parts)}): "
        return f"{INDENT}{label}: "

    def ask(
        self,
        label: str,
        hint: str = "",
        validator: Optional[Callable[[str], Tuple[bool, Optional[str]]]] = None,
        sensitive: bool = False,
    ) -> str:
        """
        Ask for a required value, re-prompting until one is given.

        Args:
            label: Field name shown to the operator
            hint: Example value shown in parentheses
            validator: Optional validation function that returns (is_valid, error_message)
            sensitive: If True, input is not echoed

        Returns:
            The trimmed value
        """
        while True:
            value = clean_input(self._read(self._label(label, hint), sensitive))

            is_valid, error = validate_required(value)
            if is_valid and validator:
                is_valid, error = validator(value)
            if is_valid:
                return value

            self.console.retry(error or "Invalid input.")

    def ask_optional(self, label: str, hint: str = "") -> str:
        """Ask for a value that may be left blank."""
        return clean_input(self._read(self._label(label, hint, optional=True)))

    def ask_secret(self, label: str, hint: str = "") -> str:
        """
        Ask for a secret (like an access key) with masked input.

        Args:
            label: Field name shown to the operator
            hint: Example value shown in parentheses

        Returns:
            User input with paste artifacts removed
        """
        return self.ask(label, hint=hint, sensitive=True)

    def ask_yes_no(self, label: str, default: Optional[bool] = None) -> bool:
        """
        Ask a yes/no question.

        Args:
            label: The question to display
            default: Default answer (True for yes, False for no)

        Returns:
            True for yes, False for no
        """
        if default is True:
            hint = "Y/n"
        elif default is False:
            hint = "y/N"
        else:
            hint = "y/n"

        while True:
            value = clean_input(self._read(f"{INDENT}{label} [{hint}]: ")).lower()

            if not value and default is not None:
                return default

            if value in ["y", "yes"]:
                return True
            if value in ["n", "no"]:
                return False

            self.console.retry("Please enter 'yes' or 'no'.")
