"""
UI components for the setup package.
"""

from hudu_setup.ui.console import Console
from hudu_setup.ui.prompts import Prompts

__all__ = ["Console", "Prompts"]
