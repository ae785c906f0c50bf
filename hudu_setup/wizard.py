"""
Setup Wizard - Main orchestrator for the setup process.
"""

import os
from typing import Dict, List, Optional, Type

from hudu_setup.config.loader import ConfigLoader
from hudu_setup.steps.base import BaseStep, StepContext, StepResult
from hudu_setup.steps.domain import DomainStep
from hudu_setup.steps.environment import EnvironmentStep
from hudu_setup.steps.keys import SecretsStep
from hudu_setup.steps.storage import StorageStep
from hudu_setup.ui.console import Console
from hudu_setup.ui.prompts import Prompts
from hudu_setup.utils.logger import logger


class SetupWizard:
    """
    Main setup wizard coordinator.

    Orchestrates the setup process by:
    - Loading answers from an optional config file
    - Confirming before an existing file is replaced
    - Running steps in order with dependency checking
    - Writing the final environment file
    """

    # Step classes in order
    STEP_CLASSES: List[Type[BaseStep]] = [
        DomainStep,
        StorageStep,
        SecretsStep,
        EnvironmentStep,
    ]

    def __init__(
        self,
        config_file: Optional[str] = None,
        output_path: str = ".env",
        force: bool = False,
        dry_run: bool = False,
        quiet: bool = False,
        no_color: bool = False,
        root_dir: Optional[str] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize the setup wizard.

        Args:
            config_file: Path to an answers file (YAML or JSON)
            output_path: Where to write the .env file
            force: Overwrite an existing file without asking
            dry_run: Preview the file without writing
            quiet: Minimal output
            no_color: Disable colored output
            root_dir: Directory relative paths are resolved against
            console: Console to print to
        """
        self.root_dir = root_dir or os.getcwd()
        self.output_path = output_path
        self.force = force
        self.dry_run = dry_run

        # Initialize UI components
        self.console = console or Console(no_color=no_color, quiet=quiet)
        self.prompts = Prompts(self.console)

        # Load answers
        self.loader = ConfigLoader(self.root_dir)
        self.answers = self.loader.load_answers(config_file)

        # Initialize steps
        self.context = StepContext(
            answers=self.answers,
            console=self.console,
            prompts=self.prompts,
            root_dir=self.root_dir,
            output_path=self.output_path,
            dry_run=self.dry_run,
        )
        self.steps: Dict[str, BaseStep] = {}
        for step_class in self.STEP_CLASSES:
            step = step_class(self.context)
            self.steps[step.name] = step

    @property
    def target_path(self) -> str:
        if os.path.isabs(self.output_path):
            return self.output_path
        return os.path.join(self.root_dir, self.output_path)

    def run(self) -> int:
        """
        Run the full setup wizard.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        self.console.print_banner()
        self.console.print(
            f"[dim]This wizard will generate a {os.path.basename(self.output_path)} "
            "file for your Hudu instance.[/dim]"
        )

        if not self._confirm_overwrite():
            self.console.error("Cancelled.")
            return 1

        steps = self._get_steps_in_order()
        total_steps = len(steps)

        for index, step in enumerate(steps, start=1):
            result = step.run_with_tracking(index, total_steps)

            if not result.success:
                self.console.error(f"Step '{step.display_name}' failed: {result.message}")
                return 1

        if not self.dry_run:
            self._show_final_instructions()

        return 0

    def _confirm_overwrite(self) -> bool:
        """Ask before an existing file is replaced. Nothing is touched on refusal."""
        if self.dry_run or self.force or not os.path.exists(self.target_path):
            return True

        self.console.print()
        confirmed = self.prompts.ask_yes_no(
            f"A {os.path.basename(self.output_path)} file already exists. Overwrite?",
            default=False,
        )
        logger.info("overwrite_confirmation", path=self.target_path, confirmed=confirmed)
        return confirmed

    def _get_steps_in_order(self) -> List[BaseStep]:
        """Get steps sorted by order."""
        return sorted(self.steps.values(), key=lambda s: s.order)

    def _show_final_instructions(self) -> None:
        """Show final instructions to the user."""
        url = f"https://{self.answers.full_domain}"

        self.console.print()
        self.console.rule()
        self.console.print("[green]✓[/green] [bold]Done![/bold] Your .env file has been created.")
        self.console.rule()
        self.console.print()
        self.console.print(f"  [bold]File:[/bold]  {self.output_path}")
        self.console.print(f"  [bold]URL:[/bold]   {url}")
        self.console.print()
        self.console.print("  [yellow]Next steps:[/yellow]")
        self.console.print("    1. Review the .env and adjust any settings as needed")
        self.console.print("    2. Complete the rest of the setup guide to get Hudu running")
        self.console.print("    3. Once the server is up, configure SMTP: [bold]Admin → SMTP Setup[/bold]")
        self.console.print()
        self.console.print("  [yellow]⚠ Important:[/yellow]")
        self.console.print("    Copy this .env file somewhere secure. Losing it could mean")
        self.console.print("    losing access to passwords and other encrypted data.")
        self.console.print()
