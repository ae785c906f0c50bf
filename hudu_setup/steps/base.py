"""
Base class for setup steps.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Set, TYPE_CHECKING

from hudu_setup.errors import SetupError
from hudu_setup.utils.logger import logger

if TYPE_CHECKING:
    from hudu_setup.config.schema import GeneratedSecrets, WizardAnswers
    from hudu_setup.ui.console import Console
    from hudu_setup.ui.prompts import Prompts


@dataclass
class StepResult:
    """Result of a step execution."""

    success: bool
    message: str = ""
    errors: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, message: str = "") -> "StepResult":
        """Create a successful result."""
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str, errors: Optional[List[str]] = None) -> "StepResult":
        """Create a failed result."""
        return cls(success=False, message=message, errors=errors or [message])


@dataclass
class StepContext:
    """
    State shared by the steps of one wizard run.

    Nothing here outlives the run.
    """

    answers: "WizardAnswers"
    console: "Console"
    prompts: "Prompts"
    root_dir: str
    output_path: str = ".env"
    dry_run: bool = False
    secrets: Optional["GeneratedSecrets"] = None
    completed: Set[str] = field(default_factory=set)


class BaseStep(ABC):
    """
    Abstract base class for setup steps.

    All setup steps should inherit from this class and implement
    the required abstract methods.
    """

    # Step metadata - override in subclasses
    name: str = "base"
    display_name: str = "Base Step"
    order: int = 0
    depends_on: List[str] = []
    # Environment keys this step provides values for
    config_keys: List[str] = []

    def __init__(self, context: StepContext):
        """
        Initialize the step.

        Args:
            context: Step context with shared resources
        """
        self.context = context
        self.answers = context.answers
        self.console = context.console
        self.prompts = context.prompts
        self.root_dir = context.root_dir
        self.dry_run = context.dry_run

    @abstractmethod
    def run(self) -> StepResult:
        """
        Execute the step.

        Returns:
            StepResult indicating success or failure
        """
        pass

    def validate(self) -> tuple[bool, str]:
        """
        Validate that the step can be executed.

        Override this method to add validation logic.

        Returns:
            Tuple of (is_valid, error_message)
        """
        return True, ""

    def check_dependencies(self) -> tuple[bool, List[str]]:
        """
        Check if all dependencies have completed in this run.

        Returns:
            Tuple of (all_satisfied, missing_dependencies)
        """
        missing = [dep for dep in self.depends_on if dep not in self.context.completed]
        return len(missing) == 0, missing

    def print_header(self, step_num: int, total_steps: int) -> None:
        """Print the step header."""
        self.console.print_step(step_num, total_steps, self.display_name)

    def info(self, message: str) -> None:
        """Print an info message."""
        self.console.dim(message)

    def success(self, message: str) -> None:
        """Print a success message."""
        self.console.success(message)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.warning(message)

    def error(self, message: str) -> None:
        """Print an error message."""
        self.console.error(message)

    def ask(self, *args, **kwargs) -> str:
        """Delegate to prompts.ask()."""
        return self.prompts.ask(*args, **kwargs)

    def ask_optional(self, *args, **kwargs) -> str:
        """Delegate to prompts.ask_optional()."""
        return self.prompts.ask_optional(*args, **kwargs)

    def ask_secret(self, *args, **kwargs) -> str:
        """Delegate to prompts.ask_secret()."""
        return self.prompts.ask_secret(*args, **kwargs)

    def ask_yes_no(self, *args, **kwargs) -> bool:
        """Delegate to prompts.ask_yes_no()."""
        return self.prompts.ask_yes_no(*args, **kwargs)

    def run_with_tracking(self, step_num: int, total_steps: int) -> StepResult:
        """
        Run the step, recording completion in the run context.

        Args:
            step_num: Position of this step in the run
            total_steps: Total number of steps

        Returns:
            StepResult from step execution
        """
        deps_ok, missing = self.check_dependencies()
        if not deps_ok:
            return StepResult.fail(
                f"Dependencies not satisfied: {', '.join(missing)}",
                [f"Missing dependency: {dep}" for dep in missing],
            )

        valid, error = self.validate()
        if not valid:
            return StepResult.fail(f"Validation failed: {error}")

        self.print_header(step_num, total_steps)
        logger.debug("step_started", step=self.name)

        try:
            result = self.run()
        except (KeyboardInterrupt, SetupError):
            logger.debug("step_aborted", step=self.name)
            raise
        except Exception as e:
            logger.exception("step_failed", step=self.name)
            self.error(f"Step failed: {e}")
            return StepResult.fail(str(e))

        if result.success:
            self.context.completed.add(self.name)
            logger.debug("step_completed", step=self.name)
        else:
            logger.warning("step_failed", step=self.name, reason=result.message)

        return result
