"""
Step 4: Write Environment File
"""

from pydantic import ValidationError

from hudu_setup.config.schema import DeploymentConfig
from hudu_setup.config.writer import ConfigWriter, build_document, render_document
from hudu_setup.steps.base import BaseStep, StepResult
from hudu_setup.utils.secrets import mask_sensitive_value

MASKED_KEYS = ("SECRET_KEY_BASE", "PASSWORD_KEY", "TWO_FACTOR_KEY", "S3_SECRET_ACCESS_KEY")


class EnvironmentStep(BaseStep):
    """Freeze the answers into a DeploymentConfig and write the .env file."""

    name = "environment"
    display_name = "Write Environment File"
    order = 4
    depends_on = ["domain", "storage", "secrets"]

    def validate(self) -> tuple[bool, str]:
        missing = self.answers.get_missing_required()
        if missing:
            return False, f"missing answers: {', '.join(missing)}"
        if self.context.secrets is None:
            return False, "secure keys have not been generated"
        return True, ""

    def build_config(self) -> DeploymentConfig:
        return DeploymentConfig.from_answers(self.answers, self.context.secrets)

    def run(self) -> StepResult:
        try:
            config = self.build_config()
        except (ValueError, ValidationError) as e:
            return StepResult.fail(f"Invalid configuration: {e}")

        writer = ConfigWriter(root_dir=self.root_dir, dry_run=self.dry_run)
        result = writer.write_all(config, self.context.output_path)

        if self.dry_run:
            self.info("Dry run mode - nothing was written. The file would contain:")
            self.console.print()
            self.console.print_raw(self._masked_preview(config))
            return StepResult.ok("Dry run completed")

        if not result.success:
            for error in result.errors:
                self.error(error)
            return StepResult.fail("Failed to write environment file", result.errors)

        for file in result.files_written:
            self.success(f"Created {file}")

        return StepResult.ok("Environment file written")

    def _masked_preview(self, config: DeploymentConfig) -> str:
        """Render the document with secret values masked."""
        document = build_document(config)
        values = document.as_dict()
        updates = {
            key: mask_sensitive_value(values[key]) for key in MASKED_KEYS if values.get(key)
        }
        return render_document(document.replace_values(updates))
