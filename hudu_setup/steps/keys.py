"""
Step 3: Generate Secure Keys
"""

from hudu_setup.config.schema import GeneratedSecrets
from hudu_setup.steps.base import BaseStep, StepResult
from hudu_setup.utils.logger import logger


class SecretsStep(BaseStep):
    """Generate the session, password and two-factor encryption keys."""

    name = "secrets"
    display_name = "Secure Keys"
    order = 3
    depends_on = []
    config_keys = ["SECRET_KEY_BASE", "PASSWORD_KEY", "TWO_FACTOR_KEY"]

    def run(self) -> StepResult:
        # Always generate new keys; they are never read back from an existing file
        self.info("Generating secure keys...")

        self.context.secrets = GeneratedSecrets.generate()
        logger.info("secrets_generated", keys=self.config_keys)

        self.success("Keys generated")
        return StepResult.ok("Secure keys generated")
