"""
Step 1: Domain Setup
"""

from hudu_setup.steps.base import BaseStep, StepResult


class DomainStep(BaseStep):
    """Ask for the subdomain and root domain Hudu is served from."""

    name = "domain"
    display_name = "Domain Setup"
    order = 1
    depends_on = []
    config_keys = ["DOMAIN", "URL", "SUBDOMAINS"]

    def run(self) -> StepResult:
        if self.answers.has_domain():
            self.info(f"Using configured domain {self.answers.full_domain}.")
        else:
            self.info("Your Hudu instance needs a subdomain on your domain.")
            self.console.print()

            if not self.answers.subdomain:
                self.answers.subdomain = self.ask("Subdomain", hint="e.g. hudu, docs, it")
            if not self.answers.domain:
                self.answers.domain = self.ask("Root domain", hint="e.g. example.com")

        self.console.print()
        self.success(f"Your Hudu URL: [bold]https://{self.answers.full_domain}[/bold]")

        return StepResult.ok(f"Domain: {self.answers.full_domain}")
