"""
Step 2: File Storage
"""

from hudu_setup.config.schema import S3Settings, StorageBackend
from hudu_setup.steps.base import BaseStep, StepResult

STORAGE_CHOICES = [
    ("Local", [
        "Files stored on this server's disk",
        "Simple setup, but files lost if server dies",
    ]),
    ("Cloud", [
        "Files stored in S3-compatible storage",
        "Works with AWS S3, Backblaze B2, MinIO, Wasabi, etc.",
        "Better for backups and scaling",
    ]),
]


class StorageStep(BaseStep):
    """Choose local disk or S3-compatible storage for uploads."""

    name = "storage"
    display_name = "File Storage"
    order = 2
    depends_on = ["domain"]
    config_keys = [
        "USE_LOCAL_FILESYSTEM",
        "S3_ENDPOINT",
        "S3_BUCKET",
        "S3_ACCESS_KEY_ID",
        "S3_SECRET_ACCESS_KEY",
        "S3_REGION",
    ]

    def run(self) -> StepResult:
        if self.answers.storage is None:
            self.info("Where should Hudu store uploaded files (documents, images, etc.)?")
            self.console.print()
            self.console.print_choices(STORAGE_CHOICES)

            use_s3 = self.ask_yes_no("Use cloud storage (S3)?", default=False)
            self.answers.storage = StorageBackend.S3 if use_s3 else StorageBackend.LOCAL

        if self.answers.storage == StorageBackend.S3:
            self._configure_s3()
            self.console.print()
            self.success("Cloud storage configured")
        else:
            if self.answers.s3 != S3Settings():
                self.warning("S3 settings are ignored when local storage is used.")
            self.console.print()
            self.success("Using local storage")

        return StepResult.ok(f"Storage: {self.answers.storage.value}")

    def _configure_s3(self) -> None:
        """Prompt for whichever bucket details are still missing."""
        s3 = self.answers.s3
        if s3.is_complete():
            self.info(f"Using configured bucket {s3.bucket} ({s3.region}).")
            return

        self.console.print()
        self.info("Enter your S3 bucket details:")

        bucket = s3.bucket or self.ask("Bucket name")
        region = s3.region or self.ask("Region", hint="e.g. us-east-1")
        access_key_id = s3.access_key_id or self.ask("Access Key ID")
        secret_access_key = s3.secret_access_key or self.ask_secret("Secret Access Key")
        self.console.print()
        endpoint = s3.endpoint or self.ask_optional("Custom endpoint", hint="leave blank for AWS")

        self.answers.s3 = S3Settings(
            bucket=bucket,
            region=region,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            endpoint=endpoint,
        )
