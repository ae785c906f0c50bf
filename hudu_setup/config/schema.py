"""
Pydantic models for the wizard's answers and the final deployment configuration.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hudu_setup.utils.secrets import random_alnum, random_hex

# Secret sizes expected by the Hudu application
SECRET_KEY_BASE_BYTES = 64
PASSWORD_KEY_LENGTH = 32
TWO_FACTOR_KEY_LENGTH = 32


class StorageBackend(str, Enum):
    """Where Hudu stores uploaded files."""

    LOCAL = "local"
    S3 = "s3"


class S3Settings(BaseModel):
    """S3-compatible bucket details (AWS S3, Backblaze B2, MinIO, Wasabi, ...)."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    bucket: str = ""
    region: str = ""
    access_key_id: str = ""
    secret_access_key: str = ""
    endpoint: str = ""

    @field_validator("bucket", "region", "access_key_id", "secret_access_key", "endpoint")
    @classmethod
    def strip_value(cls, v: str) -> str:
        # Pasted credentials often carry a trailing newline
        return v.replace("\r", "").replace("\n", "").strip()

    def is_complete(self) -> bool:
        """Check if all required S3 fields are configured."""
        return bool(
            self.bucket
            and self.region
            and self.access_key_id
            and self.secret_access_key
        )

    def get_missing_required(self) -> list[str]:
        return [
            name
            for name in ("bucket", "region", "access_key_id", "secret_access_key")
            if not getattr(self, name)
        ]


class WizardAnswers(BaseModel):
    """
    Values collected from the operator.

    Steps fill this draft in one field at a time. Once every step has run it
    is frozen into a DeploymentConfig and never touched again.
    """

    # Unquoted YAML values such as `bucket: 2024` load as numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    subdomain: str = ""
    domain: str = ""
    storage: Optional[StorageBackend] = None
    s3: S3Settings = Field(default_factory=S3Settings)

    @field_validator("subdomain", "domain")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return v.strip()

    @property
    def full_domain(self) -> str:
        """The hostname Hudu is served from, e.g. hudu.example.com."""
        if not self.subdomain or not self.domain:
            return ""
        return f"{self.subdomain}.{self.domain}"

    def has_domain(self) -> bool:
        return bool(self.subdomain and self.domain)

    def has_storage(self) -> bool:
        if self.storage is None:
            return False
        if self.storage == StorageBackend.S3:
            return self.s3.is_complete()
        return True

    def is_complete(self) -> bool:
        return self.has_domain() and self.has_storage()

    def get_missing_required(self) -> list[str]:
        """Get list of missing required answers."""
        missing = []
        if not self.subdomain:
            missing.append("subdomain")
        if not self.domain:
            missing.append("domain")
        if self.storage is None:
            missing.append("storage")
        elif self.storage == StorageBackend.S3:
            missing.extend(f"s3.{name}" for name in self.s3.get_missing_required())
        return missing


class GeneratedSecrets(BaseModel):
    """The three secrets Hudu uses for sessions, password and 2FA encryption."""

    model_config = ConfigDict(frozen=True)

    secret_key_base: str = Field(repr=False)
    password_key: str = Field(repr=False)
    two_factor_key: str = Field(repr=False)

    @classmethod
    def generate(cls) -> "GeneratedSecrets":
        """Draw fresh secrets from the OS random source."""
        return cls(
            secret_key_base=random_hex(SECRET_KEY_BASE_BYTES),
            password_key=random_alnum(PASSWORD_KEY_LENGTH),
            two_factor_key=random_alnum(TWO_FACTOR_KEY_LENGTH),
        )


class DatabaseSettings(BaseModel):
    """Bundled Postgres container settings."""

    model_config = ConfigDict(frozen=True)

    DB_HOST: str = "db"
    DB_USERNAME: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "hudu_production"
    POSTGRES_HOST_AUTH_METHOD: str = "trust"


class SmtpSettings(BaseModel):
    """SMTP is left blank and configured later from the Hudu admin panel."""

    model_config = ConfigDict(frozen=True)

    SMTP_DOMAIN: str = ""
    SMTP_ADDRESS: str = ""
    SMTP_PORT: str = ""
    SMTP_STARTTLS_AUTO: str = "true"
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_AUTHENTICATION: str = ""
    SMTP_OPENSSL_VERIFY_MODE: str = ""
    SMTP_FROM_ADDRESS: str = ""


class RuntimeSettings(BaseModel):
    """Container runtime settings."""

    model_config = ConfigDict(frozen=True)

    PUID: str = "1000"
    PGID: str = "1000"
    RAILS_ENV: str = "production"
    RACK_ENV: str = "production"
    RAILS_MAX_THREADS: str = "3"
    REDIS_URL: str = "redis://redis"


class DeploymentConfig(BaseModel):
    """
    Immutable configuration handed to the serializer.

    Built exactly once per run from the operator's answers and the freshly
    generated secrets.
    """

    model_config = ConfigDict(frozen=True)

    subdomain: str
    domain: str
    storage: StorageBackend
    s3: S3Settings = Field(default_factory=S3Settings)
    secrets: GeneratedSecrets
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    smtp: SmtpSettings = Field(default_factory=SmtpSettings)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)

    @field_validator("subdomain", "domain")
    @classmethod
    def require_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty")
        return v

    @classmethod
    def from_answers(
        cls, answers: WizardAnswers, secrets: GeneratedSecrets
    ) -> "DeploymentConfig":
        """
        Freeze the wizard answers into a deployment configuration.

        S3 settings are dropped when local storage was chosen, so no stale
        credentials from an answers file end up in the output.
        """
        if answers.storage is None:
            raise ValueError("storage backend has not been chosen")
        if answers.storage == StorageBackend.S3 and not answers.s3.is_complete():
            missing = ", ".join(answers.s3.get_missing_required())
            raise ValueError(f"S3 storage is missing: {missing}")

        s3 = answers.s3 if answers.storage == StorageBackend.S3 else S3Settings()
        return cls(
            subdomain=answers.subdomain,
            domain=answers.domain,
            storage=answers.storage,
            s3=s3,
            secrets=secrets,
        )

    @property
    def full_domain(self) -> str:
        return f"{self.subdomain}.{self.domain}"

    @property
    def use_local_filesystem(self) -> bool:
        return self.storage == StorageBackend.LOCAL
