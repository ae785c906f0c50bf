"""
Configuration management for the setup package.
"""

from hudu_setup.config.schema import (
    StorageBackend,
    S3Settings,
    WizardAnswers,
    GeneratedSecrets,
    DatabaseSettings,
    SmtpSettings,
    RuntimeSettings,
    DeploymentConfig,
)
from hudu_setup.config.loader import ConfigLoader, parse_env_text, unescape_value
from hudu_setup.config.writer import (
    ConfigWriter,
    EnvDocument,
    EnvEntry,
    EnvSection,
    build_document,
    escape_value,
    format_entry,
    render_document,
)

__all__ = [
    "StorageBackend",
    "S3Settings",
    "WizardAnswers",
    "GeneratedSecrets",
    "DatabaseSettings",
    "SmtpSettings",
    "RuntimeSettings",
    "DeploymentConfig",
    "ConfigLoader",
    "parse_env_text",
    "unescape_value",
    "ConfigWriter",
    "EnvDocument",
    "EnvEntry",
    "EnvSection",
    "build_document",
    "escape_value",
    "format_entry",
    "render_document",
]
