"""
Audit of a generated Hudu environment file.
"""

import os
import re
import stat
from dataclasses import dataclass, field
from typing import Dict, List, Optional

RECOGNIZED_KEYS = (
    "SECRET_KEY_BASE",
    "PASSWORD_KEY",
    "TWO_FACTOR_KEY",
    "DOMAIN",
    "URL",
    "SUBDOMAINS",
    "ONLY_SUBDOMAINS",
    "VALIDATION",
    "STAGING",
    "DB_HOST",
    "DB_USERNAME",
    "DB_PASSWORD",
    "DB_NAME",
    "POSTGRES_HOST_AUTH_METHOD",
    "SMTP_DOMAIN",
    "SMTP_ADDRESS",
    "SMTP_PORT",
    "SMTP_STARTTLS_AUTO",
    "SMTP_USERNAME",
    "SMTP_PASSWORD",
    "SMTP_AUTHENTICATION",
    "SMTP_OPENSSL_VERIFY_MODE",
    "SMTP_FROM_ADDRESS",
    "USE_LOCAL_FILESYSTEM",
    "AUTHENTICATE_UPLOADS",
    "S3_ENDPOINT",
    "S3_BUCKET",
    "S3_ACCESS_KEY_ID",
    "S3_SECRET_ACCESS_KEY",
    "S3_REGION",
    "PUID",
    "PGID",
    "RAILS_ENV",
    "RACK_ENV",
    "RAILS_MAX_THREADS",
    "REDIS_URL",
)

SECRET_PATTERNS = {
    "SECRET_KEY_BASE": re.compile(r"^[0-9a-f]{128}$"),
    "PASSWORD_KEY": re.compile(r"^[A-Za-z0-9]{32}$"),
    "TWO_FACTOR_KEY": re.compile(r"^[A-Za-z0-9]{32}$"),
}

S3_REQUIRED_KEYS = ("S3_BUCKET", "S3_REGION", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY")


@dataclass
class EnvFileReport:
    """Problems found in an environment file."""

    missing_keys: List[str] = field(default_factory=list)
    unknown_keys: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing_keys and not self.errors


def check_env_values(values: Dict[str, str]) -> EnvFileReport:
    """
    Check parsed values against the keys and formats Hudu expects.

    Args:
        values: Parsed key/value pairs

    Returns:
        EnvFileReport describing any problems
    """
    report = EnvFileReport()

    report.missing_keys = [key for key in RECOGNIZED_KEYS if key not in values]
    report.unknown_keys = [key for key in values if key not in RECOGNIZED_KEYS]

    for key, pattern in SECRET_PATTERNS.items():
        value = values.get(key)
        if value is not None and not pattern.match(value):
            report.errors.append(f"{key} is not a well-formed generated secret")

    if "DOMAIN" in values and not values["DOMAIN"]:
        report.errors.append("DOMAIN is empty")

    if values.get("USE_LOCAL_FILESYSTEM") == "false":
        empty = [key for key in S3_REQUIRED_KEYS if not values.get(key)]
        if empty:
            report.errors.append(
                f"Cloud storage is enabled but {', '.join(empty)} is empty"
            )
    elif values.get("USE_LOCAL_FILESYSTEM") not in (None, "true"):
        report.errors.append("USE_LOCAL_FILESYSTEM must be 'true' or 'false'")

    if not values.get("SMTP_ADDRESS"):
        report.warnings.append("SMTP is not configured; Hudu will not send email")

    return report


def check_file_mode(path: str) -> Optional[str]:
    """
    Check that a file is not readable or writable by group or others.

    Returns:
        An error message, or None if the mode is restrictive enough
    """
    mode = stat.S_IMODE(os.stat(path).st_mode)
    if mode & 0o077:
        return f"{path} has mode {oct(mode)}; run 'chmod 600 {path}'"
    return None
