"""
Validation utilities for the setup package.
"""

from hudu_setup.validators.env_keys import validate_env_key, validate_required
from hudu_setup.validators.env_file import (
    RECOGNIZED_KEYS,
    EnvFileReport,
    check_env_values,
    check_file_mode,
)

__all__ = [
    "validate_env_key",
    "validate_required",
    "RECOGNIZED_KEYS",
    "EnvFileReport",
    "check_env_values",
    "check_file_mode",
]
