"""
Environment variable name validation.
"""

import re
from typing import Optional, Tuple

ENV_KEY_PATTERN = re.compile(r"^[A-Z_][A-Z0-9_]*$")


def validate_env_key(key: str) -> Tuple[bool, Optional[str]]:
    """
    Validate an environment variable name.

    Keys are written unquoted, so only uppercase letters, digits and
    underscores are accepted, and the first character cannot be a digit.

    Args:
        key: The variable name

    Returns:
        Tuple of (is_valid: bool, error_message: Optional[str])
    """
    if not key:
        return False, "Key cannot be empty"

    if not ENV_KEY_PATTERN.match(key):
        return False, f"Invalid key {key!r}: use uppercase letters, digits and underscores"

    return True, None


def validate_required(value: str) -> Tuple[bool, Optional[str]]:
    """Reject values that are empty once surrounding whitespace is removed."""
    if not value or not value.strip():
        return False, "Required field. Please enter a value."
    return True, None
