"""
Secret key generation utilities.
"""

import secrets
import string

from hudu_setup.errors import EntropySourceUnavailable

ALNUM_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def _check_length(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def random_hex(n_bytes: int) -> str:
    """
    Generate a lowercase hex string from secure random bytes.

    Args:
        n_bytes: Number of random bytes to draw

    Returns:
        A string of exactly 2 * n_bytes hex characters

    Raises:
        EntropySourceUnavailable: If the OS random source cannot be read
    """
    _check_length(n_bytes, "n_bytes")
    try:
        key_bytes = secrets.token_bytes(n_bytes)
    except (NotImplementedError, OSError) as e:
        raise EntropySourceUnavailable(f"Secure random source unavailable: {e}") from e
    return key_bytes.hex()


def random_alnum(length: int) -> str:
    """
    Generate a random alphanumeric string (A-Z, a-z, 0-9).

    Every character is drawn independently with secrets.choice, so the
    distribution over the 62-character alphabet is uniform.

    Args:
        length: Number of characters to return

    Returns:
        A string of exactly `length` characters

    Raises:
        EntropySourceUnavailable: If the OS random source cannot be read
    """
    _check_length(length, "length")
    try:
        value = "".join(secrets.choice(ALNUM_ALPHABET) for _ in range(length))
    except (NotImplementedError, OSError) as e:
        raise EntropySourceUnavailable(f"Secure random source unavailable: {e}") from e
    if len(value) != length:
        raise EntropySourceUnavailable(
            f"Secure random source returned {len(value)} of {length} characters"
        )
    return value


def mask_sensitive_value(value: str, show_last: int = 4) -> str:
    """
    Mask sensitive values for display, showing only the last few characters.

    Args:
        value: The sensitive value to mask
        show_last: Number of characters to show at the end

    Returns:
        Masked string with asterisks
    """
    if not value or len(value) <= show_last:
        return value
    return "*" * (len(value) - show_last) + value[-show_last:]
