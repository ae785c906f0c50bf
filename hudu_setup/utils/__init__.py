"""
Utility modules for the setup package.
"""

from hudu_setup.utils.secrets import random_hex, random_alnum, mask_sensitive_value
from hudu_setup.utils.logger import logger, configure_logging

__all__ = [
    "random_hex",
    "random_alnum",
    "mask_sensitive_value",
    "logger",
    "configure_logging",
]
