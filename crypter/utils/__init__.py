"""
Utils module - Utility functions and helpers.

This module contains input validation used throughout Crypter.
"""

from crypter.utils.validators import (
    ValidationError,
    is_byte_sequence,
    normalize_secret,
    validate_aad,
    validate_bytes,
)

__all__ = [
    "ValidationError",
    "is_byte_sequence",
    "normalize_secret",
    "validate_aad",
    "validate_bytes",
]
