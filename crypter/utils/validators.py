"""
Validation Utilities
====================

Input-shape validation for secrets, payloads and AAD.

All checks here run BEFORE any cryptographic work, so a rejected call
never touches the key derivation or the cipher.
"""

from __future__ import annotations

from typing import Any, Final, Optional, Union

from crypter.core.errors import InvalidSecret

BYTE_SEQUENCE_TYPES: Final[tuple[type, ...]] = (bytes, bytearray, memoryview)

ByteSequence = Union[bytes, bytearray, memoryview]


class ValidationError(ValueError):
    """Raised when validation fails."""
    pass


def is_byte_sequence(value: Any) -> bool:
    """Check whether value is a bytes-like buffer (text is not)."""
    return isinstance(value, BYTE_SEQUENCE_TYPES)


def validate_bytes(value: Any, field_name: str = "value") -> bytes:
    """
    Validate a payload and return it as immutable bytes.

    Empty payloads are allowed.

    Raises:
        ValidationError: If value is not a byte sequence
    """
    if not is_byte_sequence(value):
        raise ValidationError(f"{field_name} must be a byte sequence")
    return bytes(value)


def validate_aad(aad: Any) -> Optional[bytes]:
    """
    Validate optional Additional Authenticated Data.

    Args:
        aad: None (no AAD) or a non-empty byte sequence

    Returns:
        None when no AAD was supplied, else the AAD as bytes

    Raises:
        ValidationError: If AAD is present but empty or not bytes
    """
    if aad is None:
        return None
    if not is_byte_sequence(aad):
        raise ValidationError("aad must be a byte sequence")
    aad = bytes(aad)
    if not aad:
        raise ValidationError("aad cannot be empty")
    return aad


def normalize_secret(secret: Any) -> bytes:
    """
    Normalize a secret to bytes.

    Text secrets are UTF-8 encoded.

    Raises:
        InvalidSecret: If secret is empty or neither text nor bytes
    """
    if isinstance(secret, str):
        if not secret:
            raise InvalidSecret()
        return secret.encode("utf-8")
    if is_byte_sequence(secret):
        secret = bytes(secret)
        if not secret:
            raise InvalidSecret()
        return secret
    raise InvalidSecret()
