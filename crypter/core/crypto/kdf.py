"""
Key Derivation Functions
========================

Deterministic key stretching for envelope encryption.

Implements:
    - PBKDF2-HMAC-SHA512, 100,000 iterations, 256-bit output

The derived key is recomputed on every call and never cached: each
envelope carries its own salt, so there is nothing to reuse.
"""

from __future__ import annotations

from typing import Final

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

PBKDF2_ITERATIONS: Final[int] = 100_000
KEY_LENGTH: Final[int] = 32  # 256 bits for AES-256


def derive_key(secret: bytes, salt: bytes) -> bytes:
    """
    Derive an AES-256 key from secret and salt using PBKDF2-HMAC-SHA512.

    Args:
        secret: Engine secret (already normalized to bytes)
        salt: Per-envelope random salt

    Returns:
        32-byte derived key

    Raises:
        Whatever the primitive raises; a KDF failure is fatal, not a
        recoverable validation error.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(secret)
