"""
Crypter Cryptographic Core
==========================

Password-based AES-256-GCM envelopes with two interchangeable backends.

Architecture:
    1. Envelope codec: fixed-offset salt/nonce/tag/ciphertext layout
    2. PBKDF2-HMAC-SHA512 key derivation (100,000 iterations)
    3. AEAD backends: direct ``Cipher``/``modes.GCM`` and combined ``AESGCM``

The engines live in ``crypter.core.crypto.engine``.

WARNING: This module handles sensitive cryptographic material.
         Incorrect usage can compromise security.
"""

from crypter.core.crypto.backend import AeadBackend, SealedData
from crypter.core.crypto.codec import (
    ENVELOPE_MIN_LENGTH,
    HEADER_LENGTH,
    NONCE_LENGTH,
    SALT_LENGTH,
    TAG_LENGTH,
    EnvelopeCodec,
    EnvelopeLayout,
    EnvelopeParts,
    TagPosition,
)
from crypter.core.crypto.direct_cipher import DirectGcmBackend
from crypter.core.crypto.kdf import KEY_LENGTH, PBKDF2_ITERATIONS, derive_key
from crypter.core.crypto.subtle_cipher import SubtleGcmBackend

__all__ = [
    "AeadBackend",
    "SealedData",
    "DirectGcmBackend",
    "SubtleGcmBackend",
    "EnvelopeCodec",
    "EnvelopeLayout",
    "EnvelopeParts",
    "TagPosition",
    "derive_key",
    "ENVELOPE_MIN_LENGTH",
    "HEADER_LENGTH",
    "KEY_LENGTH",
    "NONCE_LENGTH",
    "PBKDF2_ITERATIONS",
    "SALT_LENGTH",
    "TAG_LENGTH",
]
