"""
Crypter - Password-Based Authenticated Encryption Envelopes
===========================================================

Encrypts byte buffers with AES-256-GCM under a key derived from a secret
(PBKDF2-HMAC-SHA512). Each envelope carries its own salt, nonce and tag,
so the secret is the only thing a caller must keep.

Security Notice:
- No secrets are logged
- Fail-closed design pattern
- Decryption failures never reveal their cause
"""

from crypter.core.config import CrypterConfig
from crypter.core.crypto.codec import EnvelopeLayout
from crypter.core.crypto.engine import (
    Crypter,
    DirectCipherEngine,
    EnvelopeEngine,
    SubtleCipherEngine,
)
from crypter.core.errors import (
    CrypterError,
    DecryptionError,
    DecryptionErrorKind,
    EncryptionError,
    EncryptionErrorKind,
    ErrorMessage,
    InvalidEnvelope,
    InvalidSecret,
)
from crypter.core.logging import configure_logging, get_secure_logger

__version__ = "0.1.0"

__all__ = [
    "Crypter",
    "DirectCipherEngine",
    "SubtleCipherEngine",
    "EnvelopeEngine",
    "EnvelopeLayout",
    "CrypterConfig",
    "CrypterError",
    "EncryptionError",
    "EncryptionErrorKind",
    "DecryptionError",
    "DecryptionErrorKind",
    "ErrorMessage",
    "InvalidEnvelope",
    "InvalidSecret",
    "configure_logging",
    "get_secure_logger",
    "__version__",
]
