"""
Crypter Error Taxonomy
======================

Errors raised or returned by the envelope engines.

Propagation Policy:
    - InvalidSecret is raised from constructors (an engine that can never
      succeed must not be built)
    - EncryptionError / DecryptionError are RETURNED from encrypt/decrypt,
      never raised, so callers check the result kind after every call
    - Once cryptographic primitives run, every failure collapses into a
      single generic kind (UNKNOWN / FAILED)

WARNING:
    Never add detail to FAILED that distinguishes a wrong secret from
    tampered data. That distinction is a decryption oracle.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorMessage(str, Enum):
    """Fixed, user-facing error texts."""

    INVALID_ENCRYPTION_VALUE = "The value to encrypt is not a byte sequence."
    INVALID_DECRYPTION_VALUE = (
        "The value to decrypt is not a byte sequence or does not contain "
        "the full information necessary to perform the decryption."
    )
    INVALID_SECRET = "Invalid input for secret value. Must be a non-empty byte sequence or string."
    INVALID_AAD = (
        "Invalid value for additional authenticated data. "
        "AAD must be a non-empty byte sequence."
    )
    INVALID_ENVELOPE = "The envelope is shorter than its fixed-size header."
    ENCRYPTION_UNKNOWN = "Unknown error"
    DECRYPTION_FAILED = (
        "Decryption failed. Please check your secret, the additional "
        "authenticated data and the encrypted payload for errors."
    )


class EncryptionErrorKind(Enum):
    """Why an encryption call was rejected."""

    INVALID_VALUE = "invalid_value"
    INVALID_AAD = "invalid_aad"
    UNKNOWN = "unknown"


class DecryptionErrorKind(Enum):
    """Why a decryption call was rejected."""

    INVALID_VALUE = "invalid_value"
    INVALID_AAD = "invalid_aad"
    FAILED = "failed"


class CrypterError(Exception):
    """Base class for all crypter errors."""

    default_message: ErrorMessage = ErrorMessage.ENCRYPTION_UNKNOWN

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else self.default_message.value)

    @property
    def message(self) -> str:
        return str(self)


class InvalidSecret(CrypterError, ValueError):
    """Raised when an engine is constructed with an unusable secret."""

    default_message = ErrorMessage.INVALID_SECRET


class InvalidEnvelope(CrypterError, ValueError):
    """Raised by the envelope codec for buffers shorter than the header."""

    default_message = ErrorMessage.INVALID_ENVELOPE


_ENCRYPTION_MESSAGES = {
    EncryptionErrorKind.INVALID_VALUE: ErrorMessage.INVALID_ENCRYPTION_VALUE,
    EncryptionErrorKind.INVALID_AAD: ErrorMessage.INVALID_AAD,
    EncryptionErrorKind.UNKNOWN: ErrorMessage.ENCRYPTION_UNKNOWN,
}

_DECRYPTION_MESSAGES = {
    DecryptionErrorKind.INVALID_VALUE: ErrorMessage.INVALID_DECRYPTION_VALUE,
    DecryptionErrorKind.INVALID_AAD: ErrorMessage.INVALID_AAD,
    DecryptionErrorKind.FAILED: ErrorMessage.DECRYPTION_FAILED,
}


class EncryptionError(CrypterError):
    """
    Result value for a rejected encryption.

    Returned (not raised) by ``encrypt``. Inspect ``kind`` to tell input
    problems apart from primitive failures.
    """

    def __init__(self, kind: EncryptionErrorKind, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else _ENCRYPTION_MESSAGES[kind].value)
        self.kind = kind

    def __repr__(self) -> str:
        return f"EncryptionError(kind={self.kind.name})"


class DecryptionError(CrypterError):
    """
    Result value for a rejected decryption.

    Returned (not raised) by ``decrypt``. A FAILED kind never says which
    of secret, AAD, tag or ciphertext was wrong.
    """

    def __init__(self, kind: DecryptionErrorKind, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else _DECRYPTION_MESSAGES[kind].value)
        self.kind = kind

    def __repr__(self) -> str:
        return f"DecryptionError(kind={self.kind.name})"
