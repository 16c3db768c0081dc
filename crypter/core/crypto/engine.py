"""
Envelope Encryption Engines
===========================

Password-based AES-256-GCM envelopes with every decryption input except
the secret embedded in the output.

Encryption Flow:
    plaintext, aad?
        ↓ validate shape (no crypto work on bad input)
        ↓ salt (64), nonce (16) from the OS CSPRNG
        ↓ PBKDF2-HMAC-SHA512(secret, salt) → key
        ↓ AEAD seal (backend)
    salt ∥ nonce ∥ tag ∥ ciphertext   (default wire layout)

Decryption Flow:
    envelope, aad?
        ↓ validate shape and minimum length
        ↓ split fixed offsets (codec)
        ↓ PBKDF2-HMAC-SHA512(secret, salt) → key
        ↓ AEAD open (backend), tag verified before plaintext is returned
    plaintext

Error Policy:
    encrypt/decrypt RETURN EncryptionError / DecryptionError instead of
    raising. Only the constructor raises (InvalidSecret).

Engines hold no per-call state, so one instance can serve any number of
concurrent calls.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from typing import Any, Optional, Union

from cryptography.exceptions import InvalidTag

from crypter.core.crypto.backend import AeadBackend
from crypter.core.crypto.codec import (
    NONCE_LENGTH,
    SALT_LENGTH,
    EnvelopeCodec,
    EnvelopeLayout,
)
from crypter.core.crypto.direct_cipher import DirectGcmBackend
from crypter.core.crypto.kdf import derive_key
from crypter.core.crypto.subtle_cipher import SubtleGcmBackend
from crypter.core.errors import (
    DecryptionError,
    DecryptionErrorKind,
    EncryptionError,
    EncryptionErrorKind,
    InvalidEnvelope,
)
from crypter.utils.validators import (
    ValidationError,
    is_byte_sequence,
    normalize_secret,
    validate_aad,
    validate_bytes,
)

EncryptResult = Union[bytes, EncryptionError]
DecryptResult = Union[bytes, DecryptionError]


class EnvelopeEngine:
    """
    Envelope encryption over a pluggable AEAD backend.

    Subclasses only choose the backend; the wire layout, the key
    derivation and the error taxonomy are shared.

    Usage:
        engine = DirectCipherEngine("correct-horse-battery-staple")
        envelope = await engine.encrypt(b"hello world")
        plaintext = await engine.decrypt(envelope)

    Security Notes:
        - The secret lives in a private slot; there is no getter
        - Engines cannot be pickled or copied into other processes
        - A fresh salt and nonce are drawn for every encryption
    """

    __slots__ = ("__secret", "_backend", "_codec", "_log")

    backend_class: type[AeadBackend] = DirectGcmBackend

    def __init__(
        self,
        secret: Union[str, bytes],
        *,
        layout: EnvelopeLayout = EnvelopeLayout.TAG_BEFORE_CIPHERTEXT,
    ) -> None:
        """
        Create an engine bound to one secret.

        Args:
            secret: Non-empty bytes or non-empty text (UTF-8 encoded)
            layout: Wire layout (tag-before-ciphertext unless stated)

        Raises:
            InvalidSecret: If secret is empty or not text/bytes
        """
        self.__secret = normalize_secret(secret)

        self._backend = self.backend_class()
        self._codec = EnvelopeCodec(layout, self._backend.tag_position)
        self._log = logging.getLogger("crypter.engine")

    @property
    def layout(self) -> EnvelopeLayout:
        return self._codec.layout

    @property
    def minimum_envelope_length(self) -> int:
        return self._codec.minimum_length

    async def encrypt(self, value: Any, aad: Any = None) -> EncryptResult:
        """
        Encrypt a byte sequence into a self-contained envelope.

        Args:
            value: Plaintext bytes (may be empty)
            aad: Optional non-empty Additional Authenticated Data

        Returns:
            Envelope bytes, or an EncryptionError describing the rejection
        """
        try:
            plaintext = validate_bytes(value)
        except ValidationError:
            return EncryptionError(EncryptionErrorKind.INVALID_VALUE)
        try:
            aad_bytes = validate_aad(aad)
        except ValidationError:
            return EncryptionError(EncryptionErrorKind.INVALID_AAD)

        return await asyncio.to_thread(self._encrypt, plaintext, aad_bytes)

    async def decrypt(self, envelope: Any, aad: Any = None) -> DecryptResult:
        """
        Decrypt an envelope produced by any engine sharing this layout.

        Args:
            envelope: Envelope bytes
            aad: The AAD used at encryption time, if any

        Returns:
            Plaintext bytes, or a DecryptionError. A FAILED kind covers
            wrong secret, wrong/missing/unexpected AAD and tampering alike.
        """
        if not is_byte_sequence(envelope):
            return DecryptionError(DecryptionErrorKind.INVALID_VALUE)
        # Length in bytes, whatever the memoryview item size
        envelope = bytes(envelope)
        if len(envelope) < self._codec.minimum_length:
            return DecryptionError(DecryptionErrorKind.INVALID_VALUE)
        try:
            aad_bytes = validate_aad(aad)
        except ValidationError:
            return DecryptionError(DecryptionErrorKind.INVALID_AAD)

        return await asyncio.to_thread(self._decrypt, envelope, aad_bytes)

    def _encrypt(self, plaintext: bytes, aad: Optional[bytes]) -> EncryptResult:
        nonce = secrets.token_bytes(NONCE_LENGTH)
        salt = secrets.token_bytes(SALT_LENGTH)
        key = derive_key(self.__secret, salt)

        try:
            sealed = self._backend.seal(key, nonce, plaintext, aad)
            envelope = self._codec.encode(salt, nonce, sealed.tag, sealed.ciphertext)
        except Exception as exc:
            self._log.warning("Encryption failed in %s (%s)", type(self).__name__, type(exc).__name__)
            return EncryptionError(EncryptionErrorKind.UNKNOWN)

        self._log.debug(
            "Sealed envelope: engine=%s layout=%s envelope_len=%d",
            type(self).__name__, self._codec.layout.value, len(envelope),
        )
        return envelope

    def _decrypt(self, envelope: bytes, aad: Optional[bytes]) -> DecryptResult:
        try:
            parts = self._codec.decode(envelope)
        except InvalidEnvelope:
            return DecryptionError(DecryptionErrorKind.INVALID_VALUE)

        key = derive_key(self.__secret, parts.salt)

        try:
            plaintext = self._backend.open(key, parts.nonce, parts.ciphertext, parts.tag, aad)
        except (InvalidTag, ValueError):
            self._log.warning("Decryption failed in %s", type(self).__name__)
            return DecryptionError(DecryptionErrorKind.FAILED)

        self._log.debug(
            "Opened envelope: engine=%s envelope_len=%d",
            type(self).__name__, len(envelope),
        )
        return plaintext

    def __repr__(self) -> str:
        """Safe representation without exposing the secret."""
        return f"{type(self).__name__}(layout={self._codec.layout.value})"

    def __reduce__(self) -> Any:
        raise TypeError(f"{type(self).__name__} holds a secret and cannot be pickled")


class DirectCipherEngine(EnvelopeEngine):
    """
    Engine backed by the low-level ``Cipher``/``modes.GCM`` API.

    The tag is retrieved after the encrypt pass and supplied before the
    decrypt pass. Native wire layout: salt ∥ nonce ∥ tag ∥ ciphertext.
    """

    __slots__ = ()

    backend_class = DirectGcmBackend


class SubtleCipherEngine(EnvelopeEngine):
    """
    Engine backed by the ``AESGCM`` combined-output API.

    Reads and writes the default tag-before-ciphertext layout so that its
    envelopes are interchangeable with DirectCipherEngine.
    Envelopes stored by earlier combined-output writers
    (salt ∥ nonce ∥ ciphertext ∥ tag, 80-byte minimum) need
    ``layout=EnvelopeLayout.TAG_AFTER_CIPHERTEXT``.
    """

    __slots__ = ()

    backend_class = SubtleGcmBackend


# Default engine
Crypter = DirectCipherEngine
