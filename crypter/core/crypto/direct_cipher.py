"""
Direct-Cipher AES-256-GCM Backend
=================================

AES-256-GCM through the low-level ``Cipher`` / ``modes.GCM`` API.

Tag Handling:
    - Encrypt: the tag is read from the encryptor after ``finalize()``
    - Decrypt: the tag is supplied to ``modes.GCM`` BEFORE any data is
      processed; ``finalize()`` raises InvalidTag on mismatch

Security Properties:
    - 256-bit key
    - 128-bit nonce (GHASH-derived counter block)
    - 128-bit authentication tag
    - AAD bound before the payload is processed
"""

from __future__ import annotations

from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from crypter.core.crypto.backend import AeadBackend, SealedData
from crypter.core.crypto.codec import TAG_LENGTH, TagPosition


class DirectGcmBackend(AeadBackend):
    """
    AEAD backend with a separately handled authentication tag.

    Usage:
        backend = DirectGcmBackend()
        sealed = backend.seal(key, nonce, plaintext, aad=b"context")
        plaintext = backend.open(key, nonce, sealed.ciphertext, sealed.tag, aad=b"context")
    """

    __slots__ = ()

    tag_position = TagPosition.SEPARATE

    def seal(
        self,
        key: bytes,
        nonce: bytes,
        plaintext: bytes,
        aad: Optional[bytes] = None,
    ) -> SealedData:
        encryptor = Cipher(algorithms.AES(key), modes.GCM(nonce)).encryptor()
        if aad is not None:
            encryptor.authenticate_additional_data(aad)

        ciphertext = encryptor.update(plaintext) + encryptor.finalize()

        return SealedData(ciphertext=ciphertext, tag=encryptor.tag)

    def open(
        self,
        key: bytes,
        nonce: bytes,
        ciphertext: bytes,
        tag: Optional[bytes] = None,
        aad: Optional[bytes] = None,
    ) -> bytes:
        if tag is None or len(tag) != TAG_LENGTH:
            raise ValueError(f"Tag must be exactly {TAG_LENGTH} bytes")

        decryptor = Cipher(algorithms.AES(key), modes.GCM(nonce, tag)).decryptor()
        if aad is not None:
            decryptor.authenticate_additional_data(aad)

        # finalize() verifies the tag (raises InvalidTag)
        return decryptor.update(ciphertext) + decryptor.finalize()
