"""
Subtle-Cipher AES-256-GCM Backend
=================================

AES-256-GCM through the high-level ``AESGCM`` AEAD API, which appends
the 128-bit tag to the ciphertext and expects the same combined format
on decryption.

WARNING:
    - Never reuse (key, nonce) pairs
    - InvalidTag means wrong key, wrong AAD or tampered data; the API
      does not say which
"""

from __future__ import annotations

from typing import Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from crypter.core.crypto.backend import AeadBackend, SealedData
from crypter.core.crypto.codec import TagPosition


class SubtleGcmBackend(AeadBackend):
    """
    AEAD backend with combined ``ciphertext || tag`` output.

    Usage:
        backend = SubtleGcmBackend()
        sealed = backend.seal(key, nonce, plaintext)
        plaintext = backend.open(key, nonce, sealed.ciphertext)
    """

    __slots__ = ()

    tag_position = TagPosition.COMBINED

    def seal(
        self,
        key: bytes,
        nonce: bytes,
        plaintext: bytes,
        aad: Optional[bytes] = None,
    ) -> SealedData:
        return SealedData(ciphertext=AESGCM(key).encrypt(nonce, plaintext, aad))

    def open(
        self,
        key: bytes,
        nonce: bytes,
        ciphertext: bytes,
        tag: Optional[bytes] = None,
        aad: Optional[bytes] = None,
    ) -> bytes:
        if tag is not None:
            ciphertext = ciphertext + tag
        return AESGCM(key).decrypt(nonce, ciphertext, aad)
