"""
AEAD Backend Interface
======================

Capability interface the envelope engines use to reach an AES-GCM
primitive. Backends differ only in how they expose the authentication
tag (see ``TagPosition``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from crypter.core.crypto.codec import TagPosition


@dataclass(frozen=True, slots=True)
class SealedData:
    """
    Output of one AEAD encryption.

    Attributes:
        ciphertext: Encrypted data (``ciphertext || tag`` for COMBINED backends)
        tag: Authentication tag for SEPARATE backends, else None
    """

    ciphertext: bytes
    tag: Optional[bytes] = None

    def __repr__(self) -> str:
        return f"SealedData(ciphertext_len={len(self.ciphertext)})"


class AeadBackend(ABC):
    """
    AES-256-GCM primitive behind a uniform seal/open interface.

    Implementations must be stateless so that one instance can serve
    concurrent calls.
    """

    __slots__ = ()

    tag_position: TagPosition

    @abstractmethod
    def seal(
        self,
        key: bytes,
        nonce: bytes,
        plaintext: bytes,
        aad: Optional[bytes] = None,
    ) -> SealedData:
        """Encrypt plaintext and authenticate it together with aad."""

    @abstractmethod
    def open(
        self,
        key: bytes,
        nonce: bytes,
        ciphertext: bytes,
        tag: Optional[bytes] = None,
        aad: Optional[bytes] = None,
    ) -> bytes:
        """
        Verify and decrypt.

        Raises:
            cryptography.exceptions.InvalidTag: If authentication fails
        """
