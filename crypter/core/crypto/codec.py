"""
Envelope Codec
==============

Fixed-offset binary layout shared by every engine.

Wire Format (tag-before-ciphertext, default):
    +-----------+------------+----------+----------------+
    | salt (64) | nonce (16) | tag (16) | ciphertext (N) |
    +-----------+------------+----------+----------------+
    0           64           80         96

Wire Format (tag-after-ciphertext, combined):
    +-----------+------------+----------------+----------+
    | salt (64) | nonce (16) | ciphertext (N) | tag (16) |
    +-----------+------------+----------------+----------+
    0           64           80

Layouts are never auto-detected. A codec is bound to one wire layout and
to the tag convention of the AEAD primitive it feeds:

    - SEPARATE: the primitive hands out / takes the tag as its own value
    - COMBINED: the primitive hands out / takes ``ciphertext || tag``

The codec moves the tag between the wire position and the primitive's
convention, which is what lets two different primitives read each
other's envelopes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

from crypter.core.errors import InvalidEnvelope

SALT_LENGTH: Final[int] = 64
NONCE_LENGTH: Final[int] = 16
TAG_LENGTH: Final[int] = 16

HEADER_LENGTH: Final[int] = SALT_LENGTH + NONCE_LENGTH  # 80
ENVELOPE_MIN_LENGTH: Final[int] = HEADER_LENGTH + TAG_LENGTH  # 96


class EnvelopeLayout(str, Enum):
    """Position of the authentication tag on the wire."""

    TAG_BEFORE_CIPHERTEXT = "tag-before-ciphertext"
    TAG_AFTER_CIPHERTEXT = "tag-after-ciphertext"


class TagPosition(Enum):
    """How an AEAD primitive exposes its tag."""

    SEPARATE = "separate"
    COMBINED = "combined"


@dataclass(frozen=True, slots=True)
class EnvelopeParts:
    """
    Decoded envelope fields.

    ``tag`` is None for COMBINED consumers; ``ciphertext`` then carries
    the trailing tag.
    """

    salt: bytes
    nonce: bytes
    tag: Optional[bytes]
    ciphertext: bytes

    def __repr__(self) -> str:
        return f"EnvelopeParts(ciphertext_len={len(self.ciphertext)}, tag={'yes' if self.tag else 'no'})"


class EnvelopeCodec:
    """
    Encoder/decoder for one (wire layout, tag position) pair.

    Pure and stateless; safe to share across threads and tasks.

    Usage:
        codec = EnvelopeCodec(EnvelopeLayout.TAG_BEFORE_CIPHERTEXT, TagPosition.SEPARATE)
        envelope = codec.encode(salt, nonce, tag, ciphertext)
        parts = codec.decode(envelope)
    """

    __slots__ = ("_layout", "_tag_position")

    def __init__(
        self,
        layout: EnvelopeLayout = EnvelopeLayout.TAG_BEFORE_CIPHERTEXT,
        tag_position: TagPosition = TagPosition.SEPARATE,
    ) -> None:
        self._layout = EnvelopeLayout(layout)
        self._tag_position = TagPosition(tag_position)

    @property
    def layout(self) -> EnvelopeLayout:
        return self._layout

    @property
    def tag_position(self) -> TagPosition:
        return self._tag_position

    @property
    def minimum_length(self) -> int:
        """
        Smallest envelope this codec will split.

        Only a COMBINED consumer of the tag-after layout can leave the tag
        check to the primitive; everyone else needs the full 96 bytes.
        """
        if (
            self._layout is EnvelopeLayout.TAG_AFTER_CIPHERTEXT
            and self._tag_position is TagPosition.COMBINED
        ):
            return HEADER_LENGTH
        return ENVELOPE_MIN_LENGTH

    def encode(
        self,
        salt: bytes,
        nonce: bytes,
        tag: Optional[bytes],
        ciphertext: bytes,
    ) -> bytes:
        """
        Assemble an envelope.

        Args:
            salt: 64-byte key-derivation salt
            nonce: 16-byte AEAD nonce
            tag: 16-byte tag, or None when ciphertext is combined output
            ciphertext: Encrypted payload (``ciphertext || tag`` if tag is None)

        Returns:
            Envelope bytes in this codec's wire layout

        Raises:
            InvalidEnvelope: If a fixed-size field has the wrong length
        """
        if len(salt) != SALT_LENGTH:
            raise InvalidEnvelope(f"Salt must be exactly {SALT_LENGTH} bytes")
        if len(nonce) != NONCE_LENGTH:
            raise InvalidEnvelope(f"Nonce must be exactly {NONCE_LENGTH} bytes")

        if tag is None:
            if len(ciphertext) < TAG_LENGTH:
                raise InvalidEnvelope("Combined output too short (missing authentication tag)")
            tag = ciphertext[-TAG_LENGTH:]
            ciphertext = ciphertext[:-TAG_LENGTH]
        elif len(tag) != TAG_LENGTH:
            raise InvalidEnvelope(f"Tag must be exactly {TAG_LENGTH} bytes")

        if self._layout is EnvelopeLayout.TAG_BEFORE_CIPHERTEXT:
            return b"".join((salt, nonce, tag, ciphertext))
        return b"".join((salt, nonce, ciphertext, tag))

    def decode(self, envelope: bytes) -> EnvelopeParts:
        """
        Split an envelope into its fields.

        Never inspects ciphertext content.

        Raises:
            InvalidEnvelope: If envelope is shorter than ``minimum_length``
        """
        if len(envelope) < self.minimum_length:
            raise InvalidEnvelope()

        view = memoryview(envelope)
        salt = bytes(view[:SALT_LENGTH])
        nonce = bytes(view[SALT_LENGTH:HEADER_LENGTH])
        body = view[HEADER_LENGTH:]

        if self._layout is EnvelopeLayout.TAG_BEFORE_CIPHERTEXT:
            tag = body[:TAG_LENGTH]
            ciphertext = body[TAG_LENGTH:]
        elif len(body) < TAG_LENGTH:
            # Combined consumer only; the primitive rejects it.
            return EnvelopeParts(salt=salt, nonce=nonce, tag=None, ciphertext=bytes(body))
        else:
            tag = body[-TAG_LENGTH:]
            ciphertext = body[:-TAG_LENGTH]

        if self._tag_position is TagPosition.COMBINED:
            return EnvelopeParts(
                salt=salt,
                nonce=nonce,
                tag=None,
                ciphertext=b"".join((ciphertext, tag)),
            )
        return EnvelopeParts(salt=salt, nonce=nonce, tag=bytes(tag), ciphertext=bytes(ciphertext))

    def __repr__(self) -> str:
        return f"EnvelopeCodec(layout={self._layout.value}, tag_position={self._tag_position.value})"
