"""Key pair and envelope types plus the base64 transport encoding."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from nacl.bindings import crypto_secretbox_MACBYTES
from nacl.public import Box, PrivateKey, PublicKey

from sodiumbox.errors import DecryptionFailure, FormatError

NONCE_SIZE = Box.NONCE_SIZE
MAC_SIZE = crypto_secretbox_MACBYTES  # Poly1305 tag prepended to every box ciphertext
KEY_SIZE = PublicKey.SIZE


@dataclass(frozen=True)
class KeyPair:
    """A long-lived X25519 pair, used as both sender and recipient of a box."""

    public_key: bytes
    private_key: bytes

    def __post_init__(self) -> None:
        if len(self.public_key) != PublicKey.SIZE or len(self.private_key) != PrivateKey.SIZE:
            raise ValueError(
                f"key pair must be {PublicKey.SIZE}+{PrivateKey.SIZE} bytes, "
                f"got {len(self.public_key)}+{len(self.private_key)}"
            )

    def __repr__(self) -> str:
        return f"KeyPair(public_key={public_key_to_base64(self.public_key)!r})"

    def box(self) -> Box:
        """Combined box context: our private key against our own public key."""
        return Box(PrivateKey(self.private_key), PublicKey(self.public_key))


@dataclass(frozen=True)
class Envelope:
    """Per-message nonce plus authenticated ciphertext."""

    nonce: bytes
    ciphertext: bytes  # includes the authentication tag

    def __post_init__(self) -> None:
        if len(self.nonce) != NONCE_SIZE or len(self.ciphertext) < MAC_SIZE:
            raise DecryptionFailure(
                f"malformed envelope: {len(self.nonce)}-byte nonce, "
                f"{len(self.ciphertext)}-byte ciphertext"
            )

    def to_bytes(self) -> bytes:
        return self.nonce + self.ciphertext

    @classmethod
    def from_bytes(cls, data: bytes) -> Envelope:
        # Anything shorter cannot hold a nonce and a tag, so it can never open.
        if len(data) < NONCE_SIZE + MAC_SIZE:
            raise DecryptionFailure(f"envelope too short ({len(data)} bytes)")
        return cls(nonce=data[:NONCE_SIZE], ciphertext=data[NONCE_SIZE:])


def encode_for_transport(envelope: Envelope) -> str:
    return base64.b64encode(envelope.to_bytes()).decode()


def decode_from_transport(text: str) -> bytes:
    """Reverse encode_for_transport, tolerating line breaks from copy/paste."""
    compact = "".join(text.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"invalid base64: {e}") from e


def public_key_to_base64(pub: bytes) -> str:
    return base64.b64encode(pub).decode()
