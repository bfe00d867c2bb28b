"""X25519 keypair generation and self-addressed NaCl box seal/open."""

from __future__ import annotations

import nacl.utils
from nacl.exceptions import CryptoError
from nacl.public import PrivateKey

from sodiumbox.errors import DecryptionFailure, KeyGenerationError
from sodiumbox.schema import NONCE_SIZE, Envelope, KeyPair


def generate_keypair() -> tuple[bytes, bytes]:
    """Return (private_key_bytes, public_key_bytes)."""
    try:
        sk = PrivateKey.generate()
    except CryptoError as e:
        raise KeyGenerationError(f"box keypair generation failed: {e}") from e
    return bytes(sk), bytes(sk.public_key)


def seal(plaintext: bytes, keypair: KeyPair) -> Envelope:
    """Encrypt plaintext to ourselves with NaCl Box (X25519 + XSalsa20-Poly1305).

    A fresh random nonce is drawn for every call; reusing one with the same
    pair would void both confidentiality and authenticity.
    """
    nonce = nacl.utils.random(NONCE_SIZE)
    encrypted = keypair.box().encrypt(plaintext, nonce)
    return Envelope(nonce=encrypted.nonce, ciphertext=encrypted.ciphertext)


def open_envelope(envelope: Envelope | bytes, keypair: KeyPair) -> bytes:
    """Authenticate and decrypt an envelope, or its serialized bytes.

    Raises DecryptionFailure for short input and for any tag mismatch.
    """
    if not isinstance(envelope, Envelope):
        envelope = Envelope.from_bytes(bytes(envelope))
    try:
        return keypair.box().decrypt(envelope.ciphertext, envelope.nonce)
    except CryptoError as e:
        raise DecryptionFailure("message failed authentication") from e
