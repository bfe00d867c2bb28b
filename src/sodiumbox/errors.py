"""Error taxonomy shared by the key store, the envelope codec and the boundaries."""

from __future__ import annotations


class SodiumBoxError(Exception):
    """Base class for every error raised by sodiumbox."""


class StorageError(SodiumBoxError):
    """Key material could not be read from or written to disk."""


class KeyGenerationError(SodiumBoxError):
    """The box primitive failed to produce a key pair."""


class FormatError(SodiumBoxError):
    """Transport text is not valid base64."""


class DecryptionFailure(SodiumBoxError):
    """The envelope did not authenticate (tampered, wrong key, wrong nonce, truncated)."""
