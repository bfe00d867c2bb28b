"""Request boundary: the encrypt/decrypt form fields in, display text out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from sodiumbox import crypto, schema
from sodiumbox.errors import DecryptionFailure, FormatError
from sodiumbox.schema import KeyPair

log = logging.getLogger(__name__)

ENCRYPT_FIELD = "message_to_encrypt"
DECRYPT_FIELD = "message_to_decrypt"

# The only failure text users ever see; the failure kind stays in the debug log.
DECRYPT_FAILURE_NOTICE = "Failed to decrypt the message. Wrong key or nonce."


@dataclass
class FormResult:
    plain_text: str = ""
    encrypted_text: str = ""
    decrypted_text: str = ""
    error: bool = False


def _message_bytes(message: str) -> bytes:
    # Undecodable argv bytes arrive as lone surrogates; seal them as the raw bytes.
    try:
        return message.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        return message.encode("utf-8", errors="replace")


def encrypt_text(message: str, keypair: KeyPair) -> str:
    envelope = crypto.seal(_message_bytes(message), keypair)
    return schema.encode_for_transport(envelope)


def decrypt_text(blob: str, keypair: KeyPair) -> str:
    """Open a transport blob. Raises FormatError or DecryptionFailure."""
    data = schema.decode_from_transport(blob)
    return crypto.open_envelope(data, keypair).decode("utf-8", errors="replace")


def handle_form(form: Mapping[str, str], keypair: KeyPair) -> FormResult:
    """Process whichever of the two fields were submitted, encrypt first."""
    result = FormResult()

    if ENCRYPT_FIELD in form:
        result.plain_text = form[ENCRYPT_FIELD]
        result.encrypted_text = encrypt_text(result.plain_text, keypair)

    if DECRYPT_FIELD in form:
        result.encrypted_text = form[DECRYPT_FIELD]
        try:
            result.decrypted_text = decrypt_text(result.encrypted_text, keypair)
        except (FormatError, DecryptionFailure) as e:
            log.debug("decrypt rejected: %s: %s", type(e).__name__, e)
            result.decrypted_text = DECRYPT_FAILURE_NOTICE
            result.error = True

    return result
