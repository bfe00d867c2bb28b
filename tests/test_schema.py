"""Tests for sodiumbox.schema — key pair validation and transport encoding."""

import base64

import pytest

from sodiumbox.crypto import generate_keypair, seal
from sodiumbox.errors import DecryptionFailure, FormatError
from sodiumbox.schema import (
    MAC_SIZE,
    NONCE_SIZE,
    Envelope,
    KeyPair,
    decode_from_transport,
    encode_for_transport,
    public_key_to_base64,
)


def test_keypair_rejects_wrong_lengths():
    with pytest.raises(ValueError):
        KeyPair(public_key=b"\x01" * 31, private_key=b"\x02" * 32)
    with pytest.raises(ValueError):
        KeyPair(public_key=b"\x01" * 32, private_key=b"")


def test_keypair_repr_hides_private_key():
    priv, pub = generate_keypair()
    kp = KeyPair(public_key=pub, private_key=priv)
    assert repr(priv) not in repr(kp)
    assert public_key_to_base64(pub) in repr(kp)


def test_envelope_from_bytes_splits_at_nonce():
    data = bytes(range(NONCE_SIZE)) + b"c" * 20
    env = Envelope.from_bytes(data)
    assert env.nonce == data[:NONCE_SIZE]
    assert env.ciphertext == b"c" * 20
    assert env.to_bytes() == data


def test_envelope_from_bytes_short_raises():
    with pytest.raises(DecryptionFailure):
        Envelope.from_bytes(b"\x00" * 10)


def test_encode_is_base64_of_nonce_then_ciphertext():
    priv, pub = generate_keypair()
    env = seal(b"hello world", KeyPair(public_key=pub, private_key=priv))
    text = encode_for_transport(env)
    assert isinstance(text, str)
    assert base64.b64decode(text) == env.nonce + env.ciphertext
    assert decode_from_transport(text) == env.to_bytes()


def test_decode_tolerates_line_breaks():
    data = b"\x00\x01\x02\xff" * 20
    text = base64.b64encode(data).decode()
    wrapped = "\n".join(text[i:i + 16] for i in range(0, len(text), 16))
    assert decode_from_transport(f"  {wrapped}\r\n") == data


@pytest.mark.parametrize("text", ["not base64!!", "abc", "QUJD*", "QQ=Q"])
def test_decode_invalid_raises_format_error(text):
    with pytest.raises(FormatError):
        decode_from_transport(text)


def test_decode_non_ascii_raises_format_error():
    with pytest.raises(FormatError):
        decode_from_transport("héllo")


def test_mac_size_is_poly1305_tag():
    assert MAC_SIZE == 16


@pytest.mark.parametrize(
    "nonce_len, ciphertext_len",
    [(NONCE_SIZE - 1, MAC_SIZE), (NONCE_SIZE + 1, MAC_SIZE), (NONCE_SIZE, MAC_SIZE - 1), (0, 0)],
)
def test_envelope_rejects_malformed_parts(nonce_len, ciphertext_len):
    with pytest.raises(DecryptionFailure):
        Envelope(nonce=b"\x00" * nonce_len, ciphertext=b"\x00" * ciphertext_len)


def test_envelope_accepts_minimal_parts():
    env = Envelope(nonce=b"\x00" * NONCE_SIZE, ciphertext=b"\x00" * MAC_SIZE)
    assert len(env.to_bytes()) == NONCE_SIZE + MAC_SIZE
