"""sodiumbox CLI — typer entry point."""

from __future__ import annotations

import json
import logging
from typing import NoReturn

import typer

from sodiumbox import config, form, schema
from sodiumbox.errors import KeyGenerationError, StorageError
from sodiumbox.keystore import KeyStore
from sodiumbox.schema import KeyPair

log = logging.getLogger(__name__)

app = typer.Typer(name="sodiumbox", no_args_is_help=True)

PRETTY = typer.Option(False, "--pretty", help="Human-readable output")


def _out(data: object, pretty: bool) -> None:
    if pretty:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        typer.echo(json.dumps(data, ensure_ascii=False))


def _fail(message: str) -> NoReturn:
    typer.echo(json.dumps({"error": message}), err=True)
    raise typer.Exit(1)


def _keystore() -> KeyStore:
    try:
        return KeyStore(config.get_keys_dir())
    except StorageError as e:
        log.debug("config unavailable: %s", e)
        _fail(str(e))


def _keypair(store: KeyStore) -> KeyPair:
    try:
        return store.load_or_create()
    except (StorageError, KeyGenerationError) as e:
        log.debug("key store unavailable: %s", e)
        _fail(str(e))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    """Seal and open text with a static NaCl box key pair."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def encrypt(message: str, pretty: bool = PRETTY) -> None:
    """Seal a message and print the base64 envelope."""
    keypair = _keypair(_keystore())
    _out({"encrypted_text": form.encrypt_text(message, keypair)}, pretty)


@app.command()
def decrypt(blob: str, pretty: bool = PRETTY) -> None:
    """Open a base64 envelope produced by `encrypt`."""
    keypair = _keypair(_keystore())
    result = form.handle_form({form.DECRYPT_FIELD: blob}, keypair)
    if result.error:
        _fail(result.decrypted_text)
    _out({"decrypted_text": result.decrypted_text}, pretty)


@app.command()
def keys(pretty: bool = PRETTY) -> None:
    """Show the key files and the public key, creating the pair if needed."""
    store = _keystore()
    created = not store.exists()
    keypair = _keypair(store)
    _out({
        "private_key_path": str(store.private_key_path),
        "public_key_path": str(store.public_key_path),
        "public_key": schema.public_key_to_base64(keypair.public_key),
        "created": created,
    }, pretty)
