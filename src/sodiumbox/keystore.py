"""Generate-once, persist, reuse: the long-lived box key pair on disk."""

from __future__ import annotations

import fcntl
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sodiumbox import crypto
from sodiumbox.errors import StorageError
from sodiumbox.schema import KEY_SIZE, KeyPair

log = logging.getLogger(__name__)

PRIVATE_KEY_FILE = "private_sodium.key"
PUBLIC_KEY_FILE = "public_sodium.key"
LOCK_FILE = ".keys.lock"


class KeyStore:
    """Owns the raw key files in one directory.

    Both files hold raw 32-byte keys with no header. If either is missing the
    pair is regenerated and both are rewritten.
    """

    def __init__(self, storage_dir: Path | str):
        self.storage_dir = Path(storage_dir)

    @property
    def private_key_path(self) -> Path:
        return self.storage_dir / PRIVATE_KEY_FILE

    @property
    def public_key_path(self) -> Path:
        return self.storage_dir / PUBLIC_KEY_FILE

    def exists(self) -> bool:
        return self.private_key_path.exists() and self.public_key_path.exists()

    def load_or_create(self) -> KeyPair:
        if self.exists():
            return self._load()
        with self._first_run_lock():
            # Another process may have created the pair while we waited.
            if self.exists():
                return self._load()
            return self._create()

    @contextmanager
    def _first_run_lock(self) -> Iterator[None]:
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            fd = open(self.storage_dir / LOCK_FILE, "w")
        except OSError as e:
            raise StorageError(f"cannot prepare key directory {self.storage_dir}: {e}") from e
        try:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX)
            except OSError as e:
                raise StorageError(f"cannot lock key directory {self.storage_dir}: {e}") from e
            try:
                yield
            finally:
                fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            fd.close()

    def _create(self) -> KeyPair:
        priv, pub = crypto.generate_keypair()
        try:
            # Private first: exists() only turns true once the public file lands.
            _write_key(self.private_key_path, priv, 0o600)
            _write_key(self.public_key_path, pub)
        except OSError as e:
            raise StorageError(f"cannot write key files in {self.storage_dir}: {e}") from e
        log.info("generated new key pair in %s", self.storage_dir)
        return KeyPair(public_key=pub, private_key=priv)

    def _load(self) -> KeyPair:
        try:
            priv = self.private_key_path.read_bytes()
            pub = self.public_key_path.read_bytes()
        except OSError as e:
            raise StorageError(f"cannot read key files in {self.storage_dir}: {e}") from e
        for path, data in ((self.private_key_path, priv), (self.public_key_path, pub)):
            if len(data) != KEY_SIZE:
                raise StorageError(f"{path} holds {len(data)} bytes, expected {KEY_SIZE}")
        log.debug("loaded key pair from %s", self.storage_dir)
        return KeyPair(public_key=pub, private_key=priv)


def load_or_create(storage_dir: Path | str) -> KeyPair:
    return KeyStore(storage_dir).load_or_create()


def _write_key(path: Path, data: bytes, mode: int | None = None) -> None:
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_bytes(data)
    if mode is not None:
        tmp.chmod(mode)
    os.replace(tmp, path)
