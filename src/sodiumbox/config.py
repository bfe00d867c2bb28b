"""Locations of the config directory and the persisted key pair."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from sodiumbox.errors import StorageError


def get_config_dir() -> Path:
    home = os.environ.get("SODIUMBOX_HOME")
    d = Path(home) if home else Path.home() / ".config" / "sodiumbox"
    try:
        d.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"cannot create config directory {d}: {e}") from e
    return d


def config_path() -> Path:
    return get_config_dir() / "config.toml"


def load_config() -> dict:
    p = config_path()
    try:
        if p.exists():
            return tomllib.loads(p.read_text())
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise StorageError(f"cannot read {p}: {e}") from e
    return {}


def get_keys_dir() -> Path:
    """Read keys directory from env, then config.toml, then default under the config dir."""
    env = os.environ.get("SODIUMBOX_KEYS_DIR")
    if env:
        return Path(env).expanduser()
    keys_dir = load_config().get("keys_dir")
    if keys_dir:
        return Path(keys_dir).expanduser()
    return get_config_dir() / "keys"
