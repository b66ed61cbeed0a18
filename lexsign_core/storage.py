"""
lexsign_core.storage
--------------------
File persistence for KeyPair.

The key pair lives in `<keys_dir>/keypair.json` as pretty-printed JSON with the
fields privateKey, publicKey and didKey. The file holds a private key and is
written with mode 0600.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import os

from .config import load_settings
from .constants import KEYPAIR_FILENAME
from .errors import KeyPairIOError, KeyPairParseError
from .keys import KeyPair
from .logger import get_logger

log = get_logger("Lexsign.Storage")

PathLike = Union[str, "os.PathLike[str]"]


def save_keypair(kp: KeyPair, directory: Optional[PathLike] = None) -> Path:
    dir_path = Path(directory if directory is not None else load_settings().keys_dir)
    path = dir_path / KEYPAIR_FILENAME
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            # O_CREAT mode only applies to new files; tighten an existing one before the secret lands
            os.fchmod(fh.fileno(), 0o600)
            fh.write(kp.to_json(indent=2))
    except OSError as exc:
        raise KeyPairIOError(f"failed to write key pair to {path}: {exc}") from exc
    log.info(f"[STORE] saved key pair {kp.did_key} to {path}")
    return path


def load_keypair(path: PathLike) -> KeyPair:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise KeyPairIOError(f"failed to read key pair from {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise KeyPairParseError(f"key pair file {path} is not UTF-8") from exc
    kp = KeyPair.from_json(text)
    log.debug(f"[STORE] loaded key pair {kp.did_key} from {path}")
    return kp
