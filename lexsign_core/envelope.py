"""
lexsign_core.envelope
---------------------
Signing envelope for structured records.

A record is a dict, an object with to_dict() and a `signature` attribute, or a
dataclass with a `signature` field. The signature covers the canonical bytes of
the record with `signature` removed, so it is not part of what it signs.

Key features:
- canonicalize() is pure: it works on a copy and never touches the caller's record
- sign_record() writes the unpadded base64 signature only after signing succeeds
- verify_record() is read-only and idempotent; corrupt base64 (InvalidEncoding)
  and a wrong signature (SignatureMismatch) are reported as different errors
"""

from __future__ import annotations
from collections.abc import Mapping, MutableMapping
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, Optional

from .constants import SIGNATURE_FIELD
from .crypto import PrivateKey, PublicKey
from .errors import LexsignError, MissingSignature, NilKey, SignatureMismatch
from .logger import get_logger
from .utils import b64d, b64e, canonical_json

log = get_logger("Lexsign.Envelope")


def _unsigned_view(record: Any) -> Dict[str, Any]:
    if isinstance(record, Mapping):
        data = dict(record)
    elif callable(getattr(record, "to_dict", None)):
        data = dict(record.to_dict())
    elif is_dataclass(record) and not isinstance(record, type):
        data = asdict(record)
    else:
        raise TypeError(f"cannot canonicalize record of type {type(record).__name__}")
    data.pop(SIGNATURE_FIELD, None)
    return data


def _get_signature(record: Any) -> Optional[str]:
    if isinstance(record, Mapping):
        return record.get(SIGNATURE_FIELD)
    return getattr(record, SIGNATURE_FIELD, None)


def _set_signature(record: Any, sig: str) -> None:
    if isinstance(record, MutableMapping):
        record[SIGNATURE_FIELD] = sig
    else:
        setattr(record, SIGNATURE_FIELD, sig)


def canonicalize(record: Any) -> bytes:
    """Canonical bytes of `record` without its signature: sorted keys, compact separators, UTF-8."""
    return canonical_json(_unsigned_view(record))


def sign_record(record: Any, private_key: Optional[PrivateKey]):
    if private_key is None:
        raise NilKey("private key cannot be None")
    if isinstance(record, Mapping) and not isinstance(record, MutableMapping):
        raise TypeError(f"cannot write a signature into read-only {type(record).__name__}")
    sig = private_key.hash_and_sign(canonicalize(record))
    _set_signature(record, b64e(sig))
    return record


def verify_record(record: Any, public_key: Optional[PublicKey]) -> None:
    if public_key is None:
        raise NilKey("public key cannot be None")

    sig_text = _get_signature(record)
    if not sig_text:
        raise MissingSignature("cannot verify unsigned record")

    sig = b64d(sig_text)
    try:
        public_key.hash_and_verify(canonicalize(record), sig)
    except SignatureMismatch as exc:
        log.warning(f"[VERIFY] signature rejected for {public_key.did_key()}: {exc}")
        raise


def is_signed_by(record: Any, public_key: Optional[PublicKey]) -> bool:
    try:
        verify_record(record, public_key)
    except LexsignError:
        return False
    return True
