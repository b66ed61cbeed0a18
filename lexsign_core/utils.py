"""
lexsign_core.utils
------------------
Lightweight helpers for unpadded base64, timestamping and canonical JSON serialization.
These functions keep record signing deterministic: sign and verify must see identical bytes.
"""

from __future__ import annotations
import base64, binascii, json, time
from typing import Any, Dict

from .errors import InvalidEncoding


def b64e(b: bytes) -> str:
    # standard alphabet, no padding
    return base64.b64encode(b).decode("ascii").rstrip("=")


def b64d(s: str) -> bytes:
    """Strict inverse of b64e. Padding, whitespace and url-safe characters are rejected."""
    if not isinstance(s, str) or "=" in s or len(s) % 4 == 1:
        raise InvalidEncoding("not unpadded standard base64")
    try:
        return base64.b64decode((s + "=" * (-len(s) % 4)).encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise InvalidEncoding("not unpadded standard base64") from exc


def now_ts() -> str:
    # RFC3339 / ISO 8601 in UTC, second precision
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def canonical_json(obj: Dict[str, Any]) -> bytes:
    # Deterministic, minimal JSON for signing
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False).encode("utf-8")
