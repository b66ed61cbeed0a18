"""
lexsign_core.multibase
----------------------
Text framing for key material:

- base58btc (Bitcoin alphabet), the only multibase we emit or accept ("z" prefix)
- unsigned LEB128 varints, used for multicodec algorithm tags
- multicodec framing: varint(code) || raw key bytes

Nothing here knows about curves; crypto.py maps codes to key types.
"""

from __future__ import annotations
from typing import Tuple

from .constants import MULTIBASE_BASE58BTC
from .errors import InvalidEncoding

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# 64-bit values need at most 10 bytes
_MAX_VARINT_LEN = 10


# --------- base58btc ----------
def b58encode(data: bytes) -> str:
    # leading zero bytes become leading '1's
    zeros = len(data) - len(data.lstrip(b"\x00"))
    num = int.from_bytes(data, "big")
    out = []
    while num > 0:
        num, rem = divmod(num, 58)
        out.append(ALPHABET[rem])
    out.extend(ALPHABET[0] * zeros)
    return "".join(reversed(out))


def b58decode(s: str) -> bytes:
    ones = len(s) - len(s.lstrip(ALPHABET[0]))
    num = 0
    for ch in s:
        idx = ALPHABET.find(ch)
        if idx < 0:
            raise InvalidEncoding(f"invalid base58 character: {ch!r}")
        num = num * 58 + idx
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * ones + body


# --------- varint ----------
def encode_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("varint must be non-negative")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Return (value, bytes_consumed). Truncated, over-long or non-minimal input raises InvalidEncoding."""
    result = 0
    shift = 0
    pos = offset
    while True:
        if pos >= len(data):
            raise InvalidEncoding("truncated varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            # minimal encoding only: one value, one byte string
            if byte == 0 and pos - offset > 1:
                raise InvalidEncoding("non-minimal varint")
            return result, pos - offset
        if pos - offset >= _MAX_VARINT_LEN:
            raise InvalidEncoding("varint too long")


# --------- multibase + multicodec ----------
def encode_multibase(data: bytes) -> str:
    return MULTIBASE_BASE58BTC + b58encode(data)


def decode_multibase(s: str) -> bytes:
    if not isinstance(s, str) or not s:
        raise InvalidEncoding("empty multibase string")
    if s[0] != MULTIBASE_BASE58BTC:
        raise InvalidEncoding(f"unsupported multibase prefix: {s[0]!r}")
    body = b58decode(s[1:])
    if not body:
        raise InvalidEncoding("empty multibase payload")
    return body


def wrap_multicodec(code: int, raw: bytes) -> bytes:
    return encode_varint(code) + raw


def unwrap_multicodec(data: bytes) -> Tuple[int, bytes]:
    code, n = decode_varint(data)
    return code, data[n:]
