import pytest

from lexsign_core.errors import InvalidEncoding
from lexsign_core.multibase import (
    ALPHABET, b58decode, b58encode, decode_multibase, decode_varint, encode_multibase,
    encode_varint, unwrap_multicodec, wrap_multicodec,
)


def test_base58_alphabet():
    assert len(ALPHABET) == 58
    for ch in "0OIl":
        assert ch not in ALPHABET


def test_base58_known_vectors():
    assert b58encode(b"") == ""
    assert b58encode(b"\x00") == "1"
    assert b58encode(b"\x00\x00\x01") == "112"
    assert b58encode(b"Hello World!") == "2NEpo7TZRRrLZSi2U"
    assert b58encode(bytes.fromhex("0000287fb4cd")) == "11233QC4"


def test_base58_decode_known_vectors():
    assert b58decode("2NEpo7TZRRrLZSi2U") == b"Hello World!"
    assert b58decode("11233QC4") == bytes.fromhex("0000287fb4cd")
    assert b58decode("") == b""


def test_base58_rejects_invalid_characters():
    with pytest.raises(InvalidEncoding):
        b58decode("abc0")
    with pytest.raises(InvalidEncoding):
        b58decode("not-valid")


def test_varint_multicodec_codes():
    assert encode_varint(0x1200) == b"\x80\x24"
    assert encode_varint(0x1306) == b"\x86\x26"
    assert encode_varint(0xE7) == b"\xe7\x01"
    assert encode_varint(0x1301) == b"\x81\x26"
    assert encode_varint(0) == b"\x00"
    assert decode_varint(b"\x80\x24rest") == (0x1200, 2)


def test_varint_rejects_truncated_and_overlong():
    with pytest.raises(InvalidEncoding):
        decode_varint(b"\x80")
    with pytest.raises(InvalidEncoding):
        decode_varint(b"\xff" * 11)
    with pytest.raises(ValueError):
        encode_varint(-1)


def test_multicodec_framing():
    framed = wrap_multicodec(0x1200, b"\x02" + b"\x11" * 32)
    assert framed[:2] == b"\x80\x24"
    assert unwrap_multicodec(framed) == (0x1200, b"\x02" + b"\x11" * 32)


def test_multibase_prefix():
    assert encode_multibase(b"Hello World!") == "z2NEpo7TZRRrLZSi2U"
    assert decode_multibase("z2NEpo7TZRRrLZSi2U") == b"Hello World!"
    for bad in ["", "z", "m2NEpo7TZRRrLZSi2U", "invalid"]:
        with pytest.raises(InvalidEncoding):
            decode_multibase(bad)


def test_varint_rejects_non_minimal_encoding():
    # 0x1200 padded with a trailing zero group
    with pytest.raises(InvalidEncoding, match="non-minimal"):
        decode_varint(b"\x80\xa4\x00")
    with pytest.raises(InvalidEncoding):
        decode_varint(b"\x80\x00")
    assert decode_varint(b"\x00") == (0, 1)
