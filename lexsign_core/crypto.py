"""
lexsign_core.crypto
-------------------
Key codec for lexsign.

- KeyType: tagged variant per curve (P-256 default, secp256k1 also supported)
- PrivateKey / PublicKey: immutable capability objects wrapping `cryptography` EC keys
- hash_and_sign / hash_and_verify: SHA-256 + ECDSA, 64-byte compact r||s, low-S only
- Text encodings: private multibase, public multibase, did:key

Encodings are "z" + base58btc(varint(multicodec) || key bytes), so the algorithm tag
travels with the key and decoders can reject curves they do not support.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Type

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from .constants import (
    COMPACT_SIG_LEN, COMPRESSED_POINT_LEN, DID_KEY_PREFIX, K256_ORDER, K256_PRIV_CODEC,
    K256_PUB_CODEC, P256_ORDER, P256_PRIV_CODEC, P256_PUB_CODEC, SCALAR_LEN,
)
from .errors import InvalidEncoding, KeyGenerationFailure, SignatureMismatch, UnsupportedKeyType
from .logger import get_logger
from .multibase import decode_multibase, encode_multibase, unwrap_multicodec, wrap_multicodec

log = get_logger("Lexsign.Crypto")


@dataclass(frozen=True)
class KeyType:
    name: str
    curve: Type[ec.EllipticCurve]
    priv_codec: int
    pub_codec: int
    order: int


P256 = KeyType("p256", ec.SECP256R1, P256_PRIV_CODEC, P256_PUB_CODEC, P256_ORDER)
K256 = KeyType("k256", ec.SECP256K1, K256_PRIV_CODEC, K256_PUB_CODEC, K256_ORDER)

KEY_TYPES: Dict[str, KeyType] = {kt.name: kt for kt in (P256, K256)}
_BY_PRIV_CODEC: Dict[int, KeyType] = {kt.priv_codec: kt for kt in KEY_TYPES.values()}
_BY_PUB_CODEC: Dict[int, KeyType] = {kt.pub_codec: kt for kt in KEY_TYPES.values()}


def key_type_by_name(name: str) -> KeyType:
    kt = KEY_TYPES.get(name.lower())
    if kt is None:
        raise UnsupportedKeyType(f"Unknown key type: {name}")
    return kt


# --------- Key objects ----------
class PublicKey:
    """Verification capability for one curve point. Safe to share between threads."""

    __slots__ = ("key_type", "_key")

    def __init__(self, key_type: KeyType, key: ec.EllipticCurvePublicKey):
        self.key_type = key_type
        self._key = key

    def compressed_bytes(self) -> bytes:
        return self._key.public_bytes(serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint)

    def multibase(self) -> str:
        return encode_public_multibase(self)

    def did_key(self) -> str:
        return encode_did_key(self)

    def hash_and_verify(self, data: bytes, sig: bytes) -> None:
        """Raise SignatureMismatch unless `sig` is a low-S compact signature over sha256(data)."""
        if len(sig) != COMPACT_SIG_LEN:
            raise SignatureMismatch(f"signature must be {COMPACT_SIG_LEN} bytes, got {len(sig)}")
        r = int.from_bytes(sig[:SCALAR_LEN], "big")
        s = int.from_bytes(sig[SCALAR_LEN:], "big")
        n = self.key_type.order
        if not (0 < r < n and 0 < s <= n // 2):
            raise SignatureMismatch("signature out of range or not low-S")
        try:
            self._key.verify(encode_dss_signature(r, s), data, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature as exc:
            raise SignatureMismatch("signature does not match") from exc

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.key_type == other.key_type and self.compressed_bytes() == other.compressed_bytes()

    def __hash__(self):
        return hash((self.key_type.name, self.compressed_bytes()))

    def __repr__(self):
        return f"PublicKey({self.did_key()})"


class PrivateKey:
    __slots__ = ("key_type", "_key")

    def __init__(self, key_type: KeyType, key: ec.EllipticCurvePrivateKey):
        self.key_type = key_type
        self._key = key

    def public_key(self) -> PublicKey:
        return PublicKey(self.key_type, self._key.public_key())

    def raw_bytes(self) -> bytes:
        return self._key.private_numbers().private_value.to_bytes(SCALAR_LEN, "big")

    def multibase(self) -> str:
        return encode_private_multibase(self)

    def hash_and_sign(self, data: bytes) -> bytes:
        der = self._key.sign(data, ec.ECDSA(hashes.SHA256()))
        r, s = decode_dss_signature(der)
        n = self.key_type.order
        if s > n // 2:
            s = n - s
        return r.to_bytes(SCALAR_LEN, "big") + s.to_bytes(SCALAR_LEN, "big")

    def __repr__(self):
        # never print the scalar
        return f"PrivateKey({self.key_type.name})"


# --------- Generation ----------
def generate(key_type: KeyType = P256) -> PrivateKey:
    """Fresh key from the OS CSPRNG. Failures raise KeyGenerationFailure and are never retried."""
    try:
        sk = ec.generate_private_key(key_type.curve())
    except Exception as exc:
        raise KeyGenerationFailure(f"{key_type.name} key generation failed") from exc
    priv = PrivateKey(key_type, sk)
    log.debug(f"[KEYGEN] {key_type.name} key {priv.public_key().did_key()}")
    return priv


# --------- Private multibase ----------
def encode_private_multibase(priv: PrivateKey) -> str:
    return encode_multibase(wrap_multicodec(priv.key_type.priv_codec, priv.raw_bytes()))


def decode_private_multibase(s: str) -> PrivateKey:
    code, raw = unwrap_multicodec(decode_multibase(s))
    kt = _BY_PRIV_CODEC.get(code)
    if kt is None:
        raise UnsupportedKeyType(f"unknown private key multicodec 0x{code:x}")
    if len(raw) != SCALAR_LEN:
        raise InvalidEncoding(f"{kt.name} private key must be {SCALAR_LEN} bytes, got {len(raw)}")
    d = int.from_bytes(raw, "big")
    if not 0 < d < kt.order:
        raise InvalidEncoding(f"{kt.name} private scalar out of range")
    try:
        sk = ec.derive_private_key(d, kt.curve())
    except ValueError as exc:
        raise InvalidEncoding(f"invalid {kt.name} private key") from exc
    return PrivateKey(kt, sk)


# --------- Public multibase / did:key ----------
def encode_public_multibase(pub: PublicKey) -> str:
    return encode_multibase(wrap_multicodec(pub.key_type.pub_codec, pub.compressed_bytes()))


def decode_public_multibase(s: str) -> PublicKey:
    code, raw = unwrap_multicodec(decode_multibase(s))
    kt = _BY_PUB_CODEC.get(code)
    if kt is None:
        raise UnsupportedKeyType(f"unknown public key multicodec 0x{code:x}")
    if len(raw) != COMPRESSED_POINT_LEN:
        raise InvalidEncoding(f"{kt.name} public key must be {COMPRESSED_POINT_LEN} compressed bytes, got {len(raw)}")
    try:
        pk = ec.EllipticCurvePublicKey.from_encoded_point(kt.curve(), raw)
    except ValueError as exc:
        raise InvalidEncoding(f"invalid {kt.name} curve point") from exc
    return PublicKey(kt, pk)


def encode_did_key(pub: PublicKey) -> str:
    return DID_KEY_PREFIX + encode_public_multibase(pub)


def decode_did_key(s: str) -> PublicKey:
    if not isinstance(s, str) or not s.startswith(DID_KEY_PREFIX):
        raise InvalidEncoding("not a did:key identifier")
    return decode_public_multibase(s[len(DID_KEY_PREFIX):])


def parse_public_key(s: str) -> PublicKey:
    """Accept either a did:key or a bare public multibase string."""
    if isinstance(s, str) and s.startswith(DID_KEY_PREFIX):
        return decode_did_key(s)
    return decode_public_multibase(s)
