# lexsign_core/keys.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import json

from .config import load_settings
from .crypto import (
    KeyType, PrivateKey, PublicKey, decode_did_key, decode_private_multibase,
    decode_public_multibase, generate, key_type_by_name,
)
from .errors import KeyPairMismatch, KeyPairParseError
from .logger import get_logger

log = get_logger("Lexsign.Keys")

_FIELDS = ("privateKey", "publicKey", "didKey")


@dataclass(frozen=True)
class KeyPair:
    """
    At-rest representation of a signing key: the private multibase string,
    the public multibase string and the did:key of the same public key.

    All three must denote the same key material; see load_and_verify().
    """
    private_key: str
    public_key: str
    did_key: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "privateKey": self.private_key,
            "publicKey": self.public_key,
            "didKey": self.did_key,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyPair":
        if not isinstance(data, dict):
            raise KeyPairParseError("key pair must be a JSON object")
        for name in _FIELDS:
            if not isinstance(data.get(name), str):
                raise KeyPairParseError(f"key pair field '{name}' missing or not a string")
        return cls(
            private_key=data["privateKey"],
            public_key=data["publicKey"],
            did_key=data["didKey"],
        )

    @classmethod
    def from_json(cls, text: str) -> "KeyPair":
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise KeyPairParseError(f"invalid key pair JSON: {exc}") from exc
        return cls.from_dict(data)

    def __repr__(self):
        return f"KeyPair(did_key={self.did_key!r})"


def build(priv: PrivateKey, pub: PublicKey) -> KeyPair:
    return KeyPair(
        private_key=priv.multibase(),
        public_key=pub.multibase(),
        did_key=pub.did_key(),
    )


def generate_keypair(key_type: Optional[KeyType] = None) -> KeyPair:
    if key_type is None:
        key_type = key_type_by_name(load_settings().key_type)
    priv = generate(key_type)
    kp = build(priv, priv.public_key())
    log.info(f"[KEYGEN] {key_type.name} key pair {kp.did_key}")
    return kp


def load_and_verify(kp: KeyPair) -> Tuple[PrivateKey, PublicKey]:
    """
    Decode all three strings of `kp` and check they are the canonical
    encodings of one key.

    Decode failures propagate as InvalidEncoding / UnsupportedKeyType;
    disagreement raises KeyPairMismatch.
    """
    priv = decode_private_multibase(kp.private_key)
    pub = priv.public_key()
    decode_public_multibase(kp.public_key)
    decode_did_key(kp.did_key)

    if priv.multibase() != kp.private_key:
        raise KeyPairMismatch("private key is not in canonical form")
    if pub.multibase() != kp.public_key:
        raise KeyPairMismatch("public key does not match private key")
    if pub.did_key() != kp.did_key:
        raise KeyPairMismatch("did:key does not match private key")
    return priv, pub
