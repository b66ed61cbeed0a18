"""
lexsign Core Package
====================
Key management and record signing shared by lexsign tools.

Provides:
- P-256 / secp256k1 key codec (multibase and did:key encodings)
- KeyPair at-rest representation and keypair.json persistence
- Deterministic record canonicalization, signing and verification
"""

from .crypto import (
    K256, P256, KeyType, PrivateKey, PublicKey, decode_did_key, decode_private_multibase,
    decode_public_multibase, encode_did_key, encode_private_multibase, encode_public_multibase,
    generate, parse_public_key,
)
from .envelope import canonicalize, is_signed_by, sign_record, verify_record
from .errors import (
    InvalidEncoding, KeyGenerationFailure, KeyPairIOError, KeyPairMismatch, KeyPairParseError,
    LexsignError, MissingSignature, NilKey, SignatureMismatch, UnsupportedKeyType,
)
from .keys import KeyPair, build, generate_keypair, load_and_verify
from .record import LexiconRecord
from .storage import load_keypair, save_keypair

__all__ = [
    "K256", "P256", "KeyType", "PrivateKey", "PublicKey",
    "generate", "encode_private_multibase", "decode_private_multibase",
    "encode_public_multibase", "decode_public_multibase", "encode_did_key", "decode_did_key",
    "parse_public_key",
    "canonicalize", "sign_record", "verify_record", "is_signed_by",
    "KeyPair", "build", "generate_keypair", "load_and_verify",
    "LexiconRecord", "save_keypair", "load_keypair",
    "LexsignError", "KeyGenerationFailure", "InvalidEncoding", "UnsupportedKeyType", "NilKey",
    "MissingSignature", "SignatureMismatch", "KeyPairMismatch", "KeyPairIOError", "KeyPairParseError",
]
