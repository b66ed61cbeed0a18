# lexsign_core/errors.py
from __future__ import annotations


class LexsignError(Exception):
    pass


class KeyGenerationFailure(LexsignError):
    """Entropy or primitive failure while creating a key. Never retried."""


class InvalidEncoding(LexsignError, ValueError):
    """Malformed multibase, did:key or base64 text."""


class UnsupportedKeyType(LexsignError, ValueError):
    """Well-formed encoding carrying an algorithm tag we do not know."""


class NilKey(LexsignError):
    pass


class MissingSignature(LexsignError):
    pass


class SignatureMismatch(LexsignError):
    """Signature is structurally fine but does not match the bytes or key."""


class KeyPairMismatch(LexsignError):
    """The three strings of a KeyPair do not denote the same key."""


class KeyPairIOError(LexsignError):
    pass


class KeyPairParseError(LexsignError, ValueError):
    pass
