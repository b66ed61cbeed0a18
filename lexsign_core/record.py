"""
lexsign_core.record
-------------------
Defines LexiconRecord, a small lexicon-style record (`$type`, text, createdAt,
author) carrying an optional base64 signature.

It is the reference record type for the envelope; any dict or dataclass with a
`signature` field can be signed the same way.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import json

from .crypto import PrivateKey, PublicKey
from .envelope import canonicalize, sign_record, verify_record
from .utils import now_ts

DEFAULT_RECORD_TYPE = "app.bsky.feed.post"


@dataclass
class LexiconRecord:
    type: str = DEFAULT_RECORD_TYPE
    text: str = ""
    created_at: str = field(default_factory=now_ts)
    author: str = ""
    signature: str = ""   # unpadded base64, empty until signed

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "$type": self.type,
            "text": self.text,
            "createdAt": self.created_at,
            "author": self.author,
        }
        if self.signature:
            d["signature"] = self.signature
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def unsigned_bytes(self) -> bytes:
        return canonicalize(self)

    def sign(self, private_key: Optional[PrivateKey]) -> "LexiconRecord":
        return sign_record(self, private_key)

    def verify_signature(self, public_key: Optional[PublicKey]) -> None:
        verify_record(self, public_key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LexiconRecord":
        """Inverse of to_dict(); used when a signed record arrives as JSON."""
        return cls(
            type=data.get("$type", DEFAULT_RECORD_TYPE),
            text=data.get("text", ""),
            created_at=data.get("createdAt", ""),
            author=data.get("author", ""),
            signature=data.get("signature", ""),
        )

    @classmethod
    def from_json(cls, text: str) -> "LexiconRecord":
        return cls.from_dict(json.loads(text))
