"""
Cache key derivation.

Keys are the SHA-256 hex digest of a length-prefixed encoding of the
request attributes, so ("ab", "c") and ("a", "bc") never share a key.
Missing values (None or "") encode as a placeholder that no
length-prefixed field can produce.
"""

import hashlib
from typing import Optional

MISSING_FIELD = b"~"


def _encode_field(value: Optional[str]) -> bytes:
    if not value:
        return MISSING_FIELD
    raw = value.encode("utf-8")
    return str(len(raw)).encode("ascii") + b":" + raw


def generate_key(
    request_kind: Optional[str],
    query_text: Optional[str],
    user_identifier: Optional[str],
) -> str:
    """
    Derive a stable cache key from the logical identity of a request.

    Args:
        request_kind: Request type (e.g. "chat", "sql")
        query_text: Query or prompt text
        user_identifier: User token or identifier

    Returns:
        64-character hex digest, identical across processes for equal inputs
    """
    digest = hashlib.sha256()
    for field in (request_kind, query_text, user_identifier):
        digest.update(_encode_field(field))
        digest.update(b"|")
    return digest.hexdigest()
