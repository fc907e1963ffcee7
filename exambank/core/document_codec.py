"""Document Codec — JSON (de)serialisation and revision tokens for stored documents.

Invariants:
    - encode_document is deterministic: same content -> same bytes -> same revision
    - Key order is preserved (no sort_keys), non-ASCII text kept as UTF-8
    - Only strict JSON is written: NaN and Infinity raise ValueError
    - compute_revision equals the git blob SHA-1, so in-memory and GitHub
      revisions agree for identical bytes
"""

import hashlib
import json
from typing import Any

from exambank.core.domain_types import RevisionToken


def encode_document(content: Any) -> bytes:
    """Raises ValueError when content holds a non-finite float."""
    return json.dumps(
        content, indent=2, ensure_ascii=False, allow_nan=False,
    ).encode("utf-8")


def decode_document(raw: bytes) -> Any:
    """Raises ValueError (json.JSONDecodeError / UnicodeDecodeError) on bad input."""
    return json.loads(raw.decode("utf-8"))


def compute_revision(raw: bytes) -> RevisionToken:
    header = f"blob {len(raw)}\0".encode("ascii")
    return RevisionToken(hashlib.sha1(header + raw).hexdigest())  # nosec B324
