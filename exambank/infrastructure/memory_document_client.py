"""In-Memory Document Client — DocumentClient with compare-and-swap semantics, no IO.

Invariants:
    - Documents held as encoded bytes; reads always decode a fresh copy
    - Revision = git blob SHA of the stored bytes (1:1 with content)
    - write with a stale revision, or with None over an existing document,
      raises RevisionConflictError and leaves the document untouched
    - No await between the revision compare and the swap: atomic on the event loop

Design Decisions:
    - Used by tests and by DOCUMENT_BACKEND=memory for local development;
      contents are lost on restart (not a durable store)
"""

import logging
from typing import Any

from exambank.core.document_codec import (
    compute_revision, decode_document, encode_document,
)
from exambank.core.domain_types import RevisionToken
from exambank.core.errors import DocumentNotFoundError, RevisionConflictError
from exambank.core.repository_protocols import CommitResult, RemoteDocument

logger = logging.getLogger(__name__)


class InMemoryDocumentClient:
    """DocumentClient backed by a dict of path -> bytes."""

    def __init__(self, documents: dict[str, Any] | None = None):
        self._documents: dict[str, bytes] = {
            path: encode_document(content)
            for path, content in (documents or {}).items()
        }
        self.write_count = 0

    async def read(self, path: str) -> RemoteDocument:
        raw = self._documents.get(path)
        if raw is None:
            raise DocumentNotFoundError(path)
        return RemoteDocument(
            content=decode_document(raw), revision=compute_revision(raw),
        )

    async def write(
        self,
        path: str,
        content: Any,
        revision: RevisionToken | None,
        message: str,
    ) -> CommitResult:
        current = self._documents.get(path)
        current_revision = compute_revision(current) if current is not None else None
        if revision != current_revision:
            logger.warning(
                f"Revision conflict on {path}",
                extra={"document_path": path, "revision": revision},
            )
            raise RevisionConflictError(path)

        raw = encode_document(content)
        self._documents[path] = raw
        self.write_count += 1
        new_revision = compute_revision(raw)
        logger.info(
            f"Committed {path}: {message}",
            extra={"document_path": path, "revision": new_revision},
        )
        return CommitResult(revision=new_revision)

    def snapshot(self, path: str) -> Any:
        """Decoded content of path (None if absent) — for tests and debugging."""
        raw = self._documents.get(path)
        return decode_document(raw) if raw is not None else None

    async def aclose(self) -> None:
        return None
