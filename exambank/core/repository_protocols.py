"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Remote documents accessed only through DocumentClient
    - write() is compare-and-swap: revision must match the last read,
      None only when creating a document that does not exist yet

Design Decisions:
    - Protocol over ABC: structural subtyping, GitHub and in-memory clients
      share no base class
    - Async in Protocol: implementations do IO; the pure functions that consume
      the content are never async themselves
"""

from dataclasses import dataclass
from typing import Any, Protocol

from exambank.core.domain_types import RevisionToken


@dataclass(frozen=True)
class RemoteDocument:
    """Decoded JSON payload plus the revision it was read at."""
    content: Any
    revision: RevisionToken


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a successful write."""
    revision: RevisionToken
    commit_url: str | None = None


class DocumentClient(Protocol):
    """Contract for one remote JSON document store — implemented by shell.

    read raises DocumentNotFoundError / StoreTransportError.
    write raises RevisionConflictError / StoreTransportError.
    """
    async def read(self, path: str) -> RemoteDocument: ...
    async def write(
        self,
        path: str,
        content: Any,
        revision: RevisionToken | None,
        message: str,
    ) -> CommitResult: ...
