"""Score Store — append-only score list document and leaderboard.

Invariants:
    - Records are only appended; no update or delete
    - Missing document reads as []; first append creates it
    - append() does one read and one write with the read revision;
      RevisionConflictError / StoreTransportError propagate, no retry

Design Decisions:
    - Leaderboard ranking delegated to core/leaderboard.py (pure)
    - new_score_record stamps id (epoch ms) and createdAt on the server side
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone

from exambank.core.domain_types import DEFAULT_LEADERBOARD_SIZE, RevisionToken, ScoreRecord
from exambank.core.errors import DocumentNotFoundError, ErrorContext, StoreTransportError
from exambank.core.leaderboard import build_leaderboard
from exambank.core.repository_protocols import DocumentClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppendResult:
    record: ScoreRecord
    commit_url: str | None


def new_score_record(
    user_name: str, subject_id: str, score: float, time_spent: int,
) -> ScoreRecord:
    """Build a score record stamped with the current time."""
    return {
        "id": time.time_ns() // 1_000_000,
        "userName": user_name,
        "subjectId": subject_id,
        "score": score,
        "timeSpent": time_spent,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }


class ScoreStore:
    """Score records persisted as one JSON array document."""

    def __init__(self, client: DocumentClient, path: str):
        self.client = client
        self.path = path

    async def _load(self) -> tuple[list[ScoreRecord], RevisionToken | None]:
        try:
            document = await self.client.read(self.path)
        except DocumentNotFoundError:
            logger.info(
                "Score document not found, using empty list",
                extra={"document_path": self.path},
            )
            return [], None
        if not isinstance(document.content, list):
            raise StoreTransportError(
                "score document is not a JSON array", "decode",
                ErrorContext(document_path=self.path),
            )
        return document.content, document.revision

    async def list_all(self) -> list[ScoreRecord]:
        records, _ = await self._load()
        return records

    async def append(self, record: ScoreRecord) -> AppendResult:
        records, revision = await self._load()
        commit = await self.client.write(
            self.path, [*records, record], revision,
            f"feat: add score for {record['userName']}",
        )
        logger.info(
            f"Score stored for {record['userName']}",
            extra={"subject_id": record.get("subjectId")},
        )
        return AppendResult(record=record, commit_url=commit.commit_url)

    async def leaderboard(self, top_n: int = DEFAULT_LEADERBOARD_SIZE) -> list[dict]:
        records, _ = await self._load()
        return build_leaderboard(records, top_n)
