"""Question Pool Store — read-modify-write operations on the question pool document.

Invariants:
    - Exactly one read per operation; one write only if something changed
    - Missing document reads as an empty pool ({}); first write creates it
    - Every write carries the revision from this operation's own read:
      a concurrent writer surfaces as RevisionConflictError, never a silent overwrite
    - Validation errors raised by core before the write; nothing partially applied
    - Non-finite numbers in a question (NaN, Infinity) are rejected as
      QuestionValidationError, never written

Design Decisions:
    - Impure shell around core/question_pool.py: load -> pure mutation -> save
    - No retry on conflict (callers may retry with a fresh read)
    - Commit messages follow the conventional-commit prefixes used in the
      content repository history (feat/fix/refactor)
"""

import logging
from typing import Any

from exambank.core.domain_types import Question, QuestionPool, RevisionToken
from exambank.core.errors import (
    DocumentNotFoundError,
    ErrorContext,
    QuestionValidationError,
    StoreTransportError,
)
from exambank.core.question_pool import (
    BulkAddResult,
    add_question,
    partition_bulk,
    remove_question,
    replace_question,
)
from exambank.core.repository_protocols import DocumentClient

logger = logging.getLogger(__name__)


class QuestionPoolStore:
    """Question pool persisted as one JSON document (subjectId -> questions)."""

    def __init__(self, client: DocumentClient, path: str):
        self.client = client
        self.path = path

    async def _load(self) -> tuple[QuestionPool, RevisionToken | None]:
        try:
            document = await self.client.read(self.path)
        except DocumentNotFoundError:
            logger.info(
                "Question document not found, using empty pool",
                extra={"document_path": self.path},
            )
            return {}, None
        if not isinstance(document.content, dict):
            raise StoreTransportError(
                "question document is not a JSON object", "decode",
                ErrorContext(document_path=self.path),
            )
        return document.content, document.revision

    async def _save(
        self, pool: QuestionPool, revision: RevisionToken | None, message: str,
    ) -> None:
        try:
            await self.client.write(self.path, pool, revision, message)
        except ValueError as e:
            # encode_document refuses NaN / Infinity before anything is sent
            raise QuestionValidationError(
                f"Question data is not valid JSON: {e}",
                context=ErrorContext(document_path=self.path),
            )

    async def get_all(self) -> QuestionPool:
        pool, _ = await self._load()
        return pool

    async def list_subjects(self) -> list[str]:
        pool, _ = await self._load()
        return list(pool.keys())

    async def add_question(self, question: Any) -> Question:
        """Append a new question. Raises validation/duplicate errors before writing."""
        pool, revision = await self._load()
        updated = add_question(pool, question)
        await self._save(
            updated, revision, f"feat: add new question with id {question['id']}",
        )
        logger.info(
            "Question added",
            extra={"subject_id": question["subject"], "question_id": question["id"]},
        )
        return question

    async def update_question(
        self, question_id: str, subject: str, new_data: dict,
    ) -> Question:
        """Replace an existing question in place; id is pinned to question_id."""
        pool, revision = await self._load()
        updated, record = replace_question(pool, question_id, subject, new_data)
        await self._save(
            updated, revision, f"fix: update question with id {question_id}",
        )
        logger.info(
            "Question updated",
            extra={"subject_id": subject, "question_id": question_id},
        )
        return record

    async def delete_question(self, question_id: str, subject: str) -> None:
        pool, revision = await self._load()
        updated = remove_question(pool, question_id, subject)
        await self._save(
            updated, revision, f"refactor: delete question with id {question_id}",
        )
        logger.info(
            "Question deleted",
            extra={"subject_id": subject, "question_id": question_id},
        )

    async def bulk_add(self, subject_id: str, questions: Any) -> BulkAddResult:
        """Validate the whole batch, add new ids, skip existing ones.

        A batch with nothing new performs no write.
        """
        pool, revision = await self._load()
        result = partition_bulk(pool, subject_id, questions)
        if not result.changed:
            logger.info(
                f"Bulk add to {subject_id}: nothing new, {len(result.skipped)} skipped",
                extra={"subject_id": subject_id},
            )
            return result

        await self._save(
            result.pool, revision,
            f"feat: bulk add {len(result.added)} questions to {subject_id}",
        )
        logger.info(
            f"Bulk add to {subject_id}: {len(result.added)} added, "
            f"{len(result.skipped)} skipped",
            extra={"subject_id": subject_id},
        )
        return result
