"""Question Pool Mutations — pure add/replace/remove/bulk operations on a pool mapping.

Invariants:
    - Input pool is never mutated: every function returns a new mapping
      (only the touched subject list is copied, others are shared)
    - Subject order and question order are preserved
    - Validation runs before any change; nothing is partially applied
    - A subject key survives removal of its last question (empty list)

Design Decisions:
    - Domain errors raised here, not in the store: the store only does IO around these
    - BulkAddResult is a dataclass so routes can report counts and id lists
      without recomputing the partition
"""

from dataclasses import dataclass, field
from typing import Any

from exambank.core.domain_types import Question, QuestionPool
from exambank.core.errors import (
    DuplicateQuestionError,
    ErrorContext,
    QuestionValidationError,
    ResourceNotFoundError,
)
from exambank.core.validate_question import check_question


@dataclass
class BulkAddResult:
    """Outcome of partitioning a batch against the existing pool."""
    pool: QuestionPool
    added: list[Question] = field(default_factory=list)
    skipped: list[Question] = field(default_factory=list)

    @property
    def added_ids(self) -> list[str]:
        return [q["id"] for q in self.added]

    @property
    def skipped_ids(self) -> list[str]:
        return [q["id"] for q in self.skipped]

    @property
    def changed(self) -> bool:
        return bool(self.added)


def _with_subject(pool: QuestionPool, subject: str, questions: list[Question]) -> QuestionPool:
    """Copy of pool with subject's list replaced (appended if new)."""
    updated = dict(pool)
    updated[subject] = questions
    return updated


def _find_index(questions: list[Question], question_id: str) -> int | None:
    for i, q in enumerate(questions):
        if q.get("id") == question_id:
            return i
    return None


def _require_subject(pool: QuestionPool, subject: str) -> list[Question]:
    if subject not in pool:
        raise ResourceNotFoundError(
            "Subject", subject, ErrorContext(subject_id=subject),
        )
    return pool[subject]


def add_question(pool: QuestionPool, question: Any) -> QuestionPool:
    """Append one validated question, creating its subject if absent."""
    problem = check_question(question)
    if problem:
        qid = question.get("id") if isinstance(question, dict) else None
        raise QuestionValidationError(
            f"Incomplete question data: {problem}",
            invalid_record=question,
            context=ErrorContext(question_id=qid),
        )

    subject = question["subject"]
    existing = pool.get(subject, [])
    if _find_index(existing, question["id"]) is not None:
        raise DuplicateQuestionError(question["id"], subject)
    return _with_subject(pool, subject, [*existing, question])


def replace_question(
    pool: QuestionPool, question_id: str, subject: str, new_data: dict,
) -> tuple[QuestionPool, Question]:
    """Replace a question in place, pinning its id. Returns (pool, record)."""
    questions = _require_subject(pool, subject)
    index = _find_index(questions, question_id)
    if index is None:
        raise ResourceNotFoundError(
            "Question", question_id,
            ErrorContext(subject_id=subject, question_id=question_id),
        )

    record = {**new_data, "id": question_id}
    record.setdefault("subject", subject)
    if record["subject"] != subject:
        raise QuestionValidationError(
            f"Question '{question_id}' belongs to subject '{subject}', "
            f"body says '{record['subject']}'",
            invalid_record=new_data,
            context=ErrorContext(subject_id=subject, question_id=question_id),
        )
    problem = check_question(record)
    if problem:
        raise QuestionValidationError(
            f"Invalid question data: {problem}",
            invalid_record=new_data,
            context=ErrorContext(subject_id=subject, question_id=question_id),
        )

    updated = list(questions)
    updated[index] = record
    return _with_subject(pool, subject, updated), record


def remove_question(pool: QuestionPool, question_id: str, subject: str) -> QuestionPool:
    """Drop every record with question_id from subject."""
    questions = _require_subject(pool, subject)
    kept = [q for q in questions if q.get("id") != question_id]
    if len(kept) == len(questions):
        raise ResourceNotFoundError(
            "Question", question_id,
            ErrorContext(subject_id=subject, question_id=question_id),
        )
    return _with_subject(pool, subject, kept)


def validate_batch(subject_id: str, questions: Any) -> None:
    """Reject the whole batch on the first invalid or mismatched element."""
    if not isinstance(questions, list) or not questions:
        raise QuestionValidationError(
            "Request body must be a non-empty JSON array of questions",
            context=ErrorContext(subject_id=subject_id),
        )
    for q in questions:
        problem = check_question(q)
        if problem is None and q["subject"] != subject_id:
            problem = f"'subject' must be '{subject_id}'"
        if problem:
            qid = q.get("id") if isinstance(q, dict) else None
            raise QuestionValidationError(
                f"Invalid question structure or subject mismatch for "
                f"question ID '{qid or 'no id'}': {problem}",
                invalid_record=q,
                context=ErrorContext(subject_id=subject_id, question_id=qid),
            )


def partition_bulk(
    pool: QuestionPool, subject_id: str, questions: list[Question],
) -> BulkAddResult:
    """Validate, then split a batch into accepted and skipped (duplicate) questions."""
    validate_batch(subject_id, questions)

    existing = pool.get(subject_id, [])
    seen = {q.get("id") for q in existing}
    result = BulkAddResult(pool=pool)
    for q in questions:
        if q["id"] in seen:
            result.skipped.append(q)
        else:
            result.added.append(q)
            seen.add(q["id"])

    if result.added:
        result.pool = _with_subject(pool, subject_id, [*existing, *result.added])
    return result
