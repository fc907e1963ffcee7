"""Question Schemas — response envelopes for question, pool and exam endpoints.

Invariants:
    - Question bodies are plain dicts: extra fields round-trip untouched
    - BulkAddResponse mirrors BulkAddResult (counts + id lists)

Design Decisions:
    - No Question model on input: type-specific checks live in
      core/validate_question.py so one rule set serves add, update and bulk add
"""

from typing import Any

from pydantic import BaseModel, Field


class BulkAddSummary(BaseModel):
    added: int = Field(ge=0)
    skipped: int = Field(ge=0)


class BulkAddResponse(BaseModel):
    message: str
    summary: BulkAddSummary
    addedQuestions: list[str] = []
    skippedQuestions: list[str] = []


class DeleteQuestionResponse(BaseModel):
    message: str


class SubjectListResponse(BaseModel):
    subjects: list[str]


class ExamResponse(BaseModel):
    """Generated exam — questions already shuffled and remapped."""
    id: str
    title: str
    duration: int
    totalQuestions: int
    questions: list[dict[str, Any]]
