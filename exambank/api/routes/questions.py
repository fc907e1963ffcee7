"""Question Management — add, update, delete and bulk add questions in the pool document.

Invariants:
    - Every mutation is one read + at most one write through QuestionPoolStore
    - Update and delete require the owning subject (body / query) — 400 otherwise
    - Bulk add answers 207 with an added/skipped summary, 200 when nothing new

Design Decisions:
    - Bodies accepted as raw JSON (dict / list): structural rules live in core so
      a rejection can name the offending record
    - Domain errors bubble to the global ExamBankError handler (404/409/503)
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from exambank.api.dependencies import get_question_store
from exambank.core.errors import ErrorContext, QuestionValidationError
from exambank.schemas.question import (
    BulkAddResponse,
    BulkAddSummary,
    DeleteQuestionResponse,
)
from exambank.services.question_pool_store import QuestionPoolStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/db", tags=["questions"])


@router.post("/question", status_code=status.HTTP_201_CREATED)
async def create_question(
    question: dict[str, Any] = Body(...),
    store: QuestionPoolStore = Depends(get_question_store),
):
    """Add one question. 400 incomplete fields, 409 duplicate id."""
    return await store.add_question(question)


@router.put("/question/{question_id}")
async def update_question(
    question_id: str,
    body: dict[str, Any] = Body(...),
    store: QuestionPoolStore = Depends(get_question_store),
):
    """Replace a question; the path id always wins over any id in the body."""
    subject = body.get("subject")
    if not subject or not isinstance(subject, str):
        raise QuestionValidationError(
            "Property 'subject' is required in the request body",
            context=ErrorContext(question_id=question_id),
        )
    return await store.update_question(question_id, subject, body)


@router.delete("/question/{question_id}", response_model=DeleteQuestionResponse)
async def delete_question(
    question_id: str,
    subject: str = Query(..., min_length=1),
    store: QuestionPoolStore = Depends(get_question_store),
):
    await store.delete_question(question_id, subject)
    return DeleteQuestionResponse(
        message=f"Question '{question_id}' deleted from subject '{subject}'.",
    )


@router.post(
    "/questions/bulk-add",
    status_code=status.HTTP_207_MULTI_STATUS,
    response_model=BulkAddResponse,
)
async def bulk_add_questions(
    subject_id: str = Query(..., alias="subjectId", min_length=1),
    questions: list[Any] = Body(...),
    store: QuestionPoolStore = Depends(get_question_store),
):
    """Add many questions to one subject; duplicates skipped, invalid batch rejected."""
    result = await store.bulk_add(subject_id, questions)
    summary = BulkAddSummary(added=len(result.added), skipped=len(result.skipped))

    if not result.changed:
        response = BulkAddResponse(
            message=(
                "No new questions added. All submitted questions already exist."
            ),
            summary=summary,
            skippedQuestions=result.skipped_ids,
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK, content=response.model_dump(),
        )

    return BulkAddResponse(
        message="Bulk add completed.",
        summary=summary,
        addedQuestions=result.added_ids,
        skippedQuestions=result.skipped_ids,
    )
