"""Exam & Pool Reads — subject list, generated exams and the raw pool document.

Invariants:
    - Read-only: never writes the pool document
    - Exam generated from a pool fetched in the same request
    - Unknown or empty subject -> 404 (ResourceNotFoundError from core)
"""

import logging

from fastapi import APIRouter, Depends, Query

from exambank.api.dependencies import get_question_store
from exambank.core.exam_generator import generate_exam
from exambank.schemas.question import ExamResponse, SubjectListResponse
from exambank.services.question_pool_store import QuestionPoolStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/db", tags=["exam"])


@router.get("/soal", response_model=ExamResponse | SubjectListResponse)
async def get_exam_or_subjects(
    subject_id: str | None = Query(None, alias="subjectId"),
    store: QuestionPoolStore = Depends(get_question_store),
):
    """Without subjectId: list subjects. With subjectId: a fresh randomized exam."""
    if not subject_id:
        return SubjectListResponse(subjects=await store.list_subjects())
    pool = await store.get_all()
    return ExamResponse(**generate_exam(subject_id, pool))


@router.get("/dbsoal")
async def get_raw_pool(store: QuestionPoolStore = Depends(get_question_store)):
    """Full pool mapping exactly as stored."""
    return await store.get_all()
