"""Scores — submit a score, list all scores, leaderboard.

Invariants:
    - Unconfigured store -> 503 before any validation (dependency order)
    - Submission fields may come from the JSON body or, failing that, the query string
    - Missing or malformed fields -> 400 via RequestValidationError handler

Design Decisions:
    - Body parsed by hand so query parameters can fill in missing fields;
      pydantic errors re-raised as RequestValidationError for a uniform 400 shape
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from exambank.api.dependencies import get_score_store
from exambank.config import Settings, get_settings
from exambank.schemas.score import (
    LeaderboardEntry,
    LeaderboardResponse,
    ScoreCreatedResponse,
    ScoreListResponse,
    ScoreRecordOut,
    ScoreSubmit,
)
from exambank.services.score_store import ScoreStore, new_score_record

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/db", tags=["scores"])


async def _read_submission(request: Request) -> ScoreSubmit:
    data: dict = dict(request.query_params)
    raw = await request.body()
    if raw:
        try:
            body = json.loads(raw)
        except ValueError:
            raise RequestValidationError([{
                "loc": ("body",), "msg": "Invalid JSON body", "type": "json_invalid",
            }])
        if not isinstance(body, dict):
            raise RequestValidationError([{
                "loc": ("body",), "msg": "Body must be a JSON object",
                "type": "dict_type",
            }])
        data.update(body)
    try:
        return ScoreSubmit.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


@router.post(
    "/score",
    status_code=status.HTTP_201_CREATED,
    response_model=ScoreCreatedResponse,
)
async def submit_score(
    request: Request, store: ScoreStore = Depends(get_score_store),
):
    submission = await _read_submission(request)
    record = new_score_record(
        submission.userName, submission.subjectId,
        submission.score, submission.timeSpent,
    )
    result = await store.append(record)
    return ScoreCreatedResponse(
        message="Score saved.",
        data=ScoreRecordOut(**result.record),
        commit=result.commit_url,
    )


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    store: ScoreStore = Depends(get_score_store),
    settings: Settings = Depends(get_settings),
):
    entries = await store.leaderboard(settings.leaderboard_size)
    return LeaderboardResponse(
        leaderboard=[LeaderboardEntry(**e) for e in entries],
    )


@router.get("/getscore", response_model=ScoreListResponse)
async def get_all_scores(store: ScoreStore = Depends(get_score_store)):
    records = await store.list_all()
    return ScoreListResponse(count=len(records), data=records)
