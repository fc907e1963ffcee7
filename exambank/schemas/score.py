"""Score Schemas — score submission validation and leaderboard responses.

Invariants:
    - userName and subjectId non-empty after stripping
    - score is a finite number (NaN / Infinity rejected); timeSpent is a
      non-negative whole number of seconds

Design Decisions:
    - camelCase field names kept: they are the stored record keys and the
      public request contract
"""

from typing import Any

from pydantic import BaseModel, Field, FiniteFloat, field_validator


class ScoreSubmit(BaseModel):
    """Score submission — body or query parameters."""
    userName: str = Field(min_length=1, max_length=100)
    subjectId: str = Field(min_length=1, max_length=200)
    score: int | FiniteFloat
    timeSpent: int = Field(ge=0)

    @field_validator("userName", "subjectId")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class ScoreRecordOut(BaseModel):
    id: int
    userName: str
    subjectId: str
    score: int | float
    timeSpent: int
    createdAt: str


class ScoreCreatedResponse(BaseModel):
    status: bool = True
    message: str
    data: ScoreRecordOut
    commit: str | None = None


class LeaderboardEntry(BaseModel):
    rank: int = Field(ge=1)
    userName: str
    score: int | float
    timeSpent: int


class LeaderboardResponse(BaseModel):
    status: bool = True
    leaderboard: list[LeaderboardEntry]


class ScoreListResponse(BaseModel):
    status: bool = True
    count: int
    data: list[dict[str, Any]]
