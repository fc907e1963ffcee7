"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SubjectId, QuestionId and RevisionToken are plain strings at runtime
    - All question kinds encoded as QuestionType — no raw string matching in logic
    - An exam is always EXAM_SIZE questions long

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders (documents store the value)
"""

from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

SubjectId = NewType("SubjectId", str)
QuestionId = NewType("QuestionId", str)
RevisionToken = NewType("RevisionToken", str)


# ─── Document Shapes ─────────────────────────────────────────────

Question = dict[str, Any]
QuestionPool = dict[str, list[Question]]
ScoreRecord = dict[str, Any]


# ─── Constants ───────────────────────────────────────────────────

EXAM_SIZE = 30
EXAM_DURATION_MINUTES = 30
EXAM_TITLE_TEMPLATE = "Simulasi Ujian {subject_id}"
DEFAULT_LEADERBOARD_SIZE = 10


# ─── Enums ───────────────────────────────────────────────────────

class QuestionType(str, Enum):
    """Supported question kinds — each has its own required fields."""
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    MULTIPLE_CHOICE_COMPLEX = "multiple-choice-complex"
    MULTIPLE_TRUE_FALSE = "multiple-true-false"
