"""Exam Generator — fixed-size randomized exam from a subject's question pool.

Invariants:
    - Always EXAM_SIZE questions; small pools are repeated, large pools truncated
    - Source pool never mutated: every output question is a fresh dict
    - Shuffling moves answer content, never changes which content is correct:
      mapping returned indices back through the option permutation gives the
      original correct set
    - Subject absent or empty -> ResourceNotFoundError

Design Decisions:
    - rng injected (random.Random) so tests can seed; default is a fresh instance
    - random.Random.shuffle is an in-place Fisher–Yates: uniform permutation
    - One shuffle of the pool, concatenated until long enough: repeats keep the
      same relative order instead of re-shuffling each copy
"""

import random

from exambank.core.domain_types import (
    EXAM_DURATION_MINUTES,
    EXAM_SIZE,
    EXAM_TITLE_TEMPLATE,
    Question,
    QuestionPool,
    QuestionType,
)
from exambank.core.errors import ErrorContext, ResourceNotFoundError


def _shuffled(items: list, rng: random.Random) -> list:
    copy = list(items)
    rng.shuffle(copy)
    return copy


def _shuffle_options(q: Question, rng: random.Random) -> tuple[list, dict[int, int]]:
    """Shuffle options. Returns (new_options, old_index -> new_index)."""
    order = _shuffled(list(range(len(q["options"]))), rng)
    new_options = [q["options"][old] for old in order]
    new_index = {old: new for new, old in enumerate(order)}
    return new_options, new_index


def shuffle_question(q: Question, rng: random.Random) -> Question:
    """Copy of q with its internal order shuffled and answer indices remapped."""
    qtype = q.get("type")

    if qtype == QuestionType.MULTIPLE_CHOICE.value and isinstance(q.get("options"), list):
        options, new_index = _shuffle_options(q, rng)
        return {
            **q, "options": options,
            "correctAnswer": new_index.get(q.get("correctAnswer"), -1),
        }

    if qtype == QuestionType.MULTIPLE_CHOICE_COMPLEX.value and isinstance(q.get("options"), list):
        options, new_index = _shuffle_options(q, rng)
        answers = sorted(
            new_index[a] for a in q.get("correctAnswers", []) if a in new_index
        )
        return {**q, "options": options, "correctAnswers": answers}

    if qtype == QuestionType.MULTIPLE_TRUE_FALSE.value and isinstance(q.get("statements"), list):
        return {**q, "statements": _shuffled(q["statements"], rng)}

    # true-false and unknown kinds have no internal order
    return dict(q)


def select_questions(
    questions: list[Question], size: int, rng: random.Random,
) -> list[Question]:
    """Shuffle once, repeat the shuffled sequence until size reached, truncate."""
    shuffled = _shuffled(questions, rng)
    selected: list[Question] = []
    while len(selected) < size:
        selected.extend(shuffled)
    return selected[:size]


def generate_exam(
    subject_id: str,
    pool: QuestionPool,
    rng: random.Random | None = None,
) -> dict:
    """Build an exam for subject_id. Pure apart from the injected rng."""
    questions = pool.get(subject_id)
    if not questions:
        raise ResourceNotFoundError(
            "Subject", subject_id, ErrorContext(subject_id=subject_id),
        )

    rng = rng or random.Random()  # nosec B311
    selected = select_questions(questions, EXAM_SIZE, rng)
    return {
        "id": subject_id,
        "title": EXAM_TITLE_TEMPLATE.format(subject_id=subject_id),
        "duration": EXAM_DURATION_MINUTES,
        "totalQuestions": EXAM_SIZE,
        "questions": [shuffle_question(q, rng) for q in selected],
    }
