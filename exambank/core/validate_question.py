"""Question Validation — structural checks per question type before any write.

Invariants:
    - Pure: no IO, no mutation of the checked record
    - Returns None when valid, or a human-readable reason string
    - bool is never accepted where an integer index is required
    - Indices must point inside options; correctAnswers holds distinct indices

Design Decisions:
    - Reason string over raising: callers (add, update, bulk add) decide how to
      phrase the rejection and which record to name
    - Unknown extra fields are ignored (explanations, images stay untouched)
"""

from typing import Any

from exambank.core.domain_types import QuestionType

_BASE_FIELDS = ("id", "subject", "type", "question")


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_options(q: dict) -> str | None:
    options = q.get("options")
    if not isinstance(options, list) or not options:
        return "'options' must be a non-empty list"
    if not all(isinstance(o, str) for o in options):
        return "'options' must contain only strings"
    return None


def _check_multiple_choice(q: dict) -> str | None:
    problem = _check_options(q)
    if problem:
        return problem
    answer = q.get("correctAnswer")
    if not _is_index(answer):
        return "'correctAnswer' must be an integer index into 'options'"
    if not 0 <= answer < len(q["options"]):
        return f"'correctAnswer' {answer} is out of range"
    return None


def _check_true_false(q: dict) -> str | None:
    if not isinstance(q.get("correctAnswer"), bool):
        return "'correctAnswer' must be a boolean"
    return None


def _check_multiple_choice_complex(q: dict) -> str | None:
    problem = _check_options(q)
    if problem:
        return problem
    answers = q.get("correctAnswers")
    if not isinstance(answers, list):
        return "'correctAnswers' must be a list of indices into 'options'"
    if not all(_is_index(a) for a in answers):
        return "'correctAnswers' must contain only integer indices"
    if len(set(answers)) != len(answers):
        return "'correctAnswers' contains duplicate indices"
    size = len(q["options"])
    out_of_range = [a for a in answers if not 0 <= a < size]
    if out_of_range:
        return f"'correctAnswers' {out_of_range} out of range"
    return None


def _check_multiple_true_false(q: dict) -> str | None:
    if not isinstance(q.get("statements"), list):
        return "'statements' must be a list"
    return None


_TYPE_CHECKS = {
    QuestionType.MULTIPLE_CHOICE: _check_multiple_choice,
    QuestionType.TRUE_FALSE: _check_true_false,
    QuestionType.MULTIPLE_CHOICE_COMPLEX: _check_multiple_choice_complex,
    QuestionType.MULTIPLE_TRUE_FALSE: _check_multiple_true_false,
}


def find_missing_fields(q: Any) -> list[str]:
    """Base fields that are absent or empty. Non-dict input misses all of them."""
    if not isinstance(q, dict):
        return list(_BASE_FIELDS)
    return [f for f in _BASE_FIELDS if not q.get(f)]


def check_question(q: Any) -> str | None:
    """Full structural check. None if the question may be persisted."""
    if not isinstance(q, dict):
        return "question must be a JSON object"
    missing = find_missing_fields(q)
    if missing:
        return f"missing required field(s): {', '.join(missing)}"
    for key in ("id", "subject", "question"):
        if not isinstance(q[key], str):
            return f"'{key}' must be a string"
    try:
        qtype = QuestionType(q["type"])
    except ValueError:
        return f"unsupported question type '{q['type']}'"
    return _TYPE_CHECKS[qtype](q)