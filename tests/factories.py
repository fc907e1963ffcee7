"""Question and score builders shared across test modules."""


def mc_question(qid="mc-1", subject="math", options=None, correct=0, **extra):
    return {
        "id": qid,
        "subject": subject,
        "type": "multiple-choice",
        "question": f"Question {qid}?",
        "options": options if options is not None else ["A", "B", "C", "D"],
        "correctAnswer": correct,
        **extra,
    }


def tf_question(qid="tf-1", subject="math", correct=True, **extra):
    return {
        "id": qid,
        "subject": subject,
        "type": "true-false",
        "question": f"Statement {qid}",
        "correctAnswer": correct,
        **extra,
    }


def mcc_question(qid="mcc-1", subject="math", options=None, correct=None, **extra):
    return {
        "id": qid,
        "subject": subject,
        "type": "multiple-choice-complex",
        "question": f"Pick all for {qid}",
        "options": options if options is not None else ["w", "x", "y", "z", "v"],
        "correctAnswers": correct if correct is not None else [0, 2, 4],
        **extra,
    }


def mtf_question(qid="mtf-1", subject="math", statements=None, **extra):
    return {
        "id": qid,
        "subject": subject,
        "type": "multiple-true-false",
        "question": f"Judge each for {qid}",
        "statements": statements if statements is not None else [
            {"text": "s1", "answer": True},
            {"text": "s2", "answer": False},
            {"text": "s3", "answer": True},
        ],
        **extra,
    }


def score(user, value, time_spent, subject="math", rid=1):
    return {
        "id": rid,
        "userName": user,
        "subjectId": subject,
        "score": value,
        "timeSpent": time_spent,
        "createdAt": "2026-01-01T00:00:00+00:00",
    }
