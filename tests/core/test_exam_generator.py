"""Exam Generator — fixed size, answer preservation under shuffling, purity.

Tests:
    - Exactly 30 questions for pools of 1, 5, 30, 31 and 100
    - Small pools repeat whole shuffled cycles; large pools have no repeats
    - MC / MC-complex correct option content preserved across many random runs
    - multiple-true-false statements permuted, true-false untouched
    - Source pool never mutated; unknown/empty subject -> 404
"""

import copy
import random
from collections import Counter

import pytest

from exambank.core.domain_types import EXAM_SIZE
from exambank.core.errors import ResourceNotFoundError
from exambank.core.exam_generator import generate_exam, select_questions, shuffle_question
from tests.factories import mc_question, mcc_question, mtf_question, tf_question


def _mixed_pool(size: int) -> dict:
    builders = [mc_question, mcc_question, mtf_question, tf_question]
    questions = []
    for i in range(size):
        build = builders[i % len(builders)]
        questions.append(build(f"q{i}", subject="math"))
    return {"math": questions}


@pytest.mark.parametrize("size", [1, 5, 30, 31, 100])
def test_exam_always_has_thirty_questions(size):
    exam = generate_exam("math", _mixed_pool(size))
    assert len(exam["questions"]) == EXAM_SIZE
    assert exam["totalQuestions"] == EXAM_SIZE


def test_exam_envelope():
    exam = generate_exam("math", _mixed_pool(3))
    assert exam["id"] == "math"
    assert exam["title"] == "Simulasi Ujian math"
    assert exam["duration"] == 30


def test_small_pool_repeats_each_question_evenly():
    exam = generate_exam("math", _mixed_pool(5), rng=random.Random(1))
    counts = Counter(q["id"] for q in exam["questions"])
    assert set(counts) == {f"q{i}" for i in range(5)}
    assert set(counts.values()) == {6}


def test_repeated_cycles_share_the_same_order():
    questions = [tf_question(f"t{i}") for i in range(7)]
    selected = select_questions(questions, 30, random.Random(3))
    ids = [q["id"] for q in selected]
    assert ids[:7] == ids[7:14] == ids[14:21] == ids[21:28]
    assert ids[28:] == ids[:2]


def test_large_pool_has_no_repeats():
    exam = generate_exam("math", _mixed_pool(100))
    ids = [q["id"] for q in exam["questions"]]
    assert len(set(ids)) == EXAM_SIZE


def test_missing_or_empty_subject_raises_not_found():
    with pytest.raises(ResourceNotFoundError):
        generate_exam("history", _mixed_pool(3))
    with pytest.raises(ResourceNotFoundError):
        generate_exam("math", {"math": []})


def test_source_pool_not_mutated():
    pool = _mixed_pool(12)
    before = copy.deepcopy(pool)
    generate_exam("math", pool, rng=random.Random(7))
    assert pool == before


def test_seeded_rng_is_reproducible():
    pool = _mixed_pool(9)
    assert generate_exam("math", pool, random.Random(42)) == generate_exam(
        "math", pool, random.Random(42),
    )


def test_multiple_choice_correct_option_preserved_across_runs():
    original = mc_question(options=["alpha", "beta", "gamma", "delta", "eps"], correct=3)
    rng = random.Random(11)
    positions = set()
    for _ in range(300):
        shuffled = shuffle_question(original, rng)
        assert sorted(shuffled["options"]) == sorted(original["options"])
        assert shuffled["options"][shuffled["correctAnswer"]] == "delta"
        positions.add(shuffled["correctAnswer"])
    assert positions == {0, 1, 2, 3, 4}


def test_complex_correct_set_preserved_and_sorted():
    original = mcc_question(options=["a", "b", "c", "d", "e", "f"], correct=[5, 1, 3])
    expected = {"b", "d", "f"}
    rng = random.Random(5)
    for _ in range(300):
        shuffled = shuffle_question(original, rng)
        answers = shuffled["correctAnswers"]
        assert answers == sorted(answers)
        assert {shuffled["options"][i] for i in answers} == expected


def test_generated_exam_invariant_holds_for_every_question():
    pool = _mixed_pool(40)
    by_id = {q["id"]: q for q in pool["math"]}
    for seed in range(25):
        exam = generate_exam("math", pool, rng=random.Random(seed))
        for q in exam["questions"]:
            source = by_id[q["id"]]
            if q["type"] == "multiple-choice":
                assert (
                    q["options"][q["correctAnswer"]]
                    == source["options"][source["correctAnswer"]]
                )
            elif q["type"] == "multiple-choice-complex":
                assert {q["options"][i] for i in q["correctAnswers"]} == {
                    source["options"][i] for i in source["correctAnswers"]
                }


def test_multiple_true_false_statements_permuted():
    original = mtf_question(statements=[{"text": str(i), "answer": i % 2 == 0} for i in range(6)])
    rng = random.Random(2)
    orders = set()
    for _ in range(50):
        shuffled = shuffle_question(original, rng)
        assert sorted(s["text"] for s in shuffled["statements"]) == [str(i) for i in range(6)]
        orders.add(tuple(s["text"] for s in shuffled["statements"]))
    assert len(orders) > 1


def test_true_false_returned_unchanged_as_copy():
    original = tf_question(correct=False, explanation="no")
    shuffled = shuffle_question(original, random.Random(0))
    assert shuffled == original
    assert shuffled is not original


def test_extra_fields_survive_shuffling():
    original = mc_question(explanation="see chapter 2")
    shuffled = shuffle_question(original, random.Random(0))
    assert shuffled["explanation"] == "see chapter 2"
