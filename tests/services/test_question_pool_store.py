"""Question Pool Store — read-modify-write against an in-memory document.

Tests:
    - Missing document is an empty pool; first write creates it
    - add/update/delete persist exactly one write and keep order
    - Validation and not-found failures leave the document untouched (no write)
    - bulk_add partial success, zero-change batch without a write
    - Two concurrent adds on the same revision: one wins, one gets a conflict
"""

import asyncio

import pytest

from exambank.core.errors import (
    DuplicateQuestionError,
    QuestionValidationError,
    ResourceNotFoundError,
    RevisionConflictError,
)
from exambank.services.question_pool_store import QuestionPoolStore
from tests.factories import mc_question, mcc_question, tf_question

QUESTIONS_PATH = "database/questions.json"


async def test_get_all_on_missing_document_is_empty(question_store, memory_client):
    assert await question_store.get_all() == {}
    assert await question_store.list_subjects() == []
    assert memory_client.write_count == 0


async def test_add_creates_document_on_first_write(question_store, memory_client):
    created = await question_store.add_question(mc_question("m1"))
    assert created["id"] == "m1"
    assert memory_client.snapshot(QUESTIONS_PATH) == {"math": [mc_question("m1")]}
    assert memory_client.write_count == 1


async def test_add_duplicate_does_not_write(question_store, memory_client):
    await question_store.add_question(mc_question("m1"))
    with pytest.raises(DuplicateQuestionError):
        await question_store.add_question(mc_question("m1", correct=2))
    assert memory_client.write_count == 1


async def test_add_invalid_does_not_write(question_store, memory_client):
    with pytest.raises(QuestionValidationError):
        await question_store.add_question({"id": "x", "subject": "math"})
    assert memory_client.snapshot(QUESTIONS_PATH) is None


async def test_list_subjects_in_document_order(question_store):
    await question_store.add_question(tf_question("b1", subject="bio"))
    await question_store.add_question(tf_question("m1", subject="math"))
    assert await question_store.list_subjects() == ["bio", "math"]


async def test_update_preserves_original_id(question_store, memory_client):
    await question_store.add_question(mc_question("m1"))
    await question_store.add_question(mc_question("m2"))

    body = mc_question("attacker-id", options=["x", "y"], correct=1)
    record = await question_store.update_question("m1", "math", body)

    assert record["id"] == "m1"
    stored = memory_client.snapshot(QUESTIONS_PATH)["math"]
    assert [q["id"] for q in stored] == ["m1", "m2"]
    assert stored[0]["options"] == ["x", "y"]


async def test_update_missing_subject_or_question(question_store, memory_client):
    await question_store.add_question(mc_question("m1"))
    with pytest.raises(ResourceNotFoundError):
        await question_store.update_question("m1", "bio", tf_question(subject="bio"))
    with pytest.raises(ResourceNotFoundError):
        await question_store.update_question("nope", "math", mc_question())
    assert memory_client.write_count == 1


async def test_delete_only_question_keeps_subject(question_store, memory_client):
    await question_store.add_question(tf_question("b1", subject="bio"))
    await question_store.delete_question("b1", "bio")
    assert memory_client.snapshot(QUESTIONS_PATH) == {"bio": []}


async def test_delete_missing_question(question_store):
    await question_store.add_question(mc_question("m1"))
    with pytest.raises(ResourceNotFoundError):
        await question_store.delete_question("m9", "math")
    with pytest.raises(ResourceNotFoundError):
        await question_store.delete_question("m1", "chem")


async def test_bulk_add_counts_and_retrievable(question_store, memory_client):
    await question_store.add_question(mc_question("m1"))
    batch = [mc_question("m1"), mc_question("m2"), mcc_question("m3"), tf_question("m4")]

    result = await question_store.bulk_add("math", batch)

    assert len(result.added) + len(result.skipped) == len(batch)
    assert result.added_ids == ["m2", "m3", "m4"]
    assert result.skipped_ids == ["m1"]
    stored_ids = [q["id"] for q in (await question_store.get_all())["math"]]
    assert stored_ids == ["m1", "m2", "m3", "m4"]
    assert memory_client.write_count == 2


async def test_bulk_add_invalid_element_leaves_store_unchanged(question_store, memory_client):
    await question_store.add_question(mc_question("m1"))
    before = memory_client.snapshot(QUESTIONS_PATH)
    bad = mcc_question("m3", correct="0")

    with pytest.raises(QuestionValidationError) as exc:
        await question_store.bulk_add("math", [mc_question("m2"), bad])

    assert exc.value.invalid_record == bad
    assert memory_client.snapshot(QUESTIONS_PATH) == before
    assert memory_client.write_count == 1


async def test_bulk_add_nothing_new_skips_write(question_store, memory_client):
    await question_store.add_question(mc_question("m1"))
    result = await question_store.bulk_add("math", [mc_question("m1")])
    assert not result.changed
    assert result.skipped_ids == ["m1"]
    assert memory_client.write_count == 1


async def test_concurrent_adds_one_conflicts(lockstep_client, memory_client):
    await memory_client.write(QUESTIONS_PATH, {"math": []}, None, "seed")
    store = QuestionPoolStore(lockstep_client, QUESTIONS_PATH)

    results = await asyncio.gather(
        store.add_question(mc_question("a")),
        store.add_question(mc_question("b")),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, RevisionConflictError)]
    winners = [r for r in results if isinstance(r, dict)]
    assert len(conflicts) == 1
    assert len(winners) == 1
    assert memory_client.snapshot(QUESTIONS_PATH) == {"math": [winners[0]]}


async def test_add_non_finite_value_is_validation_error(question_store, memory_client):
    with pytest.raises(QuestionValidationError):
        await question_store.add_question(tf_question("t1", weight=float("inf")))
    assert memory_client.write_count == 0
