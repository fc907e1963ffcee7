"""Service test fixtures — stores over an in-memory document client.

Invariants:
    - Every test gets a fresh InMemoryDocumentClient (no shared documents)
    - Stores use the same document paths as the default settings
"""

import asyncio

import pytest

from exambank.infrastructure.memory_document_client import InMemoryDocumentClient
from exambank.services.question_pool_store import QuestionPoolStore
from exambank.services.score_store import ScoreStore

QUESTIONS_PATH = "database/questions.json"
SCORES_PATH = "database/scores.json"


@pytest.fixture
def memory_client():
    return InMemoryDocumentClient()


@pytest.fixture
def question_store(memory_client):
    return QuestionPoolStore(memory_client, QUESTIONS_PATH)


@pytest.fixture
def score_store(memory_client):
    return ScoreStore(memory_client, SCORES_PATH)


class LockstepReadClient:
    """Wraps a client so N concurrent operations all finish reading before any writes.

    Forces the read-read-write-write interleaving of a lost-update race.
    """

    def __init__(self, inner: InMemoryDocumentClient, parties: int = 2):
        self.inner = inner
        self._barrier = asyncio.Barrier(parties)

    async def read(self, path):
        try:
            return await self.inner.read(path)
        finally:
            await self._barrier.wait()

    async def write(self, path, content, revision, message):
        return await self.inner.write(path, content, revision, message)


@pytest.fixture
def lockstep_client(memory_client):
    return LockstepReadClient(memory_client)
