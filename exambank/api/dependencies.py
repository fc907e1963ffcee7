"""Route Dependencies — store factories wired to the configured document client.

Invariants:
    - Stores are cheap per-request wrappers; the document client is process-wide
    - Missing store configuration surfaces as StoreNotConfiguredError (503)
      before any route logic runs
"""

from fastapi import Depends

from exambank.config import Settings, get_settings
from exambank.core.repository_protocols import DocumentClient
from exambank.infrastructure.document_store import get_document_client
from exambank.services.question_pool_store import QuestionPoolStore
from exambank.services.score_store import ScoreStore


def get_question_store(
    client: DocumentClient = Depends(get_document_client),
    settings: Settings = Depends(get_settings),
) -> QuestionPoolStore:
    return QuestionPoolStore(client, settings.questions_path)


def get_score_store(
    client: DocumentClient = Depends(get_document_client),
    settings: Settings = Depends(get_settings),
) -> ScoreStore:
    return ScoreStore(client, settings.scores_path)
