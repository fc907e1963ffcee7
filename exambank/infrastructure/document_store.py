"""Document Client Registry — builds the configured DocumentClient once per process.

Invariants:
    - document_client is None until init_document_client() runs (lifespan)
    - Unconfigured GitHub backend leaves document_client None; get_document_client
      then raises StoreNotConfiguredError (HTTP 503)
    - close_document_client() releases the HTTP connection pool on shutdown

Design Decisions:
    - Singleton initialized on startup: FastAPI lifespan manages lifecycle
      (no global import side effects)
    - get_document_client is the FastAPI dependency tests override with an
      InMemoryDocumentClient
"""

import logging

from exambank.config import Settings
from exambank.core.errors import StoreNotConfiguredError
from exambank.core.repository_protocols import DocumentClient
from exambank.infrastructure.github_contents_client import GitHubContentsClient
from exambank.infrastructure.memory_document_client import InMemoryDocumentClient

logger = logging.getLogger(__name__)

# Singleton (initialized on startup)
document_client: GitHubContentsClient | InMemoryDocumentClient | None = None


def build_document_client(
    settings: Settings,
) -> GitHubContentsClient | InMemoryDocumentClient | None:
    """Client for settings.document_backend, or None when credentials are missing."""
    if settings.document_backend == "memory":
        return InMemoryDocumentClient()
    if not settings.is_store_configured:
        return None
    return GitHubContentsClient(
        token=settings.github_auth_token,
        owner=settings.github_owner,
        repo=settings.github_repo,
        branch=settings.github_branch,
        api_url=settings.github_api_url,
        timeout_seconds=settings.http_timeout_seconds,
    )


def init_document_client(settings: Settings) -> None:
    global document_client
    document_client = build_document_client(settings)
    if document_client is None:
        logger.error(
            "FATAL: GitHub store configuration incomplete "
            "(GITHUB_TOKEN, GITHUB_OWNER, GITHUB_REPO); "
            "store-backed endpoints will answer 503",
        )


async def close_document_client() -> None:
    global document_client
    if document_client is not None:
        await document_client.aclose()
    document_client = None


def get_document_client() -> DocumentClient:
    """FastAPI dependency for the process-wide document client."""
    if document_client is None:
        raise StoreNotConfiguredError()
    return document_client
