"""GitHub Contents Client — DocumentClient over the GitHub repository contents API.

Invariants:
    - One JSON file per document path, on a single configured branch
    - Revision token = file blob SHA returned by GitHub
    - GET 404 -> DocumentNotFoundError
    - PUT 409 (stale sha) or 422 naming the sha (required but absent) ->
      RevisionConflictError; any other 422 is a StoreTransportError
    - Any other non-2xx, network failure, timeout or undecodable payload ->
      StoreTransportError
    - No retries: a conflict or failure surfaces to the caller unchanged

Design Decisions:
    - httpx.AsyncClient owned by the instance, closed via aclose() on shutdown
    - transport parameter lets tests plug httpx.MockTransport (no real network)
    - Files above 1 MB come back without inline content (encoding "none"):
      the raw media type is requested in a second GET
"""

import base64
import binascii
import logging
from typing import Any

import httpx

from exambank.core.document_codec import decode_document, encode_document
from exambank.core.domain_types import RevisionToken
from exambank.core.errors import (
    DocumentNotFoundError,
    ErrorContext,
    RevisionConflictError,
    StoreTransportError,
)
from exambank.core.repository_protocols import CommitResult, RemoteDocument

logger = logging.getLogger(__name__)

_JSON_MEDIA_TYPE = "application/vnd.github.v3+json"
_RAW_MEDIA_TYPE = "application/vnd.github.raw"
_CONFLICT_STATUS = 409
_UNPROCESSABLE_STATUS = 422


class GitHubContentsClient:
    """Reads and writes JSON documents stored as files in a GitHub repository."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        branch: str = "main",
        api_url: str = "https://api.github.com",
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.client = httpx.AsyncClient(
            base_url=api_url,
            headers={
                "Authorization": f"token {token}",
                "Accept": _JSON_MEDIA_TYPE,
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    def _contents_url(self, path: str) -> str:
        return f"/repos/{self.owner}/{self.repo}/contents/{path}"

    async def read(self, path: str) -> RemoteDocument:
        """Fetch and decode path. Raises DocumentNotFoundError if absent."""
        response = await self._request(
            "GET", path, "read", params={"ref": self.branch},
        )
        if response.status_code == 404:
            raise DocumentNotFoundError(path)
        self._raise_for_status(response, path, "read")

        data = self._json_object(response, path, "read")
        sha = data.get("sha")
        if not isinstance(sha, str) or not sha:
            raise StoreTransportError(
                f"read response for {path} has no sha", "decode",
                ErrorContext(document_path=path),
            )
        if data.get("encoding") == "none" or (
            not data.get("content") and data.get("size", 0) > 0
        ):
            raw = await self._read_raw(path)
        else:
            raw = self._decode_base64(data.get("content", ""), path)

        try:
            content = decode_document(raw)
        except ValueError as e:
            raise StoreTransportError(
                f"invalid JSON in {path}: {e}", "decode",
                ErrorContext(document_path=path),
            )
        logger.debug(
            f"Read {path}", extra={"document_path": path, "revision": sha},
        )
        return RemoteDocument(content=content, revision=RevisionToken(sha))

    async def write(
        self,
        path: str,
        content: Any,
        revision: RevisionToken | None,
        message: str,
    ) -> CommitResult:
        """Replace path with content if revision still matches (create when None)."""
        payload = {
            "message": message,
            "content": base64.b64encode(encode_document(content)).decode("ascii"),
            "branch": self.branch,
        }
        if revision is not None:
            payload["sha"] = revision

        response = await self._request("PUT", path, "write", json=payload)
        if self._is_revision_conflict(response):
            logger.warning(
                f"Revision conflict writing {path}",
                extra={
                    "document_path": path,
                    "revision": revision,
                    "status_code": response.status_code,
                },
            )
            raise RevisionConflictError(path)
        self._raise_for_status(response, path, "write")

        data = self._json_object(response, path, "write")
        try:
            new_sha = data["content"]["sha"]
            commit_url = (data.get("commit") or {}).get("html_url")
            if not isinstance(new_sha, str):
                raise TypeError(f"sha is {type(new_sha).__name__}")
        except (KeyError, TypeError, AttributeError) as e:
            # the commit has landed; only the answer is unreadable
            raise StoreTransportError(
                f"write response for {path} lacks content.sha: {e!r}", "decode",
                ErrorContext(document_path=path),
            )
        new_revision = RevisionToken(new_sha)
        logger.info(
            f"Committed {path}: {message}",
            extra={"document_path": path, "revision": new_revision},
        )
        return CommitResult(revision=new_revision, commit_url=commit_url)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _read_raw(self, path: str) -> bytes:
        response = await self._request(
            "GET", path, "read", params={"ref": self.branch},
            headers={"Accept": _RAW_MEDIA_TYPE},
        )
        if response.status_code == 404:
            raise DocumentNotFoundError(path)
        self._raise_for_status(response, path, "read")
        return response.content

    async def _request(
        self, method: str, path: str, operation: str, **kwargs,
    ) -> httpx.Response:
        """Send request, mapping transport-level failures to StoreTransportError."""
        try:
            return await self.client.request(
                method, self._contents_url(path), **kwargs,
            )
        except httpx.TimeoutException as e:
            logger.error(f"GitHub {operation} timed out for {path}: {e}")
            raise StoreTransportError(
                "request timed out", operation, ErrorContext(document_path=path),
            )
        except httpx.HTTPError as e:
            logger.error(f"GitHub {operation} failed for {path}: {e}")
            raise StoreTransportError(
                str(e), operation, ErrorContext(document_path=path),
            )

    def _raise_for_status(
        self, response: httpx.Response, path: str, operation: str,
    ) -> None:
        if response.is_success:
            return
        logger.error(
            f"GitHub {operation} of {path} returned {response.status_code}: "
            f"{response.text[:500]}",
            extra={"document_path": path, "status_code": response.status_code},
        )
        raise StoreTransportError(
            f"unexpected status {response.status_code}", operation,
            ErrorContext(document_path=path),
        )

    @staticmethod
    def _is_revision_conflict(response: httpx.Response) -> bool:
        if response.status_code == _CONFLICT_STATUS:
            return True
        if response.status_code != _UNPROCESSABLE_STATUS:
            return False
        # 422 also covers bad branch names and paths; only a sha complaint is a conflict
        return "sha" in response.text.lower()

    @staticmethod
    def _json_object(
        response: httpx.Response, path: str, operation: str,
    ) -> dict:
        try:
            data = response.json()
        except ValueError as e:
            raise StoreTransportError(
                f"{operation} response for {path} is not JSON: {e}", "decode",
                ErrorContext(document_path=path),
            )
        if not isinstance(data, dict):
            raise StoreTransportError(
                f"{operation} response for {path} is not a JSON object "
                f"(got {type(data).__name__})", "decode",
                ErrorContext(document_path=path),
            )
        return data

    @staticmethod
    def _decode_base64(encoded: str, path: str) -> bytes:
        try:
            # GitHub wraps base64 at 60 columns
            return base64.b64decode("".join(encoded.split()), validate=True)
        except (binascii.Error, ValueError, AttributeError, TypeError) as e:
            raise StoreTransportError(
                f"invalid base64 content for {path}: {e}", "decode",
                ErrorContext(document_path=path),
            )
