"""Root conftest — shared test configuration."""

import os

# Tests never talk to GitHub: the app builds an in-memory document client
os.environ.setdefault("DOCUMENT_BACKEND", "memory")
os.environ.setdefault("GITHUB_TOKEN", "ghp-test-fake-token")
