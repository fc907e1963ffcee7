"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Settings are frozen: validated once at startup, immutable afterwards

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - GitHub token accepted whole or split in three parts (GITHUB_TOKEN_PART_1..3),
      matching how the token is provisioned on the hosting platform
    - Missing GitHub credentials do not abort startup: is_store_configured is
      checked by the lifespan and store-backed routes answer 503
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True, extra="ignore",
    )

    # Document store
    document_backend: Literal["github", "memory"] = "github"
    github_token: str = ""
    github_token_part_1: str = ""
    github_token_part_2: str = ""
    github_token_part_3: str = ""
    github_owner: str = ""
    github_repo: str = ""
    github_branch: str = "main"
    github_api_url: str = "https://api.github.com"
    questions_path: str = "database/questions.json"
    scores_path: str = "database/scores.json"
    http_timeout_seconds: float = 15.0

    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Leaderboard
    leaderboard_size: int = 10

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def github_auth_token(self) -> str:
        """Full token — explicit GITHUB_TOKEN wins over the split parts."""
        if self.github_token:
            return self.github_token
        return (
            self.github_token_part_1
            + self.github_token_part_2
            + self.github_token_part_3
        )

    @property
    def is_store_configured(self) -> bool:
        if self.document_backend == "memory":
            return True
        return bool(
            self.github_auth_token and self.github_owner and self.github_repo
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
