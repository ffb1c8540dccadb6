"""Configuration models and YAML loader for the listing client."""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from src.core.filters import DEFAULT_PAGE_SIZE

TOKEN_ENV_VAR = "JOBBOARD_API_TOKEN"

CANDIDATES_FALLBACK_MESSAGE = "Có lỗi xảy ra khi tải danh sách ứng viên"
JOBS_FALLBACK_MESSAGE = "Có lỗi xảy ra khi tải danh sách việc làm"


class ApiConfig(BaseModel):
    """Job-board API connection settings."""

    base_url: str = "http://localhost:3000/api/v1"
    timeout_s: float = Field(default=30.0, ge=1.0)
    token: str | None = None

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            msg = f"base_url must be an http(s) URL, got '{v}'"
            raise ValueError(msg)
        return v.rstrip("/")

    def resolved_token(self) -> str | None:
        """Configured bearer token, falling back to the environment."""
        return self.token or os.environ.get(TOKEN_ENV_VAR) or None


class ListingConfig(BaseModel):
    """Endpoint and default filter-set for one listing."""

    path: str
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=100)
    sort_by: str = "createdAt"
    sort_order: Literal["asc", "desc"] = "desc"
    auto_load: bool = True
    fallback_message: str

    @field_validator("path")
    @classmethod
    def path_is_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            msg = f"listing path must start with '/', got '{v}'"
            raise ValueError(msg)
        return v


class CandidateListingConfig(ListingConfig):
    path: str = "/users/candidates/search"
    fallback_message: str = CANDIDATES_FALLBACK_MESSAGE


class JobListingConfig(ListingConfig):
    path: str = "/job-posts"
    fallback_message: str = JOBS_FALLBACK_MESSAGE


class ListingsConfig(BaseModel):
    candidates: CandidateListingConfig = Field(default_factory=CandidateListingConfig)
    jobs: JobListingConfig = Field(default_factory=JobListingConfig)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    listings: ListingsConfig = Field(default_factory=ListingsConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
