"""Core data models: listed entities and paginated result pages."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from src.core.filters import ExperienceLevel, JobType


class Experience(BaseModel):
    """One entry of a candidate's work history."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    company: str
    location: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    current: bool = False
    description: str | None = None


class Candidate(BaseModel):
    """A job seeker profile returned by the candidate search endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    email: str = ""
    phone: str | None = None
    location: str | None = None
    bio: str | None = None
    avatar_url: str | None = Field(default=None, alias="avatarUrl")
    resume_url: str | None = Field(default=None, alias="resumeUrl")
    skill_ids: list[str] = Field(default_factory=list, alias="skillIds")
    experiences: list[Experience] = Field(default_factory=list)


class JobPost(BaseModel):
    """A job posting returned by the job search endpoint.

    ``company_id`` and ``category_id`` are either raw ids or the populated
    documents, depending on the endpoint.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    description: str = ""
    company_id: str | dict[str, Any] | None = Field(default=None, alias="companyId")
    category_id: str | dict[str, Any] | None = Field(default=None, alias="categoryId")
    skill_ids: list[str | dict[str, Any]] = Field(default_factory=list, alias="skillIds")
    location: str | None = None
    salary_min: float | None = Field(default=None, alias="salaryMin")
    salary_max: float | None = Field(default=None, alias="salaryMax")
    job_type: JobType | None = Field(default=None, alias="jobType")
    experience_level: ExperienceLevel | None = Field(default=None, alias="experienceLevel")
    is_active: bool = Field(default=True, alias="isActive")
    expires_at: str | None = Field(default=None, alias="expiresAt")
    application_count: int = Field(default=0, alias="applicationCount")


class PaginationMeta(BaseModel):
    """Pagination block of a result page.

    Navigation flags are derived from the counters; whatever the server sends
    for ``hasNextPage``/``hasPreviousPage`` is ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    current_page: int = Field(alias="currentPage", ge=1)
    total_pages: int = Field(alias="totalPages", ge=0)
    total_items: int = Field(alias="totalItems", ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1


E = TypeVar("E", bound=BaseModel)


class Page(BaseModel, Generic[E]):
    """One fetch's worth of results, in server order.

    Parsed from the API envelope ``{"data": [...], "pagination": {...}}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: list[E] = Field(alias="data")
    pagination: PaginationMeta
