"""Filter-set models for candidate and job listings.

A filter-set is the complete set of query parameters (text, facets, paging,
sort) describing one search request. Models are frozen: every change goes
through FilterStore, which builds a new validated instance.

Python field names are snake_case; ``to_params`` emits the camelCase names
the job-board API expects.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SortOrder = Literal["asc", "desc"]
CandidateSortField = Literal["createdAt", "updatedAt", "name"]
JobSortField = Literal["createdAt", "updatedAt", "salaryMin", "salaryMax"]

PAGINATION_FIELDS = frozenset({"page", "limit"})
SORT_FIELDS = frozenset({"sort_by", "sort_order"})

DEFAULT_PAGE_SIZE = 10


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    FREELANCE = "freelance"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"


class ListFilters(BaseModel):
    """Fields shared by every listing filter-set."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    query: str | None = None
    location: str | None = None
    skill_ids: list[str] = Field(default_factory=list, serialization_alias="skillIds")
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    sort_by: str = Field(default="createdAt", serialization_alias="sortBy")
    sort_order: SortOrder = Field(default="desc", serialization_alias="sortOrder")

    @property
    def has_active_filters(self) -> bool:
        """True if any field other than paging and sort is set."""
        ignored = PAGINATION_FIELDS | SORT_FIELDS
        return any(
            getattr(self, name)
            for name in type(self).model_fields
            if name not in ignored
        )

    def to_params(self) -> list[tuple[str, str]]:
        """Serialize to wire query params.

        Empty values are skipped; lists become repeated keys without brackets
        (``skillIds=a&skillIds=b``).
        """
        params: list[tuple[str, str]] = []
        dumped: dict[str, Any] = self.model_dump(by_alias=True, mode="json")
        for key, value in dumped.items():
            if value is None or value == "":
                continue
            if isinstance(value, list):
                params.extend((key, str(v)) for v in value if v not in (None, ""))
            else:
                params.append((key, str(value)))
        return params


class CandidateFilters(ListFilters):
    """Candidate search: free text, skills, experience sub-filters, location."""

    experience_title: str | None = Field(default=None, serialization_alias="experienceTitle")
    experience_company: str | None = Field(
        default=None, serialization_alias="experienceCompany",
    )
    sort_by: CandidateSortField = Field(default="createdAt", serialization_alias="sortBy")


class JobFilters(ListFilters):
    """Job search. The free-text query travels as ``search`` on the wire."""

    query: str | None = Field(default=None, serialization_alias="search")
    category_id: str | None = Field(default=None, serialization_alias="categoryId")
    company_id: str | None = Field(default=None, serialization_alias="companyId")
    job_type: list[JobType] = Field(default_factory=list, serialization_alias="jobType")
    experience_level: list[ExperienceLevel] = Field(
        default_factory=list, serialization_alias="experienceLevel",
    )
    min_salary: int | None = Field(default=None, ge=0, serialization_alias="minSalary")
    max_salary: int | None = Field(default=None, ge=0, serialization_alias="maxSalary")
    sort_by: JobSortField = Field(default="createdAt", serialization_alias="sortBy")
