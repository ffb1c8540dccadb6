"""Job listing: filter vocabulary, facet helpers and controller glue."""

from collections.abc import Mapping
from typing import Any

from src.core.config import JobListingConfig
from src.core.filters import JobFilters
from src.core.schemas import JobPost
from src.listing.controller import ListController
from src.services.base import SearchService
from src.services.notifier import Notifier


class JobListController(ListController[JobPost, JobFilters]):
    """Adds the job board's facet shortcuts on top of ``update_filters``."""

    @property
    def jobs(self) -> list[JobPost]:
        return self.items

    @property
    def selected_job(self) -> JobPost | None:
        return self.selected

    def select_job(self, job_id: str | None) -> None:
        self.select(job_id)

    async def filter_by_category(self, category_id: str | None) -> None:
        await self.update_filters(category_id=category_id)

    async def filter_by_company(self, company_id: str | None) -> None:
        await self.update_filters(company_id=company_id)

    async def toggle_skill_filter(self, skill_id: str) -> None:
        """Add ``skill_id`` to the skill facet, or remove it if present."""
        current = self.filters.skill_ids
        if skill_id in current:
            skill_ids = [s for s in current if s != skill_id]
        else:
            skill_ids = [*current, skill_id]
        await self.update_filters(skill_ids=skill_ids)


def build_job_controller(
    service: SearchService[JobPost, JobFilters],
    notifier: Notifier,
    config: JobListingConfig | None = None,
    initial: Mapping[str, Any] | None = None,
) -> JobListController:
    config = config or JobListingConfig()
    defaults = JobFilters(
        limit=config.page_size,
        sort_by=config.sort_by,  # type: ignore[arg-type]
        sort_order=config.sort_order,
    )
    return JobListController(
        service,
        notifier,
        defaults,
        initial=initial,
        fallback_message=config.fallback_message,
        auto_load=config.auto_load,
    )
