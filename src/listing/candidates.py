"""Candidate listing: filter vocabulary and controller glue."""

from collections.abc import Mapping
from typing import Any

from src.core.config import CandidateListingConfig
from src.core.filters import CandidateFilters
from src.core.schemas import Candidate
from src.listing.controller import ListController
from src.services.base import SearchService
from src.services.notifier import Notifier


class CandidateListController(ListController[Candidate, CandidateFilters]):
    @property
    def candidates(self) -> list[Candidate]:
        return self.items

    @property
    def selected_candidate(self) -> Candidate | None:
        return self.selected

    def select_candidate(self, candidate_id: str | None) -> None:
        self.select(candidate_id)


def build_candidate_controller(
    service: SearchService[Candidate, CandidateFilters],
    notifier: Notifier,
    config: CandidateListingConfig | None = None,
    initial: Mapping[str, Any] | None = None,
) -> CandidateListController:
    config = config or CandidateListingConfig()
    defaults = CandidateFilters(
        limit=config.page_size,
        sort_by=config.sort_by,  # type: ignore[arg-type]
        sort_order=config.sort_order,
    )
    return CandidateListController(
        service,
        notifier,
        defaults,
        initial=initial,
        fallback_message=config.fallback_message,
        auto_load=config.auto_load,
    )
