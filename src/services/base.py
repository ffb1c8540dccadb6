"""Abstract base class for listing search services."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from src.core.filters import ListFilters
from src.core.schemas import Page

E = TypeVar("E", bound=BaseModel)
F = TypeVar("F", bound=ListFilters)


class SearchService(ABC, Generic[E, F]):
    """Turns a filter-set into one page of results.

    Implementations raise TransportFailure for every kind of failure
    (network, non-success status, malformed body).
    """

    @property
    @abstractmethod
    def service_id(self) -> str:
        """Unique identifier for this service (e.g. 'candidates')."""

    @abstractmethod
    async def search(self, filters: F) -> Page[E]:
        """Fetch the page described by ``filters``."""
