"""Filter store: the current filter-set and its defaults.

All mutations go through ``apply``; it is the only place that knows the
page-reset rule (any change other than ``page`` itself restarts at page 1).
"""

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from src.core.filters import ListFilters

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=ListFilters)


class FilterStore(Generic[F]):
    """Holds the default and current filter-sets for one listing.

    ``initial`` overrides apply once, at construction. ``reset`` goes back to
    ``defaults`` without them.
    """

    def __init__(self, defaults: F, initial: Mapping[str, Any] | None = None) -> None:
        self._defaults = defaults
        self._current = defaults
        if initial:
            self._current = self._merge(dict(initial), reset_page=False)

    @property
    def defaults(self) -> F:
        return self._defaults

    @property
    def current(self) -> F:
        return self._current

    def apply(self, patch: Mapping[str, Any], *, reset_page: bool = True) -> F:
        """Merge ``patch`` into the current filter-set and return the result.

        Raises:
            ValueError: If the patch names an unknown field or a value fails
                validation. The current filter-set is left untouched.
        """
        self._current = self._merge(dict(patch), reset_page=reset_page)
        logger.debug("Filters now %s", self._current.model_dump(exclude_defaults=True))
        return self._current

    def with_page(self, page: int) -> F:
        """Set the page number only; every other field is preserved."""
        if page < 1:
            msg = f"page must be >= 1, got {page}"
            raise ValueError(msg)
        return self.apply({"page": page}, reset_page=False)

    def reset(self) -> F:
        self._current = self._defaults
        return self._current

    def _merge(self, patch: dict[str, Any], *, reset_page: bool) -> F:
        model = type(self._current)
        unknown = sorted(set(patch) - set(model.model_fields))
        if unknown:
            msg = f"Unknown filter field(s) for {model.__name__}: {', '.join(unknown)}"
            raise ValueError(msg)
        data = {**self._current.model_dump(), **patch}
        if reset_page:
            data["page"] = 1
        return model.model_validate(data)
