"""Selection tracking by identifier.

Only the identifier is stored. The selected entity is always derived from the
current visible list, so the two can never disagree.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


def resolve_selection(
    items: Sequence[E],
    selected_id: str | None,
    key: Callable[[E], str],
) -> E | None:
    """Return the item whose key equals ``selected_id``, or None.

    A missing id is not an error; the item is simply not resolvable in this
    list. Lists are page-bounded, so a linear scan is fine.
    """
    if selected_id is None:
        return None
    return next((item for item in items if key(item) == selected_id), None)


class SelectionTracker(Generic[E]):
    """Remembers which entity the user selected, independent of the list."""

    def __init__(self, key: Callable[[E], str]) -> None:
        self._key = key
        self._selected_id: str | None = None

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    def select(self, selected_id: str | None) -> None:
        self._selected_id = selected_id
        logger.debug("Selected id: %s", selected_id)

    def resolve(self, items: Sequence[E]) -> E | None:
        return resolve_selection(items, self._selected_id, self._key)
