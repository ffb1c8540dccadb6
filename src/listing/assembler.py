"""Result assembler: folds a fetched page into the visible list."""

from collections.abc import Sequence
from enum import Enum
from typing import Any, TypeVar

from src.core.schemas import Page

E = TypeVar("E")


class FetchMode(str, Enum):
    """How a completed page updates the visible list."""

    REPLACE = "replace"  # search, sort, filter update, page jump, reset
    APPEND = "append"  # load more


def assemble(visible: Sequence[E], page: Page[Any], mode: FetchMode) -> list[E]:
    """Return the new visible list. Server order is kept in both modes."""
    if mode is FetchMode.APPEND:
        return [*visible, *page.items]
    return list(page.items)
