"""Deduplication, title pairing and sort orders"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Sequence

from .errors import ResolutionMismatch

logger = logging.getLogger(__name__)


class SortOrder(Enum):
    """Order in which windows are listed before numbering"""
    FOCUS_HISTORY = "focus-history"                            # current window last
    FOCUS_HISTORY_CURRENT_FIRST = "focus-history-current-first"
    CREATION = "creation"                                      # ascending window id
    ALPHABETICAL = "alphabetical"                              # case-insensitive raw title

    @classmethod
    def names(cls) -> List[str]:
        return [order.value for order in cls]

    @classmethod
    def from_name(cls, name: str) -> "SortOrder":
        """Parse a kebab-case sort order name

        Raises:
            ValueError: If the name is not a known sort order
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"unknown sort order {name!r} (choose from {', '.join(cls.names())})"
            ) from None


@dataclass(frozen=True)
class Entry:
    """A window with a non-blank title"""
    id: Hashable
    title: str


@dataclass(frozen=True)
class OrderedEntry:
    """An entry with its zero-based position in the sort order"""
    id: Hashable
    title: str
    position: int


def dedupe_history(raw_ids: Sequence[Hashable]) -> List[Hashable]:
    """Turn a most-recent-last focus history into unique ids, most recent first

    >>> dedupe_history(['a', 'b', 'a', 'c', 'b'])
    ['b', 'c', 'a']
    """
    seen = set()
    unique = []
    for window_id in reversed(raw_ids):
        if window_id in seen:
            continue
        seen.add(window_id)
        unique.append(window_id)
    return unique


def pair_titles(window_ids: Sequence[Hashable], titles: Sequence[str]) -> List[Entry]:
    """Pair ids with their resolved titles, dropping untitled windows

    Args:
        window_ids: Deduplicated ids, most recently focused first
        titles: One title per id, in the same order

    Returns:
        Entries in the order of window_ids

    Raises:
        ResolutionMismatch: If the counts differ
    """
    if len(titles) != len(window_ids):
        raise ResolutionMismatch(len(window_ids), len(titles))

    entries = [Entry(window_id, title) for window_id, title in zip(window_ids, titles) if title]
    dropped = len(window_ids) - len(entries)
    if dropped:
        logger.debug(f"Dropped {dropped} window(s) without a title")
    return entries


def order_entries(entries: Sequence[Entry], sort_order: SortOrder) -> List[OrderedEntry]:
    """Apply a sort order and number the result from 0

    Reversal is not handled here; positions always describe the
    unreversed order so that line numbers stay stable.

    Args:
        entries: Entries, most recently focused first
        sort_order: Ordering to apply

    Returns:
        Ordered entries with dense positions
    """
    ordered = list(entries)

    if sort_order is SortOrder.FOCUS_HISTORY:
        if ordered:
            ordered.append(ordered.pop(0))
    elif sort_order is SortOrder.FOCUS_HISTORY_CURRENT_FIRST:
        pass
    elif sort_order is SortOrder.CREATION:
        # Assumes the window manager hands out ids in increasing order
        ordered.sort(key=lambda entry: entry.id)
    elif sort_order is SortOrder.ALPHABETICAL:
        ordered.sort(key=lambda entry: entry.title.lower())
    else:
        raise ValueError(f"Unhandled sort order: {sort_order}")

    logger.debug(f"Ordered {len(ordered)} entries by {sort_order.value}")
    return [
        OrderedEntry(entry.id, entry.title, position)
        for position, entry in enumerate(ordered)
    ]
