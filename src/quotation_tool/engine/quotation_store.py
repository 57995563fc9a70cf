"""
Quotation Store - the ordered line items of one quotation.

SL numbers are positional: they always run 1..N in display order and
are reassigned after every removal or bulk replacement.
"""
import logging
from dataclasses import replace
from typing import Iterable, Iterator, Optional

from .errors import NotFoundError
from .models import ItemDraft, LineItem, QuotationTotals
from .pricing_engine import compute_totals, price_item

logger = logging.getLogger(__name__)


def _renumbered(items: Iterable[LineItem]) -> list[LineItem]:
    return [
        item if item.sequence_number == position else replace(item, sequence_number=position)
        for position, item in enumerate(items, start=1)
    ]


class QuotationStore:
    """
    Holds the line items of a quotation and keeps SL numbers dense.

    One instance per quotation, owned by whoever builds the quote
    (a Streamlit session, an API app). Not thread-safe.
    """

    def __init__(self, items: Optional[Iterable[LineItem]] = None, transportation_cost: float = 0.0):
        self._items: list[LineItem] = _renumbered(items or [])
        self.transportation_cost = transportation_cost

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self._items)

    @property
    def items(self) -> tuple[LineItem, ...]:
        """Snapshot of the current items in display order."""
        return tuple(self._items)

    def get(self, sequence_number: int) -> Optional[LineItem]:
        for item in self._items:
            if item.sequence_number == sequence_number:
                return item
        return None

    def add_item(self, draft: ItemDraft) -> LineItem:
        """Price a draft and append it with the next SL number."""
        item = price_item(draft, sequence_number=len(self._items) + 1)
        self._items.append(item)
        logger.info("Added item %d: %s (%.4f sq.ft x %d)", item.sequence_number, item.name, item.area, item.quantity)
        return item

    def remove_item(self, sequence_number: int, strict: bool = False) -> Optional[LineItem]:
        """
        Remove an item and renumber the rest 1..N.

        Args:
            sequence_number: SL number of the item to remove
            strict: Raise NotFoundError instead of ignoring an unknown number

        Returns:
            The removed item, or None if nothing matched
        """
        removed = self.get(sequence_number)
        if removed is None:
            if strict:
                raise NotFoundError(sequence_number)
            logger.debug("Remove ignored, no item with SL No. %d", sequence_number)
            return None

        self._items = _renumbered(item for item in self._items if item is not removed)
        logger.info("Removed item %d: %s (%d left)", sequence_number, removed.name, len(self._items))
        return removed

    def replace_all(self, items: Iterable[LineItem]) -> None:
        """Replace every item, numbering them by their position in `items`."""
        self._items = _renumbered(items)
        logger.info("Replaced quotation items (%d items)", len(self._items))

    def clear(self) -> None:
        self._items = []
        self.transportation_cost = 0.0

    def totals(self, transportation_cost: Optional[float] = None) -> QuotationTotals:
        """Totals over the current items; uses the stored transportation cost unless overridden."""
        if transportation_cost is None:
            transportation_cost = self.transportation_cost
        return compute_totals(self._items, transportation_cost)
