"""
Pricing Engine - area, line cost and quotation totals.

All amounts are plain floats. Nothing is rounded here; rounding for
display belongs to whoever renders the numbers, and the workbook must
carry full precision.
"""
from typing import Iterable, Optional

from .models import ItemDraft, LineItem, QuotationTotals
from .units import Unit, to_canonical

# GST applied to every quotation
TAX_RATE = 0.18


def compute_area(height: float, width: float, unit: Unit) -> float:
    """Area in square feet, whatever unit the dimensions were entered in."""
    return to_canonical(height, unit) * to_canonical(width, unit)


def compute_item_cost(area: float, price_per_area: float, quantity: int) -> float:
    return area * price_per_area * quantity


def compute_totals(items: Iterable[LineItem], transportation_cost: Optional[float] = 0.0) -> QuotationTotals:
    """
    Recompute subtotal, tax and grand total from scratch.

    Args:
        items: Line items of the quotation
        transportation_cost: Optional flat charge added after tax

    Returns:
        QuotationTotals for the given items
    """
    subtotal = sum((item.total_cost for item in items), 0.0)
    tax = subtotal * TAX_RATE
    transport = transportation_cost or 0.0
    return QuotationTotals(
        subtotal=subtotal,
        tax=tax,
        transportation_cost=transport,
        grand_total=subtotal + tax + transport,
    )


def price_item(draft: ItemDraft, sequence_number: int) -> LineItem:
    """Turn a submitted draft into a priced line item."""
    area = compute_area(draft.height, draft.width, Unit.parse(draft.unit))
    return LineItem(
        sequence_number=sequence_number,
        name=draft.name,
        description=draft.description,
        height=draft.height,
        width=draft.width,
        quantity=draft.quantity,
        price_per_area=draft.price_per_area,
        area=area,
        total_cost=compute_item_cost(area, draft.price_per_area, draft.quantity),
        note=draft.note or None,
    )
