"""
Data models for the quotation engine.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, asdict
from typing import Optional

from .units import Unit


@dataclass
class CustomerDetails:
    """Who the quotation is for. Free text; formats are checked by the UI."""
    project_name: str = ""
    name: str = ""
    gst_number: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ItemDraft:
    """An item as submitted by the add-item form, before pricing."""
    name: str
    description: str
    height: float
    width: float
    quantity: int
    price_per_area: float
    unit: Unit = Unit.FEET
    note: Optional[str] = None


@dataclass(frozen=True)
class LineItem:
    """A priced line of the quotation. Area is in square feet."""
    sequence_number: int
    name: str
    description: str
    height: float
    width: float
    quantity: int
    price_per_area: float
    area: float
    total_cost: float
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class QuotationTotals:
    """Aggregate amounts for a list of line items."""
    subtotal: float
    tax: float
    transportation_cost: float
    grand_total: float

    def to_dict(self) -> dict:
        return asdict(self)
