"""
Pricing engine tests: unit conversion, area, line cost and totals.
"""
import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from quotation_tool.engine import (
    ItemDraft,
    TAX_RATE,
    Unit,
    compute_area,
    compute_item_cost,
    compute_totals,
    price_item,
    to_canonical,
)


def make_item(sequence_number, height, width, quantity, price, unit=Unit.FEET, name="Item"):
    draft = ItemDraft(
        name=name,
        description="",
        height=height,
        width=width,
        quantity=quantity,
        price_per_area=price,
        unit=unit,
    )
    return price_item(draft, sequence_number)


def test_feet_is_canonical():
    assert to_canonical(7.25, Unit.FEET) == 7.25


def test_millimeters_convert_to_feet():
    assert to_canonical(304.8, Unit.MILLIMETER) == 1.0
    assert to_canonical(2000, Unit.MILLIMETER) == 2000 / 304.8


def test_negative_values_pass_through():
    """Range checks belong to the caller."""
    assert to_canonical(-304.8, Unit.MILLIMETER) == -1.0


@pytest.mark.parametrize("text,expected", [
    ("feet", Unit.FEET),
    ("ft", Unit.FEET),
    ("FEET", Unit.FEET),
    ("mm", Unit.MILLIMETER),
    (Unit.MILLIMETER, Unit.MILLIMETER),
])
def test_unit_parse(text, expected):
    assert Unit.parse(text) is expected


def test_unit_parse_rejects_unknown():
    with pytest.raises(ValueError):
        Unit.parse("inches")


@pytest.mark.parametrize("height,width", [(4, 3), (2.5, 3.7), (0, 10), (12.75, 0.5)])
def test_area_in_feet_mode(height, width):
    assert compute_area(height, width, Unit.FEET) == height * width


@pytest.mark.parametrize("height,width", [(2000, 1000), (1500.5, 600), (0, 900)])
def test_area_in_mm_mode(height, width):
    assert compute_area(height, width, Unit.MILLIMETER) == (height / 304.8) * (width / 304.8)


def test_item_cost():
    assert compute_item_cost(12, 500, 2) == 12000


def test_price_item_derives_area_and_cost():
    item = make_item(1, 4, 3, 2, 500)
    assert item.sequence_number == 1
    assert item.area == 12
    assert item.total_cost == 12000
    assert item.note is None


def test_price_item_accepts_unit_string():
    draft = ItemDraft(name="Door", description="", height=2000, width=1000,
                      quantity=1, price_per_area=500, unit="mm")
    item = price_item(draft, 3)
    assert item.area == pytest.approx(21.5278, rel=1e-5)


def test_tax_rate_is_fixed():
    assert TAX_RATE == 0.18


def test_totals_sum_item_costs():
    items = [make_item(1, 4, 3, 2, 500), make_item(2, 1, 1, 1, 99.5), make_item(3, 2.5, 3.7, 4, 120)]
    totals = compute_totals(items)

    assert totals.subtotal == sum(item.total_cost for item in items)
    assert totals.tax == totals.subtotal * 0.18
    assert totals.transportation_cost == 0
    assert totals.grand_total == totals.subtotal + totals.tax


def test_totals_order_invariant():
    items = [make_item(1, 4, 3, 2, 500), make_item(2, 2000, 1000, 1, 500, Unit.MILLIMETER), make_item(3, 1, 1, 1, 10)]
    forward = compute_totals(items)
    backward = compute_totals(list(reversed(items)))
    assert forward.subtotal == pytest.approx(backward.subtotal, rel=1e-15)


def test_totals_with_transportation():
    items = [make_item(1, 4, 3, 2, 500)]
    totals = compute_totals(items, transportation_cost=1500)

    assert totals.transportation_cost == 1500
    assert totals.grand_total == 12000 + 12000 * 0.18 + 1500


def test_totals_of_empty_quotation():
    totals = compute_totals([])
    assert totals.subtotal == 0
    assert totals.tax == 0
    assert totals.grand_total == 0


def test_sliding_window_scenario():
    """Mixed feet and mm items priced at 500 per sq.ft."""
    window = make_item(1, 4, 3, 2, 500, name="Sliding Window")
    panel = make_item(2, 2000, 1000, 1, 500, Unit.MILLIMETER, name="Panel")

    assert window.area == 12
    assert window.total_cost == 12000
    assert panel.area == pytest.approx(21.527820833, abs=1e-8)
    assert panel.total_cost == pytest.approx(10763.9104, abs=1e-3)

    totals = compute_totals([window, panel])
    assert totals.subtotal == pytest.approx(22763.9104, abs=1e-3)
    assert totals.tax == pytest.approx(4097.5039, abs=1e-3)
    assert totals.grand_total == pytest.approx(26861.4143, abs=1e-3)
