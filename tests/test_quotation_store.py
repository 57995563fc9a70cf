"""
Quotation store tests: SL numbering across add, remove and replace.
"""
import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from dataclasses import replace

from quotation_tool.engine import ItemDraft, NotFoundError, QuotationStore, Unit


def draft(name, height=4, width=3, quantity=1, price=500, unit=Unit.FEET, note=None):
    return ItemDraft(
        name=name,
        description=f"{name} description",
        height=height,
        width=width,
        quantity=quantity,
        price_per_area=price,
        unit=unit,
        note=note,
    )


@pytest.fixture
def store():
    """A store holding three items A, B, C."""
    s = QuotationStore()
    s.add_item(draft("A", quantity=2))
    s.add_item(draft("B", height=2000, width=1000, unit=Unit.MILLIMETER))
    s.add_item(draft("C", note="Frosted glass"))
    return s


def sequence_numbers(store):
    return [item.sequence_number for item in store]


def test_add_assigns_next_number():
    s = QuotationStore()
    first = s.add_item(draft("A"))
    second = s.add_item(draft("B"))

    assert first.sequence_number == 1
    assert second.sequence_number == 2
    assert len(s) == 2
    assert s.items[-1] == second


def test_add_keeps_existing_numbers(store):
    before = store.items
    store.add_item(draft("D"))

    assert store.items[:3] == before
    assert sequence_numbers(store) == [1, 2, 3, 4]


def test_add_prices_item(store):
    item = store.get(1)
    assert item.area == 12
    assert item.total_cost == 12000


def test_remove_first_renumbers_rest(store):
    b, c = store.get(2), store.get(3)
    removed = store.remove_item(1)

    assert removed.name == "A"
    assert sequence_numbers(store) == [1, 2]
    assert [item.name for item in store] == ["B", "C"]
    # Only the SL number changes
    assert store.get(1) == replace(b, sequence_number=1)
    assert store.get(2) == replace(c, sequence_number=2)


@pytest.mark.parametrize("n", [1, 2, 5, 8])
def test_remove_any_position_keeps_dense_run(n):
    for k in range(1, n + 1):
        s = QuotationStore()
        for i in range(n):
            s.add_item(draft(f"item-{i}"))
        names = [item.name for item in s]

        s.remove_item(k)

        assert len(s) == n - 1
        assert sequence_numbers(s) == list(range(1, n)), f"Removing {k} of {n} left a gap"
        assert [item.name for item in s] == names[:k - 1] + names[k:]


def test_remove_unknown_is_noop(store):
    before = store.items
    assert store.remove_item(42) is None
    assert store.items == before


def test_remove_unknown_strict_raises(store):
    with pytest.raises(NotFoundError) as excinfo:
        store.remove_item(42, strict=True)
    assert excinfo.value.sequence_number == 42
    assert len(store) == 3


def test_replace_all_renumbers_by_position(store):
    shuffled = [replace(store.get(3), sequence_number=9), replace(store.get(1), sequence_number=9)]
    store.replace_all(shuffled)

    assert sequence_numbers(store) == [1, 2]
    assert [item.name for item in store] == ["C", "A"]


def test_constructor_renumbers(store):
    copy = QuotationStore(reversed(store.items))
    assert sequence_numbers(copy) == [1, 2, 3]
    assert [item.name for item in copy] == ["C", "B", "A"]


def test_totals_recomputed_from_items(store):
    totals = store.totals()
    assert totals.subtotal == sum(item.total_cost for item in store)

    store.remove_item(1)
    assert store.totals().subtotal == sum(item.total_cost for item in store)


def test_totals_use_stored_transportation(store):
    store.transportation_cost = 750
    assert store.totals().transportation_cost == 750
    assert store.totals(transportation_cost=0).transportation_cost == 0


def test_clear(store):
    store.transportation_cost = 100
    store.clear()
    assert len(store) == 0
    assert store.totals().grand_total == 0


def test_stores_are_independent():
    first, second = QuotationStore(), QuotationStore()
    first.add_item(draft("A"))
    assert len(second) == 0


def test_error_hierarchy():
    """Callers can catch the built-in base classes as well."""
    from quotation_tool.engine import DecodeError, QuotationError, ValidationError

    assert issubclass(ValidationError, ValueError)
    assert issubclass(NotFoundError, LookupError)
    for error in (ValidationError, NotFoundError, DecodeError):
        assert issubclass(error, QuotationError)
