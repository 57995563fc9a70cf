"""Engine subpackage - units, pricing and the quotation store."""
from .errors import QuotationError, ValidationError, NotFoundError, DecodeError
from .models import CustomerDetails, ItemDraft, LineItem, QuotationTotals
from .units import Unit, to_canonical
from .pricing_engine import TAX_RATE, compute_area, compute_item_cost, compute_totals, price_item
from .quotation_store import QuotationStore

__all__ = [
    'QuotationError', 'ValidationError', 'NotFoundError', 'DecodeError',
    'CustomerDetails', 'ItemDraft', 'LineItem', 'QuotationTotals',
    'Unit', 'to_canonical',
    'TAX_RATE', 'compute_area', 'compute_item_cost', 'compute_totals', 'price_item',
    'QuotationStore',
]
