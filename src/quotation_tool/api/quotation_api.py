"""
Quotation API - FastAPI router for building, exporting and importing a quotation.

Request bodies are validated by pydantic before anything reaches the
engine; the engine itself trusts its input.
"""
import logging
from typing import Literal, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile
from pydantic import BaseModel, Field

from ..config.settings import Settings, get_settings
from ..engine import CustomerDetails, DecodeError, ItemDraft, NotFoundError, QuotationStore, Unit
from ..export import WORKBOOK_MIME, decode, encode, quotation_filename, save_workbook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotation", tags=["quotation"])


# Pydantic models for API
class CustomerIn(BaseModel):
    """Customer details form."""
    project_name: str = ""
    name: str = ""
    gst_number: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""


class ItemIn(BaseModel):
    """Request model for adding an item."""
    name: str = Field(min_length=1)
    description: str = ""
    height: float = Field(gt=0)
    width: float = Field(gt=0)
    quantity: int = Field(default=1, ge=1)
    price_per_area: float = Field(ge=0)
    unit: Literal["feet", "mm"] = "feet"
    note: Optional[str] = None


class TransportationIn(BaseModel):
    transportation_cost: float = Field(ge=0)


class ItemOut(BaseModel):
    """Response model for a priced line item."""
    sequence_number: int
    name: str
    description: str
    height: float
    width: float
    quantity: int
    price_per_area: float
    area: float
    total_cost: float
    note: Optional[str]


class TotalsOut(BaseModel):
    subtotal: float
    tax: float
    transportation_cost: float
    grand_total: float


class QuotationOut(BaseModel):
    """Response model for the whole quotation."""
    customer: CustomerIn
    items: list[ItemOut]
    totals: TotalsOut


def get_store(request: Request) -> QuotationStore:
    """The quotation store owned by this app instance."""
    return request.app.state.store


def get_customer(request: Request) -> CustomerDetails:
    return request.app.state.customer


def _quotation_out(customer: CustomerDetails, store: QuotationStore) -> QuotationOut:
    return QuotationOut(
        customer=CustomerIn(**customer.to_dict()),
        items=[ItemOut(**item.to_dict()) for item in store],
        totals=TotalsOut(**store.totals().to_dict()),
    )


# Endpoints

@router.get("", response_model=QuotationOut)
async def get_quotation(
    store: QuotationStore = Depends(get_store),
    customer: CustomerDetails = Depends(get_customer),
):
    """Current customer, items and totals."""
    return _quotation_out(customer, store)


@router.put("/customer", response_model=CustomerIn)
async def set_customer(details: CustomerIn, request: Request):
    """Replace the customer details."""
    request.app.state.customer = CustomerDetails(**details.model_dump())
    return details


@router.put("/transportation", response_model=TotalsOut)
async def set_transportation(body: TransportationIn, store: QuotationStore = Depends(get_store)):
    """Set the transportation charge and return the new totals."""
    store.transportation_cost = body.transportation_cost
    return TotalsOut(**store.totals().to_dict())


@router.post("/items", response_model=ItemOut, status_code=201)
async def add_item(item: ItemIn, store: QuotationStore = Depends(get_store)):
    """Price an item and append it to the quotation."""
    draft = ItemDraft(
        name=item.name,
        description=item.description,
        height=item.height,
        width=item.width,
        quantity=item.quantity,
        price_per_area=item.price_per_area,
        unit=Unit.parse(item.unit),
        note=item.note,
    )
    created = store.add_item(draft)
    return ItemOut(**created.to_dict())


@router.delete("/items/{sequence_number}", response_model=list[ItemOut])
async def remove_item(sequence_number: int, store: QuotationStore = Depends(get_store)):
    """Remove an item; the remaining items are renumbered."""
    try:
        store.remove_item(sequence_number, strict=True)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [ItemOut(**item.to_dict()) for item in store]


@router.delete("")
async def clear_quotation(request: Request, store: QuotationStore = Depends(get_store)):
    """Start a new quotation."""
    store.clear()
    request.app.state.customer = CustomerDetails()
    return {"success": True, "message": "Quotation cleared"}


@router.get("/export")
async def export_workbook(
    store: QuotationStore = Depends(get_store),
    customer: CustomerDetails = Depends(get_customer),
):
    """Download the quotation as an Excel workbook."""
    content = encode(customer, store.items, store.totals())
    filename = quotation_filename(customer, "xlsx")
    return Response(
        content=content,
        media_type=WORKBOOK_MIME,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.post("/save")
async def save_to_output_dir(
    store: QuotationStore = Depends(get_store),
    customer: CustomerDetails = Depends(get_customer),
    settings: Settings = Depends(get_settings),
):
    """Write the workbook into the configured output directory."""
    path = save_workbook(settings.output_dir, customer, store.items, store.totals())
    return {"success": True, "path": str(path), "filename": path.name}


@router.post("/import", response_model=QuotationOut)
async def import_workbook(
    request: Request,
    file: UploadFile = File(...),
    store: QuotationStore = Depends(get_store),
):
    """Replace the quotation with the contents of an uploaded workbook."""
    data = await file.read()
    try:
        customer, items = decode(data)
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    request.app.state.customer = customer
    store.replace_all(items)
    logger.info("Imported %s: %d items", file.filename, len(store))
    return _quotation_out(customer, store)
