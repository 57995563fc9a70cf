"""
Workbook Codec - Excel export and import of a quotation.

Layout of the workbook:
- "Customer Details": label in column A, value in column B, one field per row
- "Quotation": header row, one row per line item, then summary rows
  (Subtotal, GST, Transportation, Total Amount) in the last two columns

Summary rows leave the first cell blank, which is how the importer
tells them apart from item rows: only rows whose first cell holds a
number are read back as items.
"""
import asyncio
import io
import logging
import math
import numbers
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from ..engine.errors import DecodeError
from ..engine.models import CustomerDetails, LineItem, QuotationTotals
from ..engine.pricing_engine import TAX_RATE, compute_area, compute_item_cost
from ..engine.units import Unit

logger = logging.getLogger(__name__)

CUSTOMER_SHEET = "Customer Details"
QUOTATION_SHEET = "Quotation"

# 1: no Project Name row, no Note column. 2: current layout.
SCHEMA_VERSION = 2
SCHEMA_VERSION_LABEL = "Schema Version"
GENERATED_ON_LABEL = "Generated On"

# (row label, CustomerDetails field) in sheet order
CUSTOMER_FIELDS = (
    ("Project Name", "project_name"),
    ("Name", "name"),
    ("GST Number", "gst_number"),
    ("Address", "address"),
    ("Phone", "phone"),
    ("Email", "email"),
)


@dataclass(frozen=True)
class Column:
    """One column of the Quotation sheet."""
    index: int
    label: str
    field: str
    kind: str  # "int", "float" or "text"


QUOTATION_COLUMNS = (
    Column(0, "SL No.", "sequence_number", "int"),
    Column(1, "Name", "name", "text"),
    Column(2, "Description", "description", "text"),
    Column(3, "Height", "height", "float"),
    Column(4, "Width", "width", "float"),
    Column(5, "Area (Sq.ft)", "area", "float"),
    Column(6, "Quantity", "quantity", "int"),
    Column(7, "Price/Sq.ft", "price_per_area", "float"),
    Column(8, "Total Cost", "total_cost", "float"),
    Column(9, "Note", "note", "text"),
)
# Note is optional on import (schema 1 files do not have it)
REQUIRED_COLUMNS = 9

WORKBOOK_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_RESTORE_TOLERANCE = 1e-12

_CURRENCY_SUFFIX = re.compile(r"\s*\((₹|Rs\.?|INR)\)$", re.IGNORECASE)

PathLike = Union[str, Path]


# ============================================================================
# FILENAMES
# ============================================================================

def quotation_filename(customer: CustomerDetails, extension: str = "xlsx", on: Optional[date] = None) -> str:
    """
    Build the export filename, e.g. Quotation_Green_Villa_2026-10-19.xlsx.

    Uses the project name, or the customer name when the project is blank.
    """
    on = on or date.today()
    base = (customer.project_name or "").strip() or (customer.name or "").strip()
    parts = ["Quotation"]
    if base:
        parts.append(re.sub(r"\s+", "_", base))
    parts.append(on.isoformat())
    return f"{'_'.join(parts)}.{extension.lstrip('.')}"


# ============================================================================
# ENCODE
# ============================================================================

def _customer_rows(customer: CustomerDetails, generated_on: datetime) -> list[list]:
    rows = [[CUSTOMER_SHEET, None]]
    rows += [[label, getattr(customer, field) or None] for label, field in CUSTOMER_FIELDS]
    rows.append([None, None])
    rows.append([GENERATED_ON_LABEL, generated_on.strftime("%Y-%m-%d %H:%M:%S")])
    rows.append([SCHEMA_VERSION_LABEL, SCHEMA_VERSION])
    return rows


def _quotation_rows(items: Sequence[LineItem], totals: QuotationTotals, transportation_cost: float) -> list[list]:
    width = len(QUOTATION_COLUMNS)
    rows = [[column.label for column in QUOTATION_COLUMNS]]
    for item in items:
        rows.append([
            item.sequence_number,
            item.name,
            item.description or None,
            item.height,
            item.width,
            item.area,
            item.quantity,
            item.price_per_area,
            item.total_cost,
            item.note or None,
        ])

    def summary(label, value):
        return [None] * (width - 2) + [label, value]

    rows.append([None] * width)
    rows.append(summary("Subtotal:", totals.subtotal))
    rows.append(summary(f"GST ({TAX_RATE * 100:g}%):", totals.tax))
    if transportation_cost and transportation_cost > 0:
        rows.append(summary("Transportation:", transportation_cost))
    rows.append(summary("Total Amount:", totals.grand_total))
    return rows


def _keep_text_literal(worksheet) -> None:
    """
    Store every text cell as a plain string.

    openpyxl turns text starting with "=" into a formula and text such as
    "#N/A" into an error code; both would read back empty.
    """
    for row in worksheet.iter_rows():
        for cell in row:
            if isinstance(cell.value, str) and cell.data_type != "s":
                cell.data_type = "s"


def encode(
    customer: CustomerDetails,
    items: Sequence[LineItem],
    totals: QuotationTotals,
    transportation_cost: Optional[float] = None,
    generated_on: Optional[datetime] = None,
) -> bytes:
    """
    Serialize a quotation into .xlsx bytes.

    Args:
        customer: Customer details for the first sheet
        items: Line items in display order
        totals: Totals computed over `items`
        transportation_cost: Overrides totals.transportation_cost when given
        generated_on: Timestamp written to the Generated On row (default: now)

    Returns:
        The workbook file content
    """
    if transportation_cost is None:
        transportation_cost = totals.transportation_cost
    generated_on = generated_on or datetime.now()

    customer_df = pd.DataFrame(_customer_rows(customer, generated_on), dtype=object)
    quotation_df = pd.DataFrame(_quotation_rows(items, totals, transportation_cost), dtype=object)

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        customer_df.to_excel(writer, sheet_name=CUSTOMER_SHEET, header=False, index=False)
        quotation_df.to_excel(writer, sheet_name=QUOTATION_SHEET, header=False, index=False)

        customer_ws = writer.sheets[CUSTOMER_SHEET]
        customer_ws.column_dimensions["A"].width = 18
        customer_ws.column_dimensions["B"].width = 40
        quotation_ws = writer.sheets[QUOTATION_SHEET]
        for ws in (customer_ws, quotation_ws):
            _keep_text_literal(ws)
        for letter, width in zip("ABCDEFGHIJ", (8, 24, 30, 10, 10, 14, 10, 14, 16, 24)):
            quotation_ws.column_dimensions[letter].width = width

    logger.info("Encoded quotation workbook with %d items", len(items))
    return buffer.getvalue()


def save_workbook(
    directory: PathLike,
    customer: CustomerDetails,
    items: Sequence[LineItem],
    totals: QuotationTotals,
    transportation_cost: Optional[float] = None,
) -> Path:
    """Write the workbook into `directory` under its standard filename."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / quotation_filename(customer)
    path.write_bytes(encode(customer, items, totals, transportation_cost))
    logger.info("Saved quotation workbook to %s", path)
    return path


# ============================================================================
# DECODE
# ============================================================================

def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def _text(value) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


def _cell(row: Sequence, index: int):
    return row[index] if index < len(row) else None


def _number(value, column: Column, row_number: int):
    """Numeric cell value; blanks and junk fall back to 0."""
    if _is_number(value):
        return int(value) if column.kind == "int" else value
    text = _text(value).strip()
    if text:
        try:
            parsed = float(text)
            if math.isfinite(parsed):
                return int(parsed) if column.kind == "int" else parsed
        except ValueError:
            pass
    logger.warning("Row %d: %s %r is not a number, using 0", row_number, column.label, value)
    return 0


def _normalize_label(value) -> str:
    return _CURRENCY_SUFFIX.sub("", _text(value).strip()).lower()


def _check_header(header: Sequence) -> None:
    for column in QUOTATION_COLUMNS[:REQUIRED_COLUMNS]:
        found = _cell(header, column.index)
        if _normalize_label(found) != column.label.lower():
            raise DecodeError(
                f"Unexpected '{QUOTATION_SHEET}' header in column {column.index + 1}: "
                f"expected {column.label!r}, found {_text(found)!r}"
            )


def _decode_customer(rows: list[list]) -> CustomerDetails:
    fields = dict((label.lower(), field) for label, field in CUSTOMER_FIELDS)
    values = {}
    for row in rows:
        label = _text(_cell(row, 0)).strip().rstrip(":").strip().lower()
        if label == SCHEMA_VERSION_LABEL.lower():
            version = _cell(row, 1)
            if _is_number(version) and version > SCHEMA_VERSION:
                logger.warning("Workbook schema version %s is newer than %d", version, SCHEMA_VERSION)
        elif label in fields and fields[label] not in values:
            values[fields[label]] = _text(_cell(row, 1))
    return CustomerDetails(**values)


def _restore_derived(values: dict) -> None:
    """
    Put back the full precision of area and total cost.

    Spreadsheet writers keep 16 significant digits, so a stored area is
    replaced by the recomputed one (feet or mm) when the two agree to
    within that rounding. Hand-edited values that don't agree are kept.
    """
    for unit in Unit:
        area = compute_area(values["height"], values["width"], unit)
        if math.isclose(values["area"], area, rel_tol=_RESTORE_TOLERANCE):
            values["area"] = area
            break

    total_cost = compute_item_cost(values["area"], values["price_per_area"], values["quantity"])
    if math.isclose(values["total_cost"], total_cost, rel_tol=_RESTORE_TOLERANCE):
        values["total_cost"] = total_cost


def _decode_items(rows: list[list]) -> list[LineItem]:
    if not rows:
        raise DecodeError(f"Sheet '{QUOTATION_SHEET}' is empty")
    _check_header(rows[0])

    items = []
    for row_number, row in enumerate(rows[1:], start=2):
        if not _is_number(_cell(row, 0)):
            continue
        values = {}
        for column in QUOTATION_COLUMNS[1:]:
            raw = _cell(row, column.index)
            if column.kind == "text":
                values[column.field] = _text(raw)
            else:
                values[column.field] = _number(raw, column, row_number)
        values["note"] = values["note"] or None
        _restore_derived(values)
        # SL No. comes from the row's position, not the stored value
        items.append(LineItem(sequence_number=len(items) + 1, **values))
    return items


def decode(data: Union[bytes, io.BufferedIOBase]) -> tuple[CustomerDetails, list[LineItem]]:
    """
    Read a quotation back from .xlsx content.

    Text comes back exactly as written. Numbers keep the 16 significant
    digits the file stores, so an entered value that needs 17 (e.g.
    0.1 + 0.2) comes back rounded, with area and total cost recomputed
    from the rounded inputs.

    Args:
        data: Workbook bytes or a binary file object

    Returns:
        (customer details, line items renumbered 1..N)

    Raises:
        DecodeError: unreadable workbook, missing sheet or unexpected header
    """
    source = io.BytesIO(data) if isinstance(data, (bytes, bytearray)) else data
    try:
        sheets = pd.read_excel(
            source,
            sheet_name=None,
            header=None,
            dtype=object,
            keep_default_na=False,
            engine="openpyxl",
        )
    except Exception as e:
        raise DecodeError(f"Could not read workbook: {e}") from e

    for name in (CUSTOMER_SHEET, QUOTATION_SHEET):
        if name not in sheets:
            raise DecodeError(f"Workbook has no '{name}' sheet")

    customer = _decode_customer(sheets[CUSTOMER_SHEET].values.tolist())
    items = _decode_items(sheets[QUOTATION_SHEET].values.tolist())
    logger.info("Decoded quotation workbook with %d items", len(items))
    return customer, items


async def read_workbook(path: PathLike) -> tuple[CustomerDetails, list[LineItem]]:
    """Read a workbook file and decode it. OSError from the read propagates."""
    data = await asyncio.to_thread(Path(path).read_bytes)
    return decode(data)
