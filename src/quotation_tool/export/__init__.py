"""Export subpackage - workbook round-trip and export filenames."""
from .workbook_codec import (
    CUSTOMER_SHEET,
    QUOTATION_SHEET,
    SCHEMA_VERSION,
    WORKBOOK_MIME,
    decode,
    encode,
    quotation_filename,
    read_workbook,
    save_workbook,
)

__all__ = [
    'CUSTOMER_SHEET', 'QUOTATION_SHEET', 'SCHEMA_VERSION', 'WORKBOOK_MIME',
    'decode', 'encode', 'quotation_filename', 'read_workbook', 'save_workbook',
]
