"""
Exception types raised by the quotation engine and workbook codec.

File-system failures are not wrapped: OSError reaches the caller as-is.
"""


class QuotationError(Exception):
    """Base class for all quotation errors."""


class ValidationError(QuotationError, ValueError):
    """A draft item is missing a field or carries a non-numeric dimension.

    Raised by callers before the engine is invoked; the engine trusts its input.
    """


class NotFoundError(QuotationError, LookupError):
    """No line item carries the requested sequence number."""

    def __init__(self, sequence_number: int):
        super().__init__(f"No line item with SL No. {sequence_number}")
        self.sequence_number = sequence_number


class DecodeError(QuotationError):
    """A workbook could not be read back into a quotation."""
