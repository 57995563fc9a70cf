"""
Quotation Tool Package

Builds itemized price quotations for made-to-measure products.
Converts dimensions to square feet, prices each line, adds GST and
round-trips the quotation through a two-sheet Excel workbook.
"""

__version__ = "1.0.0"
