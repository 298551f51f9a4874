"""
subsheet
Turns a subscription JSON payload (general fields plus the encoded
serversTopology string) into a two-sheet Excel workbook.

Usage:
    from subsheet import convert, convert_to_xlsx
    result = convert(text)          # ConversionResult with two tables
    data = convert_to_xlsx(text)    # .xlsx bytes
"""

from .converter import ConversionResult, convert, convert_to_xlsx
from .errors import ConversionError, EmptyInputError, MalformedEntryError, ParseError

__version__ = "0.1.0"

__all__ = [
    "convert",
    "convert_to_xlsx",
    "ConversionResult",
    "ConversionError",
    "EmptyInputError",
    "ParseError",
    "MalformedEntryError",
]
