"""Errors raised by the conversion pipeline."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for anything that stops a conversion."""


class EmptyInputError(ConversionError):
    def __init__(self, message: str = "Please enter JSON data"):
        super().__init__(message)


class ParseError(ConversionError):
    """Repaired text is still not a JSON object. `message` is the decoder's own text."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid JSON: {message}")


class MalformedEntryError(ConversionError):
    """Strict topology mode only: one entry of serversTopology could not be read."""

    def __init__(self, entry: str, reason: str):
        self.entry = entry
        self.reason = reason
        super().__init__(f"Malformed topology entry {entry!r}: {reason}")
