"""
document.py
Raw text -> decoded subscription document (a plain dict).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from .errors import EmptyInputError, ParseError
from .input_repair import repair

log = logging.getLogger(__name__)

Document = Dict[str, Any]


def ensure_input(raw: str) -> str:
    """Reject empty or whitespace-only input before any parsing."""
    if raw is None or not raw.strip():
        raise EmptyInputError()
    return raw


def _reject_constant(name: str):
    # json.loads lets NaN / Infinity / -Infinity through; they are not JSON
    raise ValueError(f"{name} is not a valid JSON value")


def decode(text: str) -> Document:
    """Strict json.loads; the top-level value has to be an object."""
    try:
        doc = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        log.debug("decode failed at line %d col %d", e.lineno, e.colno)
        raise ParseError(str(e)) from e
    except ValueError as e:
        raise ParseError(str(e)) from e
    if not isinstance(doc, dict):
        raise ParseError(f"expected a JSON object, got {type(doc).__name__}")
    return doc


def load_document(raw: str, unwrap: bool = True) -> Document:
    ensure_input(raw)
    return decode(repair(raw, unwrap=unwrap))
