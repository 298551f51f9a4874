"""
field_classifier.py
Splits a decoded document's top-level keys into scalar entries (General Info
sheet) and picks out the serversTopology string (Server Topology sheet).
Only top-level keys are looked at; nothing is flattened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .document import Document

TOPOLOGY_KEY = "serversTopology"


@dataclass(frozen=True)
class ScalarEntry:
    key: str
    value: Any

    def as_row(self) -> List[Any]:
        return [self.key, self.value]


def is_scalar(value: Any) -> bool:
    """null, str/number/bool, or an empty object. Arrays never count, even empty ones."""
    if value is None:
        return True
    if isinstance(value, list):
        return False
    if isinstance(value, dict):
        return len(value) == 0
    return True


def classify_scalars(doc: Document, skip: Iterable[str] = ()) -> List[ScalarEntry]:
    """Scalar entries in document key order. Keys listed in `skip` are left out."""
    skipped = set(skip)
    return [ScalarEntry(k, v) for k, v in doc.items() if k not in skipped and is_scalar(v)]


def find_topology_field(doc: Document) -> Optional[str]:
    """The serversTopology string, or None when missing, empty or not a string."""
    value = doc.get(TOPOLOGY_KEY)
    if isinstance(value, str) and value:
        return value
    return None
