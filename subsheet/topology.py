"""
topology.py
Decoder for the serversTopology string.

Grammar (no escaping of any kind):
    topology := '[' entry (',' entry)* ']'
    entry    := name '-' provider '-' status '-' type ':' flag

- The first and last characters are dropped without checking that they are
  brackets.
- Entries are split on every ',', so a comma inside a field splits the entry.
- Only segments 1-4 of the hyphen split are used; a name containing '-' shifts
  the columns and extra segments are ignored.
- flag == "1" means updated; anything else (including a missing flag) does not.

Entries with fewer than four segments are dropped. Entries without exactly one
':' are kept with updated=False. Strict mode raises MalformedEntryError for
both instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import MalformedEntryError

log = logging.getLogger(__name__)

MIN_SEGMENTS = 4


@dataclass(frozen=True)
class TopologyRow:
    server_name: str
    provider: str
    status: str
    server_type: str
    updated: bool


@dataclass
class TopologyDecode:
    rows: List[TopologyRow] = field(default_factory=list)
    had_data: bool = False


def parse_entry(entry: str, strict: bool = False) -> Optional[TopologyRow]:
    """One `name-provider-status-type:flag` entry, or None when it is dropped."""
    parts = entry.split(':')
    if len(parts) == 2:
        server_info, flag = parts
    else:
        if strict:
            raise MalformedEntryError(entry, f"expected exactly one ':', found {len(parts) - 1}")
        server_info, flag = parts[0], None

    segments = server_info.split('-')
    if len(segments) < MIN_SEGMENTS:
        if strict:
            raise MalformedEntryError(entry, f"expected {MIN_SEGMENTS} '-' separated fields, found {len(segments)}")
        log.debug("dropping topology entry %r (%d segments)", entry, len(segments))
        return None

    name, provider, status, server_type = segments[:MIN_SEGMENTS]
    return TopologyRow(name, provider, status, server_type, updated=(flag == "1"))


def decode_topology(raw: Optional[str], strict: bool = False) -> TopologyDecode:
    if raw is None:
        return TopologyDecode(rows=[], had_data=False)

    body = raw[1:-1]
    rows = []
    for entry in body.split(','):
        row = parse_entry(entry, strict=strict)
        if row is not None:
            rows.append(row)
    return TopologyDecode(rows=rows, had_data=True)
