"""
converter.py
Subscription payload -> General Info / Server Topology tables.

Pipeline:
    raw text -> repair -> json decode -> {scalar fields, topology string}
             -> topology rows -> two tables -> (optional) xlsx bytes

Every call builds its own objects; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import Config, get_config
from .document import load_document
from .excel_export import build_workbook, serialize
from .field_classifier import TOPOLOGY_KEY, classify_scalars, find_topology_field
from .tables import Table, build_general_info_table, build_topology_table
from .topology import decode_topology

log = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    general_info: Table = field(default_factory=list)
    topology: Table = field(default_factory=list)


def convert(raw: str, config: Optional[Config] = None) -> ConversionResult:
    """
    Raises EmptyInputError / ParseError (and MalformedEntryError in strict mode).
    Missing or malformed topology data never raises in the default mode.
    """
    cfg = config or get_config()
    doc = load_document(raw, unwrap=cfg.input.unwrap_markup)

    topology_raw = find_topology_field(doc)
    # a string serversTopology (even "") belongs to the topology sheet, never General Info
    skip = (TOPOLOGY_KEY,) if isinstance(doc.get(TOPOLOGY_KEY), str) else ()
    entries = classify_scalars(doc, skip=skip)
    decoded = decode_topology(topology_raw, strict=cfg.topology.strict)

    result = ConversionResult(
        general_info=build_general_info_table(entries),
        topology=build_topology_table(decoded.rows, decoded.had_data),
    )
    log.info(
        "converted payload: %d general fields, %d topology rows%s",
        len(entries), len(decoded.rows), "" if decoded.had_data else " (no topology)",
    )
    return result


def convert_to_xlsx(raw: str, config: Optional[Config] = None) -> bytes:
    return serialize(build_workbook(convert(raw, config)))
