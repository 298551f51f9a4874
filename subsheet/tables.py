"""
tables.py
Row-list tables for the two sheets. The first row is always the header.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from .field_classifier import ScalarEntry
from .topology import TopologyRow

Table = List[List[Any]]

GENERAL_INFO_HEADER = ["Key", "Value"]
TOPOLOGY_HEADER = ["Server Name", "Provider", "Status", "Type", "Updated?"]
NO_TOPOLOGY_PLACEHOLDER = "No server topology data found"


def build_general_info_table(entries: Sequence[ScalarEntry]) -> Table:
    # values keep their JSON type; the exporter decides how to store them
    return [list(GENERAL_INFO_HEADER)] + [e.as_row() for e in entries]


def build_topology_table(rows: Sequence[TopologyRow], had_data: bool) -> Table:
    if not had_data:
        return [[NO_TOPOLOGY_PLACEHOLDER]]
    table: Table = [list(TOPOLOGY_HEADER)]
    for r in rows:
        table.append([r.server_name, r.provider, r.status, r.server_type, "Yes" if r.updated else "No"])
    return table
