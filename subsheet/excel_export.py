"""
excel_export.py
Writes row-list tables into an .xlsx workbook with openpyxl.

Usage:
    wb = create_workbook()
    append_sheet(wb, table, "General Info")
    data = serialize(wb)
"""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence, Union

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

if TYPE_CHECKING:
    from .converter import ConversionResult

log = logging.getLogger(__name__)

GENERAL_INFO_SHEET = "General Info"
TOPOLOGY_SHEET = "Server Topology"


def cell_value(value: Any) -> Any:
    """Map a table value onto something openpyxl can store."""
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (dict, list)):
        value = json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    elif not isinstance(value, str):
        value = str(value)
    return ILLEGAL_CHARACTERS_RE.sub('', value)


def create_workbook() -> Workbook:
    wb = Workbook()
    # openpyxl starts every workbook with a blank "Sheet"
    wb.remove(wb.active)
    return wb


def append_sheet(workbook: Workbook, table: Sequence[Sequence[Any]], sheet_name: str):
    ws = workbook.create_sheet(title=sheet_name)
    for r, row in enumerate(table, start=1):
        for c, value in enumerate(row, start=1):
            v = cell_value(value)
            cell = ws.cell(row=r, column=c, value=v)
            if isinstance(v, str) and v.startswith('='):
                # payload text, not a formula
                cell.data_type = 's'
    return ws


def serialize(workbook: Workbook) -> bytes:
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


def build_workbook(result: "ConversionResult") -> Workbook:
    wb = create_workbook()
    append_sheet(wb, result.general_info, GENERAL_INFO_SHEET)
    append_sheet(wb, result.topology, TOPOLOGY_SHEET)
    return wb


def write_workbook(result: "ConversionResult", path: Union[str, Path]) -> Path:
    path = Path(path)
    data = serialize(build_workbook(result))
    path.write_bytes(data)
    log.info("wrote %s (%d bytes)", path, len(data))
    return path
