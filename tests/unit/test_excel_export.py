"""
Unit tests for the openpyxl export. Workbooks are read back with openpyxl.
"""

import io

from openpyxl import load_workbook

from subsheet.converter import ConversionResult
from subsheet.excel_export import (
    append_sheet,
    build_workbook,
    cell_value,
    create_workbook,
    serialize,
    write_workbook,
)


def _reload(data: bytes):
    return load_workbook(io.BytesIO(data))


class TestCellValue:
    def test_native_types_pass_through(self):
        for value in (None, True, 3, 2.5, "text"):
            assert cell_value(value) == value

    def test_containers_become_json(self):
        assert cell_value({}) == "{}"
        assert cell_value({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_illegal_characters_removed(self):
        assert cell_value("a\x00b\x07c") == "abc"


class TestWorkbook:
    def test_new_workbook_has_no_sheets(self):
        assert create_workbook().sheetnames == []

    def test_sheets_in_append_order(self):
        wb = create_workbook()
        append_sheet(wb, [["x"]], "General Info")
        append_sheet(wb, [["y"]], "Server Topology")
        assert _reload(serialize(wb)).sheetnames == ["General Info", "Server Topology"]

    def test_values_round_trip(self):
        wb = create_workbook()
        append_sheet(wb, [["Key", "Value"], ["seats", 25], ["active", True], ["gone", None], ["tags", {}]], "General Info")
        ws = _reload(serialize(wb))["General Info"]
        assert [list(r) for r in ws.iter_rows(values_only=True)] == [
            ["Key", "Value"],
            ["seats", 25],
            ["active", True],
            ["gone", None],
            ["tags", "{}"],
        ]

    def test_formula_like_text_stays_text(self):
        wb = create_workbook()
        ws = append_sheet(wb, [["Key", "Value"], ["note", "=SUM(A1:A2)"]], "General Info")
        assert ws["B2"].data_type == "s"
        assert _reload(serialize(wb))["General Info"]["B2"].value == "=SUM(A1:A2)"

    def test_serialize_is_xlsx_zip(self):
        wb = create_workbook()
        append_sheet(wb, [["x"]], "S")
        assert serialize(wb)[:2] == b"PK"


class TestWriteWorkbook:
    def test_writes_both_sheets(self, tmp_path):
        result = ConversionResult(
            general_info=[["Key", "Value"], ["client_id", "a@b.com"]],
            topology=[["No server topology data found"]],
        )
        path = write_workbook(result, tmp_path / "out.xlsx")
        wb = load_workbook(path)
        assert wb.sheetnames == ["General Info", "Server Topology"]
        assert wb["Server Topology"]["A1"].value == "No server topology data found"
        assert wb["General Info"]["B2"].value == "a@b.com"

    def test_build_workbook(self):
        result = ConversionResult(general_info=[["Key", "Value"]], topology=[["h"]])
        assert build_workbook(result).sheetnames == ["General Info", "Server Topology"]
