"""
Integration tests for CLI.
"""

import io
from pathlib import Path

import pytest
from openpyxl import load_workbook

import subsheet.config as config_module
from subsheet.cli import main, parse_args, read_input
from subsheet.config import Config


FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    # keep the user's own config file out of the tests
    monkeypatch.setattr(config_module, "_config", Config())


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.file is None
        assert args.output is None
        assert args.strict is None
        assert args.unwrap is None
        assert args.verbose == 0

    def test_all_flags(self):
        args = parse_args(["in.txt", "-o", "out.xlsx", "--strict", "--no-unwrap", "-vv"])
        assert args.file == "in.txt"
        assert args.output == "out.xlsx"
        assert args.strict is True
        assert args.unwrap is False
        assert args.verbose == 2


class TestReadInput:
    def test_file(self):
        assert "serversTopology" in read_input(str(FIXTURES / "sample_payload.txt"))

    def test_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a": 1}'))
        assert read_input(None) == '{"a": 1}'


class TestMain:
    def test_writes_workbook(self, tmp_path, capsys):
        out = tmp_path / "subscription_data.xlsx"
        code = main([str(FIXTURES / "sample_payload.txt"), "-o", str(out)])
        assert code == 0
        assert "Excel file created successfully" in capsys.readouterr().out
        assert load_workbook(out).sheetnames == ["General Info", "Server Topology"]

    def test_default_output_from_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main([str(FIXTURES / "no_topology.txt")]) == 0
        wb = load_workbook(tmp_path / "subscription_data.xlsx")
        assert wb["Server Topology"]["A1"].value == "No server topology data found"

    def test_stdin_input(self, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('this is my json {"client_id": "x@y.com"}'))
        out = tmp_path / "o.xlsx"
        assert main(["-o", str(out)]) == 0
        assert load_workbook(out)["General Info"]["B2"].value == "x@y.com"

    def test_missing_file(self, tmp_path, capsys):
        code = main([str(tmp_path / "nope.txt"), "-o", str(tmp_path / "o.xlsx")])
        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_empty_input(self, tmp_path, capsys):
        empty = tmp_path / "empty.txt"
        empty.write_text("   \n")
        out = tmp_path / "o.xlsx"
        assert main([str(empty), "-o", str(out)]) == 1
        assert "Error: Please enter JSON data" in capsys.readouterr().err
        assert not out.exists()

    def test_invalid_json(self, tmp_path, capsys):
        bad = tmp_path / "bad.txt"
        bad.write_text('{"a": ')
        assert main([str(bad), "-o", str(tmp_path / "o.xlsx")]) == 1
        assert "Error: Invalid JSON" in capsys.readouterr().err

    def test_strict_flag(self, tmp_path, capsys):
        out = tmp_path / "o.xlsx"
        assert main([str(FIXTURES / "sample_payload.txt"), "-o", str(out), "--strict"]) == 1
        assert "Malformed topology entry 'bad-entry:1'" in capsys.readouterr().err
        assert not out.exists()

    def test_flags_do_not_leak_into_global_config(self, tmp_path):
        main([str(FIXTURES / "sample_payload.txt"), "-o", str(tmp_path / "o.xlsx"), "--strict"])
        assert config_module.get_config().topology.strict is False
