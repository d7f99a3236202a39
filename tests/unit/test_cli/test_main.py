"""Tests for the spendlens command line interface."""

import json

import pytest

from spendlens.cli.main import build_parser, main
from spendlens.core.preferences import CONFIG_DIR_ENV


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)


@pytest.fixture
def statement(tmp_path, sample_csv_bytes):
    path = tmp_path / "statement.csv"
    path.write_bytes(sample_csv_bytes)
    return path


class TestBuildParser:
    """Tests for argument parsing."""

    def test_analyze_args(self):
        args = build_parser().parse_args(["analyze", "s.csv", "--apr", "24.99", "--json"])
        assert args.command == "analyze"
        assert args.file == "s.csv"
        assert args.apr == 24.99
        assert args.json

    def test_reload_requires_store(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["reload"])


class TestAnalyzeCommand:
    """Tests for `spendlens analyze`."""

    def test_text_output(self, statement, capsys):
        assert main(["analyze", str(statement)]) == 0
        out = capsys.readouterr().out
        assert "Parsed 3 transactions successfully." in out
        assert "Subscriptions" in out
        assert "netflix" in out

    def test_json_output(self, statement, capsys):
        assert main(["analyze", str(statement), "--json", "--apr", "24"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert data["summary"]["by_category"] == {"Gas": "45.23", "Subscriptions": "31.98"}
        assert data["apr"] == "24.0"
        assert data["subscriptions"][0]["merchant"] == "netflix"

    def test_missing_file(self, tmp_path, capsys):
        assert main(["analyze", str(tmp_path / "missing.csv")]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_unsupported_file(self, tmp_path, capsys):
        path = tmp_path / "statement.xlsx"
        path.write_bytes(b"whatever")
        assert main(["analyze", str(path)]) == 1
        assert "Unsupported file type" in capsys.readouterr().out

    def test_export(self, statement, tmp_path, capsys):
        output = tmp_path / "report.csv"
        assert main(["analyze", str(statement), "--export", str(output)]) == 0
        assert output.exists()
        assert "Exported to" in capsys.readouterr().out

    def test_bad_export_format(self, statement, tmp_path, capsys):
        assert main(["analyze", str(statement), "--export", str(tmp_path / "r.pdf")]) == 1
        assert "Export failed" in capsys.readouterr().out

    def test_config_dir_default_apr(self, statement, tmp_path, capsys):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "preferences.json").write_text(json.dumps({"interest": {"default_apr": 12}}))

        assert main(["--config-dir", str(config_dir), "analyze", str(statement), "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["apr"] == "12"


class TestReloadCommand:
    """Tests for `spendlens reload`."""

    def test_store_then_reload(self, statement, tmp_path, capsys):
        store = tmp_path / "store.json"
        assert main(["analyze", str(statement), "--store", str(store)]) == 0
        capsys.readouterr()

        assert main(["reload", "--store", str(store), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["status_message"] == "Loaded 3 stored transactions."
        assert len(data["transactions"]) == 3

    def test_reload_empty_store(self, tmp_path, capsys):
        assert main(["reload", "--store", str(tmp_path / "none.json")]) == 0
        assert "No stored transactions found." in capsys.readouterr().out


class TestMain:
    """Tests for main() dispatch."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_corrupt_store_reports_error(self, tmp_path, capsys):
        store = tmp_path / "store.json"
        store.write_text("{broken")
        assert main(["reload", "--store", str(store)]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_malformed_store_entry_reports_error(self, tmp_path, capsys):
        store = tmp_path / "store.json"
        store.write_text(json.dumps({"transactions": [{"date": "2024-12-01", "description": "X"}]}))
        assert main(["reload", "--store", str(store)]) == 1
        assert "Malformed transaction" in capsys.readouterr().out
