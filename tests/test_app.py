"""
Tests for the jobcatalog command line.
"""

import json
from unittest.mock import patch

import pytest

from jobcatalog import __version__
from jobcatalog.app import main
from jobcatalog.schema import decode


ENV_VARS = [
    "JOBCATALOG_SOURCE",
    "JOBCATALOG_LOG_LEVEL",
    "JOBCATALOG_LOG_DIR",
    "JOBCATALOG_HTTP_TIMEOUT",
    "JOBCATALOG_MAX_RETRIES",
]


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep .env lookup and JOBCATALOG_* settings away from the real environment."""
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestValidate:

    def test_valid_file(self, catalog_file, capsys):
        main(["validate", "--input", str(catalog_file)])
        assert "Valid (3 entries)" in capsys.readouterr().out

    def test_invalid_file_exits_2(self, tmp_path, welder_payload, capsys):
        welder_payload["entries"][0]["key"] = "one"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(welder_payload), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            main(["validate", "--input", str(path)])

        assert exc.value.code == 2
        out = capsys.readouterr().out
        assert "TypeMismatch" in out
        assert "key" in out

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["validate", "--input", str(tmp_path / "missing.json")])
        assert "missing.json" in str(exc.value.code)

    def test_no_source(self):
        with pytest.raises(SystemExit) as exc:
            main(["validate"])
        assert "JOBCATALOG_SOURCE" in str(exc.value.code)

    def test_source_from_env(self, catalog_file, monkeypatch, capsys):
        monkeypatch.setenv("JOBCATALOG_SOURCE", str(catalog_file))
        main(["validate"])
        assert "Valid (3 entries)" in capsys.readouterr().out

    def test_url_source(self, welder_payload, capsys):
        with patch("jobcatalog.app.fetch_collection", return_value=decode(welder_payload)) as fetch:
            main(["validate", "--url", "https://example.com/jobs.json"])
        fetch.assert_called_once()
        assert fetch.call_args.args[0] == "https://example.com/jobs.json"
        assert "Valid (1 entries)" in capsys.readouterr().out


class TestList:

    def test_prints_entries_in_order(self, catalog_file, capsys):
        main(["list", "--input", str(catalog_file)])
        out = capsys.readouterr().out
        assert out.index("Painter") < out.index("Welder") < out.index("Inspector")
        assert "Tools: torch, mask" in out
        assert "Link: https://example.com/welder" in out

    def test_empty_catalog(self, tmp_path, capsys):
        path = tmp_path / "empty.json"
        path.write_text('{"entries": []}', encoding="utf-8")
        main(["list", "--input", str(path)])
        assert "No entries" in capsys.readouterr().out

    def test_schema_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"items": []}', encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["list", "--input", str(path)])
        assert "MissingCollectionField" in str(exc.value.code)


class TestExport:

    def test_export_round_trip(self, catalog_file, tmp_path, multi_payload):
        out = tmp_path / "export" / "catalog.json"
        main(["export", "--input", str(catalog_file), "--output", str(out)])
        assert json.loads(out.read_text(encoding="utf-8")) == multi_payload

    def test_export_unwritable(self, catalog_file, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            main(["export", "--input", str(catalog_file), "--output", str(blocker / "out.json")])
        assert "Cannot write catalog file" in str(exc.value.code)


class TestMisc:

    def test_version(self, capsys):
        main(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_input_and_url_exclusive(self, catalog_file):
        with pytest.raises(SystemExit):
            main(["validate", "--input", str(catalog_file), "--url", "https://example.com"])

    def test_bad_log_level_env(self, catalog_file, monkeypatch):
        monkeypatch.setenv("JOBCATALOG_LOG_LEVEL", "verbose")
        with pytest.raises(SystemExit) as exc:
            main(["validate", "--input", str(catalog_file)])
        assert "JOBCATALOG_LOG_LEVEL" in str(exc.value.code)

    def test_bad_log_level_flag(self, catalog_file):
        with pytest.raises(SystemExit) as exc:
            main(["--log-level", "verbose", "validate", "--input", str(catalog_file)])
        assert "--log-level" in str(exc.value.code)

    def test_negative_retries_env(self, monkeypatch):
        monkeypatch.setenv("JOBCATALOG_MAX_RETRIES", "-1")
        with pytest.raises(SystemExit) as exc:
            main(["validate", "--url", "https://example.com/jobs.json"])
        assert "JOBCATALOG_MAX_RETRIES" in str(exc.value.code)
