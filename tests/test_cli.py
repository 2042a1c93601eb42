import json

from csvshape.__main__ import main


def test_cli_file_records(tmp_path, capsys):
    p = tmp_path / "data.csv"
    p.write_text("a,b\n1,2\n3,4\n", encoding="utf-8")
    assert main([str(p)]) == 0
    assert json.loads(capsys.readouterr().out) == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_cli_inline_json_with_root(capsys):
    assert main(["--text", "a;b\n1;2", "-d", ";", "-o", "json", "--root-name", "data"]) == 0
    assert json.loads(capsys.readouterr().out) == {"data": {"a": "1", "b": "2"}}


def test_cli_resultset(capsys):
    assert main(["--text", "a,a\n1,2", "-o", "resultset"]) == 0
    assert json.loads(capsys.readouterr().out) == {"columns": ["a", "a1"], "rows": [["1", "2"]]}


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 2
    assert "csvshape:" in capsys.readouterr().err


def test_cli_tab_delimiter_escape(capsys):
    assert main(["--text", "a\tb\n1\t2", "-d", "\\t"]) == 0
    assert json.loads(capsys.readouterr().out) == [{"a": "1", "b": "2"}]


def test_cli_cleanup_overrides_environment(monkeypatch, capsys):
    monkeypatch.setenv("CSVSHAPE_CLEANUP_COLUMNS", "off")
    assert main(["--text", "first name\nJo"]) == 0
    assert json.loads(capsys.readouterr().out) == [{"first name": "Jo"}]
    assert main(["--text", "first name\nJo", "--cleanup"]) == 0
    assert json.loads(capsys.readouterr().out) == [{"first_name": "Jo"}]


def test_cli_unknown_log_level_does_not_crash(monkeypatch, capsys):
    monkeypatch.setenv("CSVSHAPE_LOG_LEVEL", "verbose")
    assert main(["--text", "a\n1"]) == 0
    assert json.loads(capsys.readouterr().out) == [{"a": "1"}]
