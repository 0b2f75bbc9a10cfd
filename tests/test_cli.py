import json

import pytest

from ssi.cli import main, parse_lines


def _run(sample_ass, settings_file, out, *extra):
    return main(["--input", str(sample_ass), "--output", str(out), "--settings", str(settings_file), *extra])


def test_parse_lines():
    assert parse_lines("0,3,5-7", 10) == [0, 3, 5, 6, 7]
    assert parse_lines(" 2 , ", 3) == [2]
    with pytest.raises(ValueError):
        parse_lines("9", 3)
    with pytest.raises(ValueError):
        parse_lines("a-b", 3)

def test_run_writes_output_and_prints_selection(sample_ass, settings_file, tmp_path, capsys):
    out = tmp_path / "out.ass"
    assert _run(sample_ass, settings_file, out, "--code", "modify('fs', multiply(2))", "--lines", "0,2") == 0
    assert "{\\fs40}Never gonna {\\fs80}give" in out.read_text(encoding="utf-8")
    assert capsys.readouterr().out.strip().splitlines()[-1] == "0,2"

    logs = list((tmp_path / "logs").glob("*.log"))
    assert len(logs) == 1
    assert "[Interpreter] Processed 2 line(s)" in logs[0].read_text(encoding="utf-8")

def test_code_file_and_style_filter(sample_ass, settings_file, tmp_path, capsys):
    script = tmp_path / "script.py"
    script.write_text("if j == 1:\n    select()\n", encoding="utf-8")
    out = tmp_path / "out.ass"
    assert _run(sample_ass, settings_file, out, "--code-file", str(script), "--style", "Sign") == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] == "1"

def test_last_script_is_reused(sample_ass, settings_file, tmp_path):
    _run(sample_ass, settings_file, tmp_path / "a.ass", "--code", "remove('alpha')")
    assert json.loads(settings_file.read_text(encoding="utf-8"))['last_script'] == "remove('alpha')"
    assert _run(sample_ass, settings_file, tmp_path / "b.ass") == 0
    assert "\\alpha" not in (tmp_path / "b.ass").read_text(encoding="utf-8")

def test_fault_exits_non_zero_without_writing(sample_ass, settings_file, tmp_path, capsys):
    out = tmp_path / "out.ass"
    assert _run(sample_ass, settings_file, out, "--code", "1 / 0") == 1
    assert not out.exists()
    assert "ZeroDivisionError" in capsys.readouterr().out

def test_logs_are_archived(sample_ass, settings_file, tmp_path):
    data = json.loads(settings_file.read_text(encoding="utf-8"))
    data['archive_logs'] = True
    settings_file.write_text(json.dumps(data), encoding="utf-8")
    assert _run(sample_ass, settings_file, tmp_path / "out.ass", "--code", "pass") == 0
    assert list((tmp_path / "logs").glob("*.log")) == []
    assert len(list((tmp_path / "logs" / "archive").glob("*.log"))) == 1

def test_api_help(capsys):
    assert main(["--api-help"]) == 0
    assert "modify(tag, method)" in capsys.readouterr().out

def test_input_and_output_are_required():
    with pytest.raises(SystemExit):
        main(["--code", "pass"])

def test_default_settings_in_working_directory(sample_ass, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "out.ass"
    assert main(["--input", str(sample_ass), "--output", str(out), "--code", "pass"]) == 0
    assert out.exists()
    assert json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))['last_script'] == "pass"
    assert len(list((tmp_path / "logs").glob("*.log"))) == 1
