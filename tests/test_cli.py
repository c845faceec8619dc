import json

import pytest

from diffjson.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DIFFJSON_CONFIG", "DIFFJSON_IGNORE_ORDER", "DIFFJSON_INDENT", "DIFFJSON_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_checkdiff_prints_report(tmp_path, capsys):
    first = _write(tmp_path, "a.json", {"x": 1, "y": [1, 2]})
    second = _write(tmp_path, "b.json", {"x": 2, "z": [1, 2]})
    assert main(["checkdiff", "--f1", first, "--f2", second]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output == {
        "isdiff": True,
        "diff": [
            {"key": "x", "type": "changed", "value1": 1, "value2": 2},
            {"key": "y", "type": "only_in_first", "filename": first, "value1": [1, 2]},
            {"key": "z", "type": "only_in_second", "filename": second, "value2": [1, 2]},
        ],
    }


def test_checkdiff_identical_files(tmp_path, capsys):
    first = _write(tmp_path, "a.json", {"a": [1, 2]})
    second = _write(tmp_path, "b.json", {"a": [1, 2]})
    assert main(["checkdiff", "--f1", first, "--f2", second]) == 0
    assert json.loads(capsys.readouterr().out) == {"isdiff": False, "diff": []}


def test_checkdiff_ignore_order(tmp_path, capsys):
    first = _write(tmp_path, "a.json", [{"a": 1}, {"a": 2}])
    second = _write(tmp_path, "b.json", [{"a": 2}, {"a": 1}])
    assert main(["checkdiff", "--f1", first, "--f2", second, "--ignore-order"]) == 0
    assert json.loads(capsys.readouterr().out)["isdiff"] is False

    assert main(["checkdiff", "--f1", first, "--f2", second]) == 0
    keys = [record["key"] for record in json.loads(capsys.readouterr().out)["diff"]]
    assert keys == ["[0].a", "[1].a"]


def test_checkdiff_ignore_order_from_config(tmp_path, capsys):
    config = tmp_path / "diffjson.yaml"
    config.write_text("ignore_array_order: true\nindent: 4\n", encoding="utf-8")
    first = _write(tmp_path, "a.json", [1, 2, 3])
    second = _write(tmp_path, "b.json", [3, 2, 1, 4])
    assert main(["checkdiff", "--f1", first, "--f2", second, "--config", str(config)]) == 0
    text = capsys.readouterr().out
    assert text.startswith('{\n    "isdiff": true')
    assert json.loads(text)["diff"] == [
        {"key": "[3]", "type": "only_in_second", "filename": second, "value2": 4},
    ]


def test_checkdiff_missing_file(tmp_path, capsys):
    first = _write(tmp_path, "a.json", {})
    missing = str(tmp_path / "missing.json")
    assert main(["checkdiff", "--f1", first, "--f2", missing]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"Error reading {missing}" in captured.err


def test_checkdiff_malformed_file(tmp_path, capsys):
    first = tmp_path / "a.json"
    first.write_text("{not json", encoding="utf-8")
    second = _write(tmp_path, "b.json", {})
    assert main(["checkdiff", "--f1", str(first), "--f2", second]) == 1
    assert "Error reading" in capsys.readouterr().err


def test_checkdiff_bad_config(tmp_path, capsys):
    first = _write(tmp_path, "a.json", {})
    assert main(["checkdiff", "--f1", first, "--f2", first, "--config", str(tmp_path / "nope.yaml")]) == 1
    assert "Error loading config" in capsys.readouterr().err


def test_checkdiff_requires_both_files(tmp_path):
    first = _write(tmp_path, "a.json", {})
    with pytest.raises(SystemExit) as excinfo:
        main(["checkdiff", "--f1", first])
    assert excinfo.value.code == 2


def test_missing_subcommand(capsys):
    assert main([]) == 1
    assert "checkdiff" in capsys.readouterr().err
