"""Smoke tests for the CLI entrypoint in ``main.py``."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def restore_argv():
    original = sys.argv[:]
    try:
        yield
    finally:
        sys.argv = original


def test_main_requires_input_argument():
    """Invoking ``main.main`` without the mandatory flag exits."""
    sys.argv = ["main"]
    with pytest.raises(SystemExit):
        main_module = importlib.import_module("main")
        main_module.main()


def test_main_reports_missing_files(tmp_path: Path):
    sys.argv = ["main", "--input", str(tmp_path / "missing.dat"), "--config", str(tmp_path / "none.yaml")]

    with pytest.raises(SystemExit) as exc:
        importlib.import_module("main").main()

    assert exc.value.code == 1


def test_main_summarizes_examples(tmp_path: Path, capsys):
    data = tmp_path / "train.dat"
    data.write_text(
        "DET qid:1 1:1 # The\nNOUN qid:1 2:1 # dog\nVERB qid:1 7:1 # ran\n",
        encoding="utf-8",
    )
    config = tmp_path / "config.yaml"
    config.write_text("learn:\n  feature_space_size: 10\n", encoding="utf-8")
    table = tmp_path / "tags.csv"

    sys.argv = ["main", "--input", str(data), "--config", str(config), "--tag-table", str(table)]
    importlib.import_module("main").main()

    out = capsys.readouterr().out
    assert "Examples:            1" in out
    assert "Tags:                3" in out
    assert "Max feature number:  7" in out
    assert "sizePsi:             39" in out
    assert table.read_text(encoding="utf-8").splitlines()[0] == "tag,tag_id,count"
