"""Tests for the ``run.py`` command-line driver."""

from __future__ import annotations

import pytest

import run

PAIR_SUM = """-- HUMAN RESOURCE MACHINE PROGRAM --

a:
    INBOX
    COPYTO   0
    INBOX
    ADD      0
    OUTBOX
    JUMP     a
"""


@pytest.fixture
def script(tmp_path):
    path = tmp_path / "pair_sum.hrm"
    path.write_text(PAIR_SUM, encoding="utf-8")
    return path


def test_run_prints_outputs(script, capsys) -> None:
    assert run.main([str(script), "-i", "3", "4", "5", "6"]) == 0

    assert capsys.readouterr().out.strip() == "7 11"


def test_run_with_negative_inputs(script, capsys) -> None:
    assert run.main([str(script), "--inputs", "-3", "4"]) == 0

    assert capsys.readouterr().out.strip() == "1"


def test_run_with_memory_pairs(tmp_path, capsys) -> None:
    path = tmp_path / "copy.hrm"
    path.write_text("COPYFROM 1\nOUTBOX\nCOPYFROM 0\nOUTBOX\n", encoding="utf-8")

    assert run.main([str(path), "-m", "0", "10", "1", "A", "-M", "1"]) == 0

    assert capsys.readouterr().out.strip() == "A 10"


def test_run_with_memory_file(tmp_path, capsys) -> None:
    path = tmp_path / "copy.hrm"
    path.write_text("COPYFROM 4\nOUTBOX\n", encoding="utf-8")
    floor = tmp_path / "floor.txt"
    floor.write_text("4 Z\n", encoding="utf-8")

    assert run.main([str(path), "-m", str(floor)]) == 0

    assert capsys.readouterr().out.strip() == "Z"


def test_run_reports_execution_error(script, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(script), "-i", "A", "B", "--trace", "4"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "cannot add characters" in err
    assert "memory: 0: A" in err
    assert "trace:" in err


def test_run_reports_invalid_jump(tmp_path, capsys) -> None:
    path = tmp_path / "bad.hrm"
    path.write_text("a:\nJUMP b\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path)])

    assert excinfo.value.code == 1
    assert "no block with label 'b'" in capsys.readouterr().err


def test_run_reports_parse_error(tmp_path, capsys) -> None:
    path = tmp_path / "bad.hrm"
    path.write_text("a:\nDANCE\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path)])

    assert excinfo.value.code == 1
    assert "line 2" in capsys.readouterr().err


def test_run_rejects_odd_memory_pairs(script, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(script), "-m", "0", "1", "2"])

    assert excinfo.value.code == 1
    assert "even number" in capsys.readouterr().err


def test_run_missing_script(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(tmp_path / "missing.hrm")])

    assert excinfo.value.code == 2


def test_run_step_limit(tmp_path, capsys) -> None:
    path = tmp_path / "spin.hrm"
    path.write_text("a:\nJUMP a\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        run.main([str(path), "--max-steps", "25"])

    assert "step limit of 25" in capsys.readouterr().err
