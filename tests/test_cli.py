import json
from pathlib import Path

import pytest

from waitingline.cli import apply_op, main, parse_entry
from waitingline import DequeWaitingLine

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def test_parse_entry() -> None:
    assert parse_entry("42") == 42
    assert parse_entry("-3") == -3
    assert parse_entry("abc") == "abc"


def test_apply_op() -> None:
    q = DequeWaitingLine()
    for x in (3, 1, 2):
        q.enqueue(x)
    assert apply_op(q, "front") == "3"
    assert apply_op(q, "sort") is None
    assert str(q) == "<1,2,3>"
    assert apply_op(q, "position 2") == "1"
    assert apply_op(q, "replace-front 9") == "1"
    assert str(q) == "<9,2,3>"
    with pytest.raises(ValueError):
        apply_op(q, "explode")


def test_run(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["run", "1", "2", "3", "4", "5", "--op", "rotate 2", "--op", "remove 4", "--impl", "linked"])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out == ["<1,2,3,4,5>", "rotate 2: <3,4,5,1,2>", "remove 4 -> 4: <3,5,1,2>"]


def test_run_precondition_failure(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["run", "1", "--op", "dequeue", "--op", "front"])
    captured = capsys.readouterr()
    assert code == 2
    assert "Precondition violated: front: line is empty" in captured.err


def test_run_duplicate_entries(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "1", "1"]) == 2
    assert "already in the line" in capsys.readouterr().err


def test_check_all(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check"]) == 0
    out = capsys.readouterr().out
    assert "DequeWaitingLine" in out
    assert "LinkedWaitingLine" in out


def test_check_file_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", str(EXAMPLES / "list_line.py"), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [r["impl_name"] for r in data["results"]] == ["ListWaitingLine"]
    assert data["load_failures"] == []


def test_check_bad_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.py"
    path.write_text("x = 1\n")
    assert main(["check", str(path)]) == 1
    assert "No concrete WaitingLineSecondary subclass" in capsys.readouterr().out


def test_impls(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["impls"]) == 0
    out = capsys.readouterr().out
    assert "deque" in out and "linked" in out


def test_no_command() -> None:
    assert main([]) == 1


def test_bad_environment(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("WAITINGLINE_LOG_LEVEL", "LOUD")
    assert main(["impls"]) == 1
    assert "WAITINGLINE_LOG_LEVEL" in capsys.readouterr().err
