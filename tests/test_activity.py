from __future__ import annotations

import pytest

from sharesaver.activity import ActivityLog


def test_log_evicts_oldest_entries_first() -> None:
    log = ActivityLog(max_entries=3, echo=False)

    for i in range(5):
        log.append(f"msg {i}")

    entries = log.entries()
    assert len(entries) == 3
    assert [e.split("] ", 1)[1] for e in entries] == ["msg 2", "msg 3", "msg 4"]


def test_default_capacity_is_500() -> None:
    log = ActivityLog(echo=False)

    for i in range(501):
        log.append(f"msg {i}")

    assert log.max_entries == 500
    assert len(log) == 500
    assert log.entries()[0].endswith("msg 1")


def test_append_echoes_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    log = ActivityLog()

    log.append("Saved to: out.md")

    assert capsys.readouterr().out == "Saved to: out.md\n"


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ActivityLog(max_entries=0)
