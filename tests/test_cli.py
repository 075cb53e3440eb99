from __future__ import annotations

from pathlib import Path

import pytest

import run
from sharesaver.errors import UpstreamStatusError


DOC = "# Weekend plans\n\n**Source**: https://chatgpt.com/share/abc\n\n> User: hi\n\n"


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict:
    calls: list[str] = []

    async def fake_convert(reference: str, fetcher=None, settings=None) -> str:
        calls.append(reference)
        return DOC

    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"output:\n  dir: '{tmp_path.as_posix()}'\n", encoding="utf-8")
    monkeypatch.setattr(run, "convert", fake_convert)
    monkeypatch.setattr(run, "_LOCK_FILE", tmp_path / "lock" / "sharesaver.lock")
    return {"calls": calls, "config": str(config_path), "dir": tmp_path}


def test_saves_to_output_path(cli_env: dict) -> None:
    out = cli_env["dir"] / "out.md"

    code = run.run(["https://chatgpt.com/share/abc", "--config", cli_env["config"], "-o", str(out)])

    assert code == 0
    assert out.read_text(encoding="utf-8") == DOC
    assert cli_env["calls"] == ["https://chatgpt.com/share/abc"]
    assert not run._LOCK_FILE.exists()


def test_yes_saves_to_suggested_path(cli_env: dict) -> None:
    code = run.run(["chatgpt.com/share/abc", "--config", cli_env["config"], "--yes"])

    assert code == 0
    assert (cli_env["dir"] / "chatgpt_conversation.md").read_text(encoding="utf-8") == DOC


def test_cancelled_save_writes_nothing(cli_env: dict, capsys: pytest.CaptureFixture[str]) -> None:
    code = run.run(["chatgpt.com/share/abc", "--config", cli_env["config"]], ask=lambda _: "n")

    assert code == 0
    assert not (cli_env["dir"] / "chatgpt_conversation.md").exists()
    assert "Save cancelled" in capsys.readouterr().out


def test_pdf_format_is_not_available(cli_env: dict, capsys: pytest.CaptureFixture[str]) -> None:
    code = run.run(["chatgpt.com/share/abc", "--config", cli_env["config"], "--format", "pdf"])

    assert code == 2
    assert cli_env["calls"] == []
    assert "PDF is not available yet" in capsys.readouterr().out


def test_pipeline_error_is_reported(cli_env: dict, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    async def failing_convert(reference: str, fetcher=None, settings=None) -> str:
        raise UpstreamStatusError("https://r.jina.ai/http://x", 502)

    monkeypatch.setattr(run, "convert", failing_convert)

    code = run.run(["chatgpt.com/share/abc", "--config", cli_env["config"], "--yes"])

    assert code == 1
    assert "Error: Proxy returned HTTP 502" in capsys.readouterr().out
    assert not run._LOCK_FILE.exists()


def test_link_read_from_clipboard(cli_env: dict, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(run, "read_clipboard", lambda: "https://chatgpt.com/share/feed")

    code = run.run(["--config", cli_env["config"], "--yes"])

    assert code == 0
    assert cli_env["calls"] == ["https://chatgpt.com/share/feed"]


def test_missing_link_and_empty_clipboard(cli_env: dict, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(run, "read_clipboard", lambda: None)

    assert run.run(["--config", cli_env["config"]]) == 2
    assert cli_env["calls"] == []


def test_running_instance_blocks_new_download(cli_env: dict) -> None:
    run._LOCK_FILE.parent.mkdir(parents=True, exist_ok=True)
    run._LOCK_FILE.write_text("12345", encoding="utf-8")

    assert run.run(["chatgpt.com/share/abc", "--config", cli_env["config"], "--yes"]) == 1
    assert cli_env["calls"] == []
    assert run._LOCK_FILE.exists()


def test_document_title() -> None:
    assert run.document_title(DOC) == "Weekend plans"
    assert run.document_title("no heading") == ""


def test_empty_config_sections_still_save(cli_env: dict) -> None:
    config_path = cli_env["dir"] / "empty_sections.yaml"
    config_path.write_text("output:\nactivity:\n", encoding="utf-8")
    out = cli_env["dir"] / "out.md"

    code = run.run(["chatgpt.com/share/abc", "--config", str(config_path), "-o", str(out)])

    assert code == 0
    assert out.read_text(encoding="utf-8") == DOC


@pytest.mark.parametrize(
    "content",
    [
        "activity:\n  max_entries: abc\n",
        "activity:\n  max_entries: 0\n",
        "output: somewhere\n",
    ],
)
def test_invalid_config_is_reported(cli_env: dict, capsys: pytest.CaptureFixture[str], content: str) -> None:
    config_path = cli_env["dir"] / "bad.yaml"
    config_path.write_text(content, encoding="utf-8")

    code = run.run(["chatgpt.com/share/abc", "--config", str(config_path), "--yes"])

    assert code == 2
    assert cli_env["calls"] == []
    assert "Error: invalid configuration" in capsys.readouterr().out
