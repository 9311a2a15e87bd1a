"""Tests for the CLI commands and URL parsing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import docscript.__main__ as cli
from docscript.config import get_settings
from docscript.transport import LocalFileTransport


@pytest.fixture(autouse=True)
def _isolated_cli(monkeypatch: pytest.MonkeyPatch):
    """Keep the CLI away from real credentials and global log setup."""
    monkeypatch.delenv("DOCSCRIPT_ACCESS_TOKEN", raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_parse_document_id_from_url() -> None:
    """Should extract document ID from a Docs URL."""
    url = "https://docs.google.com/document/d/1abc_xyz-9/edit#heading=h.1"
    assert cli.parse_document_id(url) == "1abc_xyz-9"


def test_parse_document_id_plain() -> None:
    """Should return plain document IDs unchanged."""
    assert cli.parse_document_id("1abc_xyz") == "1abc_xyz"


class TestCompileCommand:
    def test_local_json_to_stdout(self, golden_dir: Path, capsys) -> None:
        exit_code = cli.main(["compile", str(golden_dir / "source_doc.json")])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert "updateTextStyle" in output["requests"][0]
        assert any("insertTable" in r for r in output["requests"])

    def test_local_json_to_file(self, golden_dir: Path, tmp_path: Path) -> None:
        target = tmp_path / "requests.json"
        exit_code = cli.main(
            ["compile", str(golden_dir / "source_doc.json"), "--output", str(target)]
        )

        assert exit_code == 0
        assert len(json.loads(target.read_text())["requests"]) > 5

    def test_compile_failure(self, golden_dir: Path, capsys) -> None:
        exit_code = cli.main(["compile", str(golden_dir / "broken_doc.json")])

        assert exit_code == 1
        assert "Compilation failed" in capsys.readouterr().err

    def test_invalid_local_json(self, tmp_path: Path, capsys) -> None:
        source = tmp_path / "bad.json"
        source.write_text("{not json", encoding="utf-8")

        exit_code = cli.main(["compile", str(source)])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.err.startswith("Error: cannot read")
        assert captured.out == ""

    def test_remote_document_needs_token(self, capsys) -> None:
        exit_code = cli.main(["compile", "1abc_xyz"])

        assert exit_code == 1
        assert "DOCSCRIPT_ACCESS_TOKEN" in capsys.readouterr().err


class TestReplicateCommand:
    def test_prints_new_document_id(
        self,
        monkeypatch: pytest.MonkeyPatch,
        local_transport: LocalFileTransport,
        capsys,
    ) -> None:
        monkeypatch.setattr(cli, "_create_transport", lambda settings: local_transport)

        exit_code = cli.main(
            ["replicate", "https://docs.google.com/document/d/source_doc/edit"]
        )

        assert exit_code == 0
        new_id = capsys.readouterr().out.strip()
        assert new_id == local_transport.created[0].document_id
        assert new_id in local_transport.applied

    def test_replicate_failure(
        self,
        monkeypatch: pytest.MonkeyPatch,
        local_transport: LocalFileTransport,
        capsys,
    ) -> None:
        monkeypatch.setattr(cli, "_create_transport", lambda settings: local_transport)

        exit_code = cli.main(["replicate", "broken_doc"])

        assert exit_code == 1
        assert "Replicate failed" in capsys.readouterr().err
        assert local_transport.created == []

    def test_missing_token(self, capsys) -> None:
        assert cli.main(["replicate", "source_doc"]) == 1
        assert "DOCSCRIPT_ACCESS_TOKEN" in capsys.readouterr().err
