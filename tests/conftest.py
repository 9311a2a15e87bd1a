"""Shared test fixtures for docscript."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from docscript.transport import LocalFileTransport
from tests.builders import document, letter_style, paragraph, section_break, table


@pytest.fixture
def simple_document() -> dict[str, Any]:
    """Section break, a heading, a centred paragraph, a 2x2 table and a newline."""
    heading = paragraph(
        1, "Title\n", paragraph_style={"namedStyleType": "HEADING_1", "headingId": "h.1"}
    )
    intro = paragraph(7, "Intro\n", paragraph_style={"alignment": "CENTER"})
    grid = table(13, [["a", "b"], ["c", "d"]])
    return document(
        [
            section_break(end=1, sectionType="CONTINUOUS"),
            heading,
            intro,
            grid,
            paragraph(grid["endIndex"]),
        ],
        document_style=letter_style(flipPageOrientation=False),
    )


@pytest.fixture
def golden_dir(tmp_path: Path, simple_document: dict[str, Any]) -> Path:
    (tmp_path / "source_doc.json").write_text(
        json.dumps(simple_document), encoding="utf-8"
    )
    (tmp_path / "broken_doc.json").write_text(
        json.dumps({"documentId": "broken_doc", "title": "Broken", "body": {}}),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def local_transport(golden_dir: Path) -> LocalFileTransport:
    return LocalFileTransport(golden_dir)
