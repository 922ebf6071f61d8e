"""End-to-end tests for the command line interface.

The placeholder provider is forced through ``LLM_PROVIDER`` so every
search runs on the local fallback expansion.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from catalogflow.cli import main


@pytest.fixture
def courses_file(tmp_path: Path, course_rows) -> Path:
    path = tmp_path / "courses.json"
    path.write_text(json.dumps(course_rows, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def offline(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "placeholder")
    # No config.yaml in the working directory
    monkeypatch.chdir(tmp_path)


def test_search_writes_json_response(courses_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "results.json"
    main(["search", "--courses", str(courses_file), "--query", "licitação", "--out", str(out)])
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["query"]["original"] == "licitação"
    assert data["query"]["usedFallback"] is True
    assert [r["id"] for r in data["results"]] == ["3"]
    assert data["meta"]["totalSearched"] == 3


def test_search_with_filter_prints_report(courses_file: Path, capsys: pytest.CaptureFixture) -> None:
    main(["search", "--courses", str(courses_file), "--query", "pregão eletrônico", "--empresa", "JML"])
    output = capsys.readouterr().out
    assert "Found 0 of 2 courses" in output


def test_report_from_saved_results(courses_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    out = tmp_path / "results.json"
    main(["search", "--courses", str(courses_file), "--query", "pregão eletrônico", "--out", str(out)])
    capsys.readouterr()
    main(["report", "--results", str(out), "--limit", "5"])
    output = capsys.readouterr().out
    assert "01. Pregão Eletrônico: Licitação e Contratos [Conecta]" in output
    assert "local fallback used" in output


def test_expand_prints_fallback_json(capsys: pytest.CaptureFixture) -> None:
    main(["expand", "--query", "compras públicas"])
    data = json.loads(capsys.readouterr().out)
    assert data["expandedTerms"] == ["compras públicas", "compras", "públicas"]
    assert data["usedFallback"] is True


def test_config_file_changes_threshold(courses_file: Path, tmp_path: Path) -> None:
    config = tmp_path / "strict.yaml"
    config.write_text("search:\n  min_score: 1000\n", encoding="utf-8")
    out = tmp_path / "results.json"
    main(["search", "--courses", str(courses_file), "--query", "licitação", "--config", str(config), "--out", str(out)])
    assert json.loads(out.read_text(encoding="utf-8"))["results"] == []


def test_expand_accepts_config(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    config = tmp_path / "llm.yaml"
    config.write_text("llm:\n  provider: placeholder\n", encoding="utf-8")
    main(["expand", "--query", "pregão", "--config", str(config)])
    assert json.loads(capsys.readouterr().out)["usedFallback"] is True


def test_search_yaml_export_with_timestamps(tmp_path: Path) -> None:
    courses = tmp_path / "courses.yaml"
    courses.write_text(
        "- id: 3\n"
        "  titulo: Pregão Eletrônico\n"
        "  status: published\n"
        "  createdAt: 2024-05-01T10:00:00Z\n",
        encoding="utf-8",
    )
    out = tmp_path / "results.json"
    main(["search", "--courses", str(courses), "--query", "pregão", "--out", str(out)])
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["results"][0]["createdAt"].startswith("2024-05-01")
