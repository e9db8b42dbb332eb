"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import patch

import typer
from typer.testing import CliRunner

from idea_insight.cli import main
from idea_insight.core import IdeaClassifier, Taxonomy
from idea_insight.use_cases import AnalysisService, EvidenceGatherer, SynthesisOrchestrator

runner = CliRunner()

cli = typer.Typer()
cli.command()(main)


def offline_service(settings) -> AnalysisService:
    taxonomy = Taxonomy.default()
    return AnalysisService(
        classifier=IdeaClassifier(taxonomy),
        gatherer=EvidenceGatherer(None),
        orchestrator=SynthesisOrchestrator(None, None),
        taxonomy=taxonomy,
    )


def test_short_idea_exits_with_error(tmp_path: Path) -> None:
    """Test invalid input gives a non-zero exit code."""
    with patch("idea_insight.cli.build_service", side_effect=offline_service):
        result = runner.invoke(cli, ["short", "--config", str(tmp_path / "none.yaml")])

    assert result.exit_code == 2
    assert "too short" in result.output


def test_writes_json_result(tmp_path: Path) -> None:
    """Test the result is written to the output file."""
    output = tmp_path / "out" / "result.json"

    with patch("idea_insight.cli.build_service", side_effect=offline_service):
        result = runner.invoke(
            cli,
            [
                "Meditation app for busy parents",
                "--config", str(tmp_path / "none.yaml"),
                "--output", str(output),
            ],
        )

    assert result.exit_code == 0, result.output
    assert "mental_wellness" in result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["classification"]["problem_domain"] == "mental_wellness"
    assert data["confidence"] == "heuristic_fallback"
    assert data["evidence"]["synthetic_count"] == 8
    assert data["evidence"]["quality"] == "synthetic_only"
    assert data["engagement"]["posts_analyzed"] == 0
    assert "Market interest" in result.output
