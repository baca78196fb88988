"""Tests for the docgraph command line."""

import json
import os

import pytest
from typer.testing import CliRunner

from docgraph.main import app

runner = CliRunner()


@pytest.fixture
def corpus(write_docs):
    return write_docs({
        "a.md": "# A\n\n[b](b.md)\n",
        "b.md": "# B\n\n[c](c.md) [gone](missing.md)\n",
        "c.md": "# C\n",
        "island.md": "# Island\n",
    })


def test_analyze_summary(corpus):
    """Test the analyze summary report."""
    result = runner.invoke(app, ["analyze", str(corpus)])

    assert result.exit_code == 0
    assert "Documents: 4" in result.stdout
    assert "Corpus health:" in result.stdout
    assert "Broken links: 1" in result.stdout
    assert "Missing backlinks: 2" in result.stdout


def test_analyze_json(corpus):
    """Test analyze --json output."""
    result = runner.invoke(app, ["analyze", str(corpus), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert len(data["nodes"]) == 4
    assert len(data["broken_links"]) == 1


def test_analyze_empty_folder(tmp_path):
    """Test analyze on a folder without markdown."""
    result = runner.invoke(app, ["analyze", str(tmp_path)])

    assert result.exit_code == 0
    assert "No markdown files found" in result.stdout


def test_analyze_missing_folder(tmp_path):
    """Test that a missing folder exits with status 2."""
    result = runner.invoke(app, ["analyze", str(tmp_path / "nowhere")])

    assert result.exit_code == 2
    assert "Error" in result.stdout


def test_reach(corpus):
    """Test reach --json distances."""
    result = runner.invoke(app, ["reach", str(corpus), str(corpus / "a.md"), "--json"])

    assert result.exit_code == 0
    distances = json.loads(result.stdout)
    assert distances == {
        os.path.abspath(corpus / "a.md"): 0,
        os.path.abspath(corpus / "b.md"): 1,
        os.path.abspath(corpus / "c.md"): 2,
    }


def test_reach_text(corpus):
    """Test the reach text report."""
    result = runner.invoke(app, ["reach", str(corpus), str(corpus / "a.md")])

    assert result.exit_code == 0
    assert "Reachable from A: 3/4" in result.stdout
    assert "2  c.md" in result.stdout


def test_reach_unknown_entry(corpus):
    """Test that an unknown entry exits with status 1."""
    result = runner.invoke(app, ["reach", str(corpus), str(corpus / "missing.md")])

    assert result.exit_code == 1


def test_path(corpus):
    """Test the printed shortest path."""
    result = runner.invoke(app, ["path", str(corpus), str(corpus / "a.md"), str(corpus / "c.md")])

    assert result.exit_code == 0
    rows = [line.split() for line in result.stdout.splitlines() if line.strip()]
    assert rows == [["0", "a.md"], ["1", "b.md"], ["2", "c.md"]]


def test_path_unreachable(corpus):
    """Test that no path exits with status 1."""
    result = runner.invoke(
        app, ["path", str(corpus), str(corpus / "a.md"), str(corpus / "island.md")]
    )

    assert result.exit_code == 1
    assert "No path" in result.stdout


def test_export_json_default_location(corpus):
    """Test export writing docgraph.json into the root."""
    result = runner.invoke(app, ["export", str(corpus)])

    assert result.exit_code == 0
    data = json.loads((corpus / "docgraph.json").read_text(encoding="utf-8"))
    assert len(data["nodes"]) == 4


def test_export_index(corpus, tmp_path):
    """Test export --format index to an explicit file."""
    destination = tmp_path / "INDEX.md"

    result = runner.invoke(
        app, ["export", str(corpus), "--format", "index", "--output", str(destination)]
    )

    assert result.exit_code == 0
    assert destination.read_text(encoding="utf-8").startswith("# docs Index")
