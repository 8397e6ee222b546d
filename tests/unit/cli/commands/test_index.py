"""
Unit tests for the 'rebuild' and 'stats' commands.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from reftree.cli.commands.index import rebuild, stats
from reftree.cli.main import main


@pytest.fixture
def runner(tmp_path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        yield runner


def _write_index(nodes) -> Path:
    path = Path(".reftree/index.json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"nodes": nodes}))
    return path


class TestRebuild:
    def test_reload_only_without_command(self, runner):
        _write_index([{"id": "a"}, {"id": "b"}])

        result = runner.invoke(rebuild)

        assert result.exit_code == 0
        assert "No rebuild command configured" in result.output
        assert "Index ready: 2 nodes" in result.output

    @patch("reftree.core.provider.subprocess.run")
    def test_runs_configured_command(self, mock_run, runner):
        _write_index([{"id": "a"}])
        Path(".reftree/config.yaml").write_text("rebuild_command: indexer --project .\n")
        mock_run.return_value = MagicMock(returncode=0, stderr="")

        result = runner.invoke(rebuild)

        assert result.exit_code == 0
        assert mock_run.call_args[0][0] == ["indexer", "--project", "."]
        assert "Index ready: 1 nodes" in result.output

    @patch("reftree.core.provider.subprocess.run")
    def test_command_failure(self, mock_run, runner, monkeypatch):
        monkeypatch.setenv("REFTREE_REBUILD_COMMAND", "indexer")
        mock_run.return_value = MagicMock(returncode=1, stderr="no project")

        result = runner.invoke(rebuild)

        assert result.exit_code == 0
        assert "Rebuild command exited with status 1: no project" in result.output

    def test_missing_index_after_rebuild(self, runner):
        result = runner.invoke(rebuild)

        assert "Index not found" in result.output


class TestStats:
    def test_stats_table(self, runner):
        _write_index([
            {"id": "a", "referencers": ["b", "ghost"], "is_included": True},
            {"id": "b"},
        ])

        result = runner.invoke(main, ["stats"])

        assert result.exit_code == 0
        assert "total nodes" in result.output
        assert "dangling references" in result.output

    def test_stats_missing_index(self, runner):
        result = runner.invoke(stats, ["--index", "nowhere.json"])

        assert result.exit_code == 0
        assert "Index not found: nowhere.json" in result.output
