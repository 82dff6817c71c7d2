"""
Unit tests for the interactive 'explore' command.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from docgraph.cli.commands.explore import explore


@pytest.fixture
def run_explore(collection_file, tmp_path):
    out = tmp_path / "view.html"

    def _run(commands):
        runner = CliRunner()
        with patch("docgraph.cli.commands.explore.Prompt.ask") as mock_ask:
            mock_ask.side_effect = list(commands)
            result = runner.invoke(explore, [str(collection_file), "-o", str(out)])
        return result, out

    return _run


class TestExploreCommand:
    def test_startup_writes_empty_view(self, run_explore):
        result, out = run_explore(["quit"])

        assert result.exit_code == 0
        assert "Loaded 2 page(s)" in result.output
        html = out.read_text(encoding="utf-8")
        assert "0 of 2 page(s) selected." in html
        assert "const showPlaceholder = true;" in html

    def test_toggle_rewrites_view(self, run_explore):
        result, out = run_explore(["toggle p1", "quit"])

        assert "1 of 2 page(s) selected." in result.output
        assert '"page:p1"' in out.read_text(encoding="utf-8")

    def test_all_twice_clears(self, run_explore):
        result, out = run_explore(["all", "all", "quit"])

        assert "2 of 2 page(s) selected." in result.output
        assert "0 of 2 page(s) selected." in out.read_text(encoding="utf-8")

    def test_show_lists_pages(self, run_explore):
        result, _ = run_explore(["toggle p2", "show", "quit"])

        assert "[x]" in result.output
        assert "Second" in result.output

    def test_inspect_and_details(self, run_explore):
        result, _ = run_explore(["toggle p1", "inspect page:p1", "details", "quit"])

        assert result.output.count("First Details") == 2
        assert "This node is not part of the current graph." not in result.output

    def test_inspected_node_survives_narrowing(self, run_explore):
        result, _ = run_explore(["toggle p1", "inspect chunk:p1:0", "none", "details", "quit"])

        assert result.output.count("Chunk 0 Details") == 2
        assert "This node is not part of the current graph." in result.output

    def test_close_details(self, run_explore):
        result, _ = run_explore(["inspect collection", "close", "details", "quit"])
        assert "No node inspected." in result.output

    def test_inspect_unknown_node(self, run_explore):
        result, _ = run_explore(["inspect page:p1", "quit"])

        assert result.exit_code == 0
        assert "Node not found in the current graph: page:p1" in result.output

    def test_load_failure_keeps_collection(self, run_explore, tmp_path):
        bad = tmp_path / "bad.jsonl"
        bad.write_text("{}\n")

        result, _ = run_explore(["toggle p1", f"load {bad}", "show", "quit"])

        assert "Error parsing JSON on line 1" in result.output
        assert "1 of 2 page(s) selected." in result.output

    def test_load_replaces_collection(self, run_explore, tmp_path, single_page_line):
        other = tmp_path / "other.jsonl"
        other.write_text(single_page_line + "\n")

        result, out = run_explore(["toggle p1", f"load {other}", "quit"])

        assert "Loaded 1 page(s) from" in result.output
        assert "0 of 1 page(s) selected." in out.read_text(encoding="utf-8")

    def test_unknown_command(self, run_explore):
        result, _ = run_explore(["frobnicate", "quit"])
        assert "Unknown command: frobnicate" in result.output

    def test_open_uses_browser(self, run_explore):
        with patch("docgraph.cli.commands.explore.webbrowser") as mock_browser:
            run_explore(["open", "quit"])
        mock_browser.open.assert_called_once()

    def test_eof_ends_session(self, run_explore):
        result, _ = run_explore(["toggle p1", EOFError()])

        assert result.exit_code == 0
        assert "1 of 2 page(s) selected." in result.output

    def test_blank_input_is_ignored(self, run_explore):
        result, _ = run_explore(["", "   ", "quit"])

        assert result.exit_code == 0
        assert "Unknown command" not in result.output
