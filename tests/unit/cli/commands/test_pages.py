"""
Unit tests for the 'pages' command.
"""

from click.testing import CliRunner

from docgraph.cli.commands.pages import pages


class TestPagesCommand:
    def test_lists_pages(self, collection_file):
        runner = CliRunner()
        result = runner.invoke(pages, [str(collection_file)])

        assert result.exit_code == 0
        assert "Pages (2)" in result.output
        assert "First" in result.output
        assert "Second" in result.output

    def test_load_failure_exits(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text("not json\n")

        runner = CliRunner()
        result = runner.invoke(pages, [str(path)])

        assert result.exit_code == 1
        assert "Error parsing JSON on line 1" in result.output

    def test_missing_file_rejected_by_click(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(pages, [str(tmp_path / "missing.jsonl")])
        assert result.exit_code == 2
