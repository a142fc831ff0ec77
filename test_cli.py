"""Tests for the command line interface."""

import json

import pytest

from deepcompare.cli import EXIT_DIFFERENT, EXIT_EQUAL, EXIT_ERROR, main


@pytest.fixture
def documents(tmp_path):
    first = tmp_path / "first.json"
    second = tmp_path / "second.yaml"
    first.write_text(json.dumps({"id": 1, "name": "old", "updated": "mon"}))
    second.write_text("id: 1\nname: new\nupdated: tue\n")
    return str(first), str(second)


class TestCli:
    """Test exit codes and output."""

    def test_equal_documents(self, tmp_path, capsys):
        """Test identical documents exit 0."""
        path = tmp_path / "doc.json"
        path.write_text('{"a": [1, 2]}')
        assert main([str(path), str(path), "--mode", "equal"]) == EXIT_EQUAL
        assert capsys.readouterr().out.strip() == "equal"

    def test_conflicts(self, documents, capsys):
        """Test conflict paths are printed one per line."""
        assert main(list(documents)) == EXIT_DIFFERENT
        assert capsys.readouterr().out.split() == ["name", "updated"]

    def test_details_as_json(self, documents, capsys):
        """Test detailed differences are printed as JSON."""
        assert main([*documents, "--mode", "details", "--json"]) == EXIT_DIFFERENT
        entries = json.loads(capsys.readouterr().out)
        assert entries[0] == {
            "path": "name", "kind": "changed", "old_value": "old", "new_value": "new"
        }

    def test_options_file(self, documents, tmp_path, capsys):
        """Test an options file filters paths."""
        options = tmp_path / "options.yaml"
        options.write_text("path_filter:\n  patterns: [name, updated]\n")
        assert main([*documents, "-o", str(options)]) == EXIT_EQUAL

    def test_missing_file(self, tmp_path, capsys):
        """Test unreadable input exits 2."""
        assert main([str(tmp_path / "a.json"), str(tmp_path / "b.json")]) == EXIT_ERROR
        assert "File not found" in capsys.readouterr().err

    def test_empty_document(self, tmp_path, capsys):
        """Test an empty document is an error."""
        empty = tmp_path / "empty.yaml"
        empty.write_text("")
        assert main([str(empty), str(empty)]) == EXIT_ERROR
