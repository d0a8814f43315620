"""Tests for compctx CLI commands."""

from __future__ import annotations

import json
import zipfile
from pathlib import Path

from typer.testing import CliRunner

from compctx.cli import app
from compctx.cli_utils import EXIT_LOAD_FAILURE, EXIT_USER_ERROR

runner = CliRunner()


def _component(tmp_path: Path) -> Path:
    root = tmp_path / "widget"
    (root / "docs").mkdir(parents=True)
    (root / "index.js").write_text("export default {};\n")
    (root / "docs" / "readme.md").write_text("# Widget\n\nUsage.\n")
    return root


def test_version() -> None:
    """Test --version flag shows version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "compctx version" in result.output


def test_help() -> None:
    """Test --help flag shows help."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "validated context" in result.output


class TestLoadCommand:
    """Tests for the load command."""

    def test_load_directory(self, tmp_path: Path) -> None:
        """Test loading a directory lists its files."""
        root = _component(tmp_path)

        result = runner.invoke(app, ["load", str(root)])

        assert result.exit_code == 0
        assert "Success:" in result.output
        assert "widget/index.js" in result.output
        assert "widget/docs/readme.md" in result.output
        assert "2 files" in result.output

    def test_load_quiet(self, tmp_path: Path) -> None:
        """Test --quiet suppresses output on success."""
        root = _component(tmp_path)

        result = runner.invoke(app, ["load", str(root), "--quiet"])

        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_load_json(self, tmp_path: Path) -> None:
        """Test --json prints the context summary."""
        root = _component(tmp_path)

        result = runner.invoke(app, ["load", str(root), "--json", "--ignore", "**/*.md"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "pass"
        assert data["name"] == "widget"
        assert data["errors"] == []
        assert data["ignore"] == ["**/*.md"]
        files = {f["path"]: f for f in data["files"]}
        assert files["widget/docs/readme.md"] == {
            "path": "widget/docs/readme.md",
            "lines": 3,
            "ignored": True,
        }
        assert files["widget/index.js"]["ignored"] is False

    def test_load_zip(self, tmp_path: Path) -> None:
        """Test loading a zip archive."""
        archive = tmp_path / "widget.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("widget/index.js", "x\n")

        result = runner.invoke(app, ["load", str(archive)])

        assert result.exit_code == 0
        assert "Loaded component 'widget' with 1 files" in result.output

    def test_load_failure_lists_paths(self, tmp_path: Path) -> None:
        """Test a failed load reports every offending path and exits with 2."""
        root = _component(tmp_path)
        deep = root / "a" / "b" / "c"
        deep.mkdir(parents=True)
        (deep / "one.js").write_text("1")
        (deep / "two.js").write_text("2")
        (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")

        result = runner.invoke(app, ["load", str(root)])

        assert result.exit_code == EXIT_LOAD_FAILURE
        assert "deeper than 3 levels" in result.output
        assert "widget/a/b/c/one.js" in result.output
        assert "widget/a/b/c/two.js" in result.output
        assert "non-text content" in result.output
        assert "widget/logo.png" in result.output

    def test_load_failure_json(self, tmp_path: Path) -> None:
        """Test a failed load in JSON mode carries the structured errors."""
        root = _component(tmp_path)
        deep = root / "a" / "b"
        deep.mkdir(parents=True)
        (deep / "x.js").write_text("x")

        result = runner.invoke(app, ["load", str(root), "--json", "--max-depth", "2"])

        assert result.exit_code == EXIT_LOAD_FAILURE
        data = json.loads(result.stdout)
        assert data["status"] == "fail"
        assert data["errors"] == [
            {
                "kind": "deep_hierarchy",
                "message": "Files nested deeper than 2 levels:",
                "paths": ["widget/a/b/x.js"],
            }
        ]

    def test_load_missing_path(self, tmp_path: Path) -> None:
        """Test a missing source is a user error."""
        result = runner.invoke(app, ["load", str(tmp_path / "missing")])

        assert result.exit_code == EXIT_USER_ERROR
        assert "does not exist" in result.output

    def test_invalid_option_value(self, tmp_path: Path) -> None:
        """Test an invalid configuration override is a user error."""
        root = _component(tmp_path)

        result = runner.invoke(app, ["load", str(root), "--max-depth", "0"])

        assert result.exit_code == EXIT_USER_ERROR
        assert "Invalid configuration" in result.output

    def test_invalid_zip_name(self, tmp_path: Path) -> None:
        """Test the name pattern option applies to archives."""
        archive = tmp_path / "widget.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("widget/index.js", "x\n")

        result = runner.invoke(app, ["load", str(archive), "--name-regex", "mip-[a-z-]+"])

        assert result.exit_code == EXIT_LOAD_FAILURE
        assert "Invalid component directory name 'widget'" in result.output
