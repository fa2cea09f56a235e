"""
Tests for yamlstack.cli module.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from yamlstack.cli import build_parser, main


def run_cli(argv: list[str]) -> int:
    """Run the CLI and return its exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestMergeCommand:
    """Tests for 'yamlstack merge'."""

    def test_prints_merged_yaml(self, create_text_file, capsys):
        """Test that merged YAML goes to stdout in key order."""
        base = create_text_file("base.yaml", "a: 1\nb: 2\n")
        override = create_text_file("override.yaml", "b: 3\nc: 4\n")

        code = run_cli(["merge", str(base), str(override)])

        out = capsys.readouterr().out
        assert code == 0
        assert out == "a: 1\nb: 3\nc: 4\n"

    def test_writes_output_file(self, tmp_test_dir: Path, create_text_file, capsys):
        """Test that --output writes the file and leaves stdout empty."""
        base = create_text_file("base.yaml", "list: [1, 2, 3]\n")
        override = create_text_file("override.yaml", "list: [9, 9]\n")
        output = tmp_test_dir / "out" / "merged.yaml"

        code = run_cli(["merge", str(base), str(override), "-o", str(output)])

        assert code == 0
        assert capsys.readouterr().out == ""
        assert yaml.safe_load(output.read_text(encoding="utf-8")) == {"list": [9, 9, 3]}

    def test_missing_file_skipped(self, tmp_test_dir: Path, create_text_file, capsys):
        """Test that a missing document is skipped by default."""
        base = create_text_file("base.yaml", "a: 1\n")

        code = run_cli(["merge", str(base), str(tmp_test_dir / "missing.yaml")])

        assert code == 0
        assert capsys.readouterr().out == "a: 1\n"

    def test_strict_fails_on_missing_file(
        self, tmp_test_dir: Path, create_text_file, capsys
    ):
        """Test that --strict turns a missing document into exit code 1."""
        base = create_text_file("base.yaml", "a: 1\n")

        code = run_cli(
            ["merge", "--strict", str(base), str(tmp_test_dir / "missing.yaml")]
        )

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "Error: file not found" in captured.err

    def test_verbose_summary_on_stderr(
        self, tmp_test_dir: Path, create_text_file, capsys
    ):
        """Test that --verbose reports merged and skipped documents on stderr."""
        base = create_text_file("base.yaml", "a: 1\n")
        missing = str(tmp_test_dir / "missing.yaml")

        code = run_cli(["merge", "-v", str(base), missing])

        captured = capsys.readouterr()
        assert code == 0
        assert captured.out == "a: 1\n"
        assert "[MERGE] Merged:" in captured.err
        assert "MERGE RESULTS" in captured.err
        assert f"  - {missing}: file not found" in captured.err

    def test_debug_logs_skips(self, tmp_test_dir: Path, create_text_file, capsys):
        """Test that --debug shows why a document was skipped."""
        bad = create_text_file("bad.yaml", "a: [\n")

        code = run_cli(["merge", "-d", str(bad)])

        captured = capsys.readouterr()
        assert code == 0
        assert "Could not merge YAML at" in captured.err
        assert captured.out == "{}\n"


class TestParser:
    """Tests for argument parsing."""

    def test_merge_requires_paths(self):
        """Test that merge without paths is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["merge"])

        assert exc_info.value.code == 2

    def test_command_required(self):
        """Test that a sub-command is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_version(self, capsys):
        """Test that --version prints the program name."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])

        assert capsys.readouterr().out.startswith("yamlstack ")
