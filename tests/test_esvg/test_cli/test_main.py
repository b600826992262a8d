"""Tests for the CLI main module."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from esvg.cli.main import (
    check_file,
    create_argument_parser,
    format_check_results,
    load_config,
    main,
)
from esvg.shared.config import ConfigValidationError, EsvgConfig
from esvg.tree import PREAMBLE

VALID_SVG = '<svg xmlns="http://www.w3.org/2000/svg">\n  <g><circle r="1"/></g>\n</svg>\n'


@pytest.fixture(autouse=True)
def restore_logging():
    """Remove handlers installed by main() so each test sees its own stderr."""
    logger = logging.getLogger("esvg")
    handlers, level = list(logger.handlers), logger.level
    logger.handlers = []
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def svg_file(tmp_path: Path) -> Path:
    path = tmp_path / "drawing.svg"
    path.write_text(VALID_SVG, encoding="utf-8")
    return path


@pytest.fixture
def broken_file(tmp_path: Path) -> Path:
    path = tmp_path / "broken.svg"
    path.write_text("<svg>\n<g>\n</svg>", encoding="utf-8")
    return path


class TestLoadConfig:
    """Test CLI configuration loading."""

    def test_default_config(self):
        """Test defaults when no file is given."""
        assert load_config(None) == EsvgConfig()

    def test_config_from_file(self, tmp_path):
        """Test loading configuration from file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"serializer": {"indent": "  "}}), encoding="utf-8")
        assert load_config(path).serializer.indent == "  "

    def test_invalid_config_file(self, tmp_path):
        """Test invalid configuration content raises a validation error."""
        path = tmp_path / "config.json"
        path.write_text('{"parser": {"max_depth": 0}}', encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_config(path)


class TestCheckFile:
    """Test single file checks."""

    def test_valid_file(self, svg_file):
        """Test summary of a well-formed file."""
        result = check_file(svg_file, EsvgConfig())
        assert result["valid"] is True
        assert result["root"] == "svg"
        assert result["elements"] == 3
        assert result["warnings"] == []

    def test_invalid_file_reports_position(self, broken_file):
        """Test error details for a malformed file."""
        result = check_file(broken_file, EsvgConfig())
        assert result["valid"] is False
        assert result["error"] == "MismatchedClosingTagError"
        assert result["line"] == 3
        assert result["column"] == 1

    def test_missing_file(self, tmp_path):
        """Test unreadable files are reported rather than raised."""
        result = check_file(tmp_path / "nope.svg", EsvgConfig())
        assert result["valid"] is False
        assert result["error"] == "OSError"

    def test_invalid_utf8_file(self, tmp_path):
        """Test undecodable files are reported as failures."""
        path = tmp_path / "bad.svg"
        path.write_bytes(b"<svg>\xff</svg>")
        result = check_file(path, EsvgConfig())
        assert result["valid"] is False
        assert result["error"] == "InvalidEncodingError"
        assert (result["line"], result["column"]) == (1, 6)

    def test_duplicate_attribute_warning(self, tmp_path):
        """Test warnings are collected from diagnostics."""
        path = tmp_path / "dup.svg"
        path.write_text('<svg a="1" a="2"/>', encoding="utf-8")
        result = check_file(path, EsvgConfig())
        assert result["valid"] is True
        assert len(result["warnings"]) == 1


class TestFormatCheckResults:
    """Test rendering of check results."""

    def test_text_format(self):
        """Test the text summary layout."""
        results = [
            {"file": "a.svg", "valid": True, "elements": 2, "warnings": ["dup"]},
            {
                "file": "b.svg", "valid": False, "error": "UnexpectedEofError",
                "message": "Unexpected end of input", "line": 1, "column": 5,
            },
        ]
        output = format_check_results(results, "text")
        lines = output.splitlines()
        assert lines[0] == "Checked 2 files, 1 valid"
        assert "OK   a.svg (2 elements)" in lines
        assert "     warning: dup" in lines
        assert "FAIL b.svg:1:5 UnexpectedEofError: Unexpected end of input" in lines

    def test_json_format(self):
        """Test JSON output is the results list."""
        results = [{"file": "a.svg", "valid": True}]
        assert json.loads(format_check_results(results, "json")) == results


class TestArgumentParser:
    """Test argument parsing."""

    def test_format_arguments(self):
        """Test format subcommand arguments."""
        args = create_argument_parser().parse_args(["format", "in.svg", "--compact", "-o", "out.svg"])
        assert args.command == "format"
        assert args.path == Path("in.svg")
        assert args.compact is True
        assert args.output == Path("out.svg")

    def test_new_defaults(self):
        """Test new subcommand defaults."""
        args = create_argument_parser().parse_args(["new"])
        assert args.paper == "A4"
        assert args.dpi == 96
        assert args.margin == 0.5
        assert args.landscape is False
        assert args.output is None

    def test_check_requires_paths(self):
        """Test check needs at least one path."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["check"])

    def test_version(self, capsys):
        """Test --version prints the package version."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["--version"])
        assert "0.1.0" in capsys.readouterr().out


class TestMain:
    """Test command dispatch."""

    def test_no_command_prints_help(self, capsys):
        """Test running without a command."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_format_pretty_to_stdout(self, svg_file, capsys):
        """Test pretty formatting of a file."""
        assert main(["format", str(svg_file)]) == 0
        out = capsys.readouterr().out
        assert out == (
            PREAMBLE
            + '<svg xmlns="http://www.w3.org/2000/svg">\n'
            "\t<g>\n"
            '\t\t<circle r="1" />\n'
            "\t</g>\n"
            "</svg>\n"
        )

    def test_format_compact_to_file(self, svg_file, tmp_path, capsys):
        """Test compact formatting written to a file."""
        output = tmp_path / "out.svg"
        assert main(["format", str(svg_file), "--compact", "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == (
            '<svg xmlns="http://www.w3.org/2000/svg">\n  <g><circle r="1" /></g>\n</svg>\n'
        )
        assert capsys.readouterr().out == ""

    def test_format_malformed_file(self, broken_file, capsys):
        """Test formatting reports parse errors."""
        assert main(["format", str(broken_file)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_check_mixed_files(self, svg_file, broken_file, capsys):
        """Test check exit status with one bad file."""
        assert main(["check", str(svg_file), str(broken_file)]) == 1
        out = capsys.readouterr().out
        assert out.startswith("Checked 2 files, 1 valid")

    def test_check_non_utf8_file(self, tmp_path, capsys):
        """Test check reports undecodable files instead of crashing."""
        bad = tmp_path / "bad.svg"
        bad.write_bytes(b"<svg>\xff</svg>")
        assert main(["check", str(bad)]) == 1
        assert "FAIL" in capsys.readouterr().out

    def test_format_non_utf8_file(self, tmp_path, capsys):
        """Test format reports undecodable files instead of crashing."""
        bad = tmp_path / "bad.svg"
        bad.write_bytes(b"<svg>\xff</svg>")
        assert main(["format", str(bad)]) == 1
        assert "Invalid UTF-8 byte 0xff" in capsys.readouterr().err

    def test_check_valid_json(self, svg_file, capsys):
        """Test check JSON output."""
        assert main(["check", str(svg_file), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["valid"] is True

    def test_new_document(self, capsys):
        """Test creating an A4 document."""
        assert main(["new"]) == 0
        out = capsys.readouterr().out
        assert out.startswith(PREAMBLE)
        assert 'viewBox="0, 0, 794, 1123"' in out

    def test_new_landscape_to_file(self, tmp_path):
        """Test creating a landscape document file."""
        output = tmp_path / "page.svg"
        assert main(["new", "--paper", "letter", "--landscape", "-o", str(output)]) == 0
        assert 'viewBox="0, 0, 1056, 816"' in output.read_text(encoding="utf-8")

    def test_new_unknown_paper(self, capsys):
        """Test unknown paper names fail cleanly."""
        assert main(["new", "--paper", "B7"]) == 1
        assert "Unknown paper size" in capsys.readouterr().err

    def test_bad_config_file(self, tmp_path, capsys):
        """Test configuration errors are reported."""
        path = tmp_path / "config.json"
        path.write_text("not json", encoding="utf-8")
        assert main(["--config", str(path), "new"]) == 1
        assert "could not load configuration" in capsys.readouterr().err

    def test_config_file_changes_output(self, svg_file, tmp_path, capsys):
        """Test a configuration file is applied to formatting."""
        path = tmp_path / "config.json"
        path.write_text('{"serializer": {"indent": "  "}}', encoding="utf-8")
        assert main(["--config", str(path), "format", str(svg_file)]) == 0
        assert '\n  <g>\n    <circle r="1" />\n' in capsys.readouterr().out

    def test_keyboard_interrupt(self, svg_file, capsys):
        """Test interrupted commands exit with 130."""
        with patch("esvg.cli.main.check_file", side_effect=KeyboardInterrupt):
            assert main(["check", str(svg_file)]) == 130
        assert "interrupted" in capsys.readouterr().err
