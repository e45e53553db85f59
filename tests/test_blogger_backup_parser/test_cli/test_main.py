"""Tests for the CLI main module."""

import json
import logging
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from blogger_backup_parser.cli.main import (
    COMMANDS,
    CLIConfig,
    create_argument_parser,
    format_result,
    main,
)
from blogger_backup_parser.api import decode_with_report


class TestCLIConfig:
    """Test CLI configuration management."""

    def test_default_config(self):
        """Test default configuration values."""
        config = CLIConfig()
        assert config.output_format == "text"
        assert config.verbose is False
        assert config.quiet is False
        assert config.log_level == "WARNING"

    def test_log_level_flags(self):
        """Test -v and -q take precedence over the configured level."""
        config = CLIConfig()
        config.decoder_config = config.decoder_config.override(logging_level="INFO")
        assert config.log_level == "INFO"
        config.quiet = True
        assert config.log_level == "ERROR"
        config.verbose = True
        assert config.log_level == "DEBUG"

    def test_config_from_file(self, tmp_path):
        """Test loading decoder configuration from file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "storage": {"content_root": "out/posts"},
            "logging_level": "DEBUG",
        }), encoding="utf-8")

        config = CLIConfig.from_file(config_path)
        assert config.decoder_config.storage.content_root == "out/posts"
        assert config.decoder_config.logging_level == "DEBUG"

    def test_config_from_nonexistent_file(self):
        """Test handling non-existent config file."""
        config = CLIConfig.from_file(Path("nonexistent.json"))
        assert config.decoder_config.storage.content_root == "data/bookroot"

    def test_invalid_config_file(self, tmp_path, capsys):
        """Test an invalid config falls back to defaults with a warning."""
        config_path = tmp_path / "config.json"
        config_path.write_text("{not json", encoding="utf-8")
        config = CLIConfig.from_file(config_path)
        assert config.decoder_config.routing.draft_value == "yes"
        assert "Could not load config file" in capsys.readouterr().err


class TestArgumentParser:
    """Test argument parsing."""

    def test_posts_defaults(self):
        """Test the posts command defaults."""
        args = create_argument_parser().parse_args(["posts", "backup.xml"])
        assert args.command == "posts"
        assert args.backup == Path("backup.xml")
        assert args.format == "text"
        assert args.output is None

    def test_inspect_arguments(self):
        """Test inspect options."""
        args = create_argument_parser().parse_args([
            "inspect", "contents", "backup.xml",
            "--path", "feed=>entry=>title", "--first", "2", "--last", "4",
        ])
        assert args.mode == "contents"
        assert args.path == "feed=>entry=>title"
        assert (args.first, args.last) == (2, 4)

    def test_unknown_inspect_mode(self):
        """Test an unknown inspect mode is rejected."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["inspect", "bogus", "backup.xml"])

    def test_global_options(self):
        """Test global options before the command."""
        args = create_argument_parser().parse_args(["-v", "-c", "c.json", "posts", "b.xml"])
        assert args.verbose is True
        assert args.config == Path("c.json")


class TestFormatResult:
    """Test output formatting."""

    def test_json(self, sample_backup_file):
        """Test JSON output holds posts with nested comments and orphans."""
        data = json.loads(format_result(decode_with_report(sample_backup_file), "json"))
        assert [post["title"] for post in data["posts"]] == [
            "First post", "Second post", "Unfinished"
        ]
        assert len(data["posts"][1]["comments"]) == 2
        assert data["posts"][2]["draft"] is True
        assert len(data["orphans"]) == 1

    def test_text(self, sample_backup_file):
        """Test the text summary."""
        output = format_result(decode_with_report(sample_backup_file), "text")
        lines = output.splitlines()
        assert lines[0].endswith("First post  (1 comments)")
        assert lines[2].endswith("Unfinished  (0 comments) [draft]")
        assert "3 posts in total" in lines
        assert "1 comments without a post" in lines
        assert any(line.startswith("published from 2019-12-31T09:30:00.001000+00:00") for line in lines)


class TestMain:
    """Test the CLI entry point."""

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_posts(self, sample_backup_file, capsys):
        """Test listing posts."""
        assert main(["posts", str(sample_backup_file)]) == 0
        assert "3 posts in total" in capsys.readouterr().out

    def test_posts_to_file(self, sample_backup_file, tmp_path, capsys):
        """Test writing posts as JSON to a file."""
        output = tmp_path / "posts.json"
        code = main(["posts", str(sample_backup_file), "-f", "json", "-o", str(output)])
        assert code == 0
        assert len(json.loads(output.read_text(encoding="utf-8"))["posts"]) == 3
        assert "Results written to" in capsys.readouterr().err

    def test_posts_missing_backup(self, tmp_path, capsys):
        """Test a missing backup fails with exit code 1."""
        assert main(["posts", str(tmp_path / "missing.xml")]) == 1
        assert "Error decoding" in capsys.readouterr().err

    def test_posts_malformed_backup(self, backup_builder, tmp_path):
        """Test a malformed backup fails with exit code 1."""
        backup = backup_builder.raw("<entry><title></entry>\n").write(tmp_path / "bad.xml")
        assert main(["-q", "posts", str(backup)]) == 1

    def test_save(self, sample_backup_file, tmp_path, capsys):
        """Test saving post content under a chosen root."""
        root = tmp_path / "content"
        assert main(["save", str(sample_backup_file), "--root", str(root)]) == 0
        assert len(list(root.iterdir())) == 3
        assert f"Saved 3 posts to {root}" in capsys.readouterr().out

    def test_inspect_paths(self, sample_backup_file, capsys):
        """Test listing paths."""
        assert main(["inspect", "paths", str(sample_backup_file)]) == 0
        assert "feed=>entry=>app:control=>app:draft" in capsys.readouterr().out.splitlines()

    def test_inspect_contents(self, sample_backup_file, capsys):
        """Test printing occurrences at a path."""
        code = main([
            "inspect", "contents", str(sample_backup_file),
            "--path", "feed=>entry=>app:control=>app:draft",
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "#1" in out
        assert "text: yes" in out

    def test_inspect_contents_requires_path(self, sample_backup_file):
        """Test contents without --path is a usage error."""
        assert main(["inspect", "contents", str(sample_backup_file)]) == 2

    def test_copy(self, tmp_path, capsys):
        """Test copying a directory."""
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.txt").write_text("a", encoding="utf-8")
        assert main(["copy", str(src), str(tmp_path / "dst")]) == 0
        assert (tmp_path / "dst" / "a.txt").exists()
        assert "Copied" in capsys.readouterr().out

    def test_copy_missing_source(self, tmp_path):
        """Test copying a missing directory fails."""
        assert main(["copy", str(tmp_path / "missing"), str(tmp_path / "dst")]) == 1

    def test_keyboard_interrupt(self, sample_backup_file):
        """Test interruption exits with 130."""
        interrupted = Mock(side_effect=KeyboardInterrupt)
        with patch.dict(COMMANDS, {"posts": interrupted}):
            assert main(["posts", str(sample_backup_file)]) == 130
        interrupted.assert_called_once()

    def test_quiet_sets_package_level(self, sample_backup_file):
        """Test -q raises the package log level to ERROR."""
        assert main(["-q", "posts", str(sample_backup_file)]) == 0
        assert logging.getLogger("blogger_backup_parser").level == logging.ERROR

    def test_configured_level_used(self, sample_backup_file, tmp_path, caplog):
        """Test the config file's logging level applies without -v or -q."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"logging_level": "DEBUG"}), encoding="utf-8")
        with caplog.at_level(logging.DEBUG):
            assert main(["-c", str(config_path), "posts", str(sample_backup_file)]) == 0
        assert logging.getLogger("blogger_backup_parser").level == logging.DEBUG
        assert "Entry marked as draft" in caplog.messages
