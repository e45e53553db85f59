"""Main CLI entry point for the blogger-backup command-line tool.

Provides commands to decode a Blogger backup into posts, save post content to
disk, inspect the structure of a backup, and copy directories.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from blogger_backup_parser import __version__
from blogger_backup_parser.api import BloggerBackupParser
from blogger_backup_parser.backup.decoder import DecodeResult
from blogger_backup_parser.shared.config import ConfigError, DecoderConfig
from blogger_backup_parser.shared.errors import BackupError
from blogger_backup_parser.shared.logging import get_logger, set_package_level
from blogger_backup_parser.tools import inspection, storage

INSPECT_MODES = ("paths", "attributes", "tags", "text", "contents")


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.decoder_config = DecoderConfig()
        self.output_format = "text"
        self.verbose = False
        self.quiet = False

    @property
    def log_level(self) -> str:
        """Level name chosen by -v/-q, falling back to the decoder config."""
        if self.verbose:
            return "DEBUG"
        if self.quiet:
            return "ERROR"
        return self.decoder_config.logging_level

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON decoder config file."""
        config = cls()
        if config_path.exists():
            try:
                config.decoder_config = DecoderConfig.from_file(config_path)
            except ConfigError as e:
                print(f"Warning: Could not load config file: {e}", file=sys.stderr)
        return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="blogger-backup",
        description="Decode Google Blogger backup files into posts and comments"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Posts command
    posts_parser = subparsers.add_parser("posts", help="Decode and list posts")
    posts_parser.add_argument("backup", type=Path, help="Backup XML file")
    posts_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )
    posts_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Save command
    save_parser = subparsers.add_parser("save", help="Save the content of every post")
    save_parser.add_argument("backup", type=Path, help="Backup XML file")
    save_parser.add_argument(
        "--root", "-d",
        type=Path,
        help="Directory for content files (default from config)"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Explore a backup's structure")
    inspect_parser.add_argument("mode", choices=INSPECT_MODES, help="What to list")
    inspect_parser.add_argument("backup", type=Path, help="Backup XML file")
    inspect_parser.add_argument(
        "--path", "-p",
        help="Element path for 'contents', e.g. feed=>entry=>title"
    )
    inspect_parser.add_argument("--first", type=int, default=1, help="First occurrence")
    inspect_parser.add_argument("--last", type=int, help="Last occurrence")

    # Copy command
    copy_parser = subparsers.add_parser("copy", help="Copy a directory recursively")
    copy_parser.add_argument("source", type=Path, help="Directory to copy")
    copy_parser.add_argument("destination", type=Path, help="Destination directory")

    # Global options
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Decoder configuration file (JSON)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def format_result(result: DecodeResult, format_type: str) -> str:
    """Format a decode result for output."""
    if format_type == "json":
        return json.dumps({
            "posts": [post.to_dict() for post in result.posts],
            "orphans": [orphan.to_dict() for orphan in result.orphans],
        }, indent=2)

    lines: List[str] = []
    for post in result.posts:
        draft = " [draft]" if post.draft else ""
        lines.append(
            f"{post.published.isoformat()}  {post.title or '(untitled)'}"
            f"  ({post.comment_count} comments){draft}"
        )
    lines.append("")
    lines.append(f"{result.post_count} posts in total")
    published_range = result.published_range
    if published_range:
        first, last = published_range
        lines.append(f"published from {first.isoformat()} to {last.isoformat()}")
    if result.orphans:
        lines.append(f"{len(result.orphans)} comments without a post")
    return "\n".join(lines)


def _load_config(args: argparse.Namespace) -> CLIConfig:
    if args.config and args.config.exists():
        config = CLIConfig.from_file(args.config)
    else:
        config = CLIConfig()
    config.verbose = args.verbose
    config.quiet = args.quiet
    return config


def _decode(config: CLIConfig, backup: Path) -> Optional[DecodeResult]:
    parser = BloggerBackupParser(config.decoder_config)
    try:
        return parser.decode_with_report(backup)
    except BackupError as e:
        print(f"Error decoding {backup}: {e}", file=sys.stderr)
        return None


def cmd_posts(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle posts command."""
    config.output_format = args.format

    result = _decode(config, args.backup)
    if result is None:
        return 1

    formatted_output = format_result(result, config.output_format)
    if args.output:
        try:
            args.output.write_text(formatted_output, encoding="utf-8")
            print(f"Results written to {args.output}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(formatted_output)
    return 0


def cmd_save(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle save command."""
    if args.root:
        config.decoder_config = config.decoder_config.override(
            storage__content_root=str(args.root)
        )

    result = _decode(config, args.backup)
    if result is None:
        return 1

    try:
        saved = storage.save_all(result.posts, config.decoder_config.storage)
    except OSError as e:
        print(f"Error saving content: {e}", file=sys.stderr)
        return 1
    print(f"Saved {len(saved)} posts to {config.decoder_config.storage.content_root}")
    return 0


def _occurrence_lines(occurrence: inspection.PathOccurrence) -> List[str]:
    lines = [f"#{occurrence.index}"]
    lines.extend(f'  @{name}="{value}"' for name, value in occurrence.attributes)
    if occurrence.child_tags:
        lines.append(f"  children: {', '.join(occurrence.child_tags)}")
    if occurrence.text:
        lines.append(f"  text: {occurrence.text}")
    return lines


def cmd_inspect(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle inspect command."""
    stream_config = config.decoder_config.stream

    if args.mode == "contents" and not args.path:
        print("inspect contents requires --path", file=sys.stderr)
        return 2

    try:
        if args.mode == "paths":
            lines = inspection.paths(args.backup, stream_config)
        elif args.mode == "attributes":
            lines = inspection.all_attributes(args.backup, stream_config)
        elif args.mode == "tags":
            lines = sorted(inspection.tag_names(args.backup, stream_config))
        elif args.mode == "text":
            lines = inspection.all_text(args.backup, stream_config)
        else:
            lines = []
            for occurrence in inspection.path_contents(
                args.backup, args.path, args.first, args.last, stream_config
            ):
                lines.extend(_occurrence_lines(occurrence))
    except (BackupError, ValueError) as e:
        print(f"Error inspecting {args.backup}: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


def cmd_copy(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle copy command."""
    if not args.source.is_dir():
        print(f"Not a directory: {args.source}", file=sys.stderr)
        return 1
    try:
        storage.copy_dir_all(args.source, args.destination)
    except OSError as e:
        print(f"Copy failed: {e}", file=sys.stderr)
        return 1
    print(f"Copied {args.source} -> {args.destination}")
    return 0


COMMANDS: Dict[str, Any] = {
    "posts": cmd_posts,
    "save": cmd_save,
    "inspect": cmd_inspect,
    "copy": cmd_copy,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = _load_config(args)

    # Set up logging verbosity
    level = config.log_level
    config.decoder_config = config.decoder_config.override(logging_level=level)
    logging.basicConfig(level=level)
    set_package_level(level)

    logger = get_logger(__name__, component="cli")
    logger.debug("Running command", extra={"command": args.command})

    try:
        return COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
