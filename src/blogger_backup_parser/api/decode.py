"""Public decoding API with progressive disclosure.

Level 1 is a pair of plain functions returning the ordered posts; Level 2 is
``BloggerBackupParser``, which holds a ``DecoderConfig`` and can return the full
``DecodeResult`` with orphans, diagnostics and metrics.
"""

from pathlib import Path
from typing import List, Optional, Union

from blogger_backup_parser.backup.decoder import BackupDecoder, DecodeResult
from blogger_backup_parser.backup.models import Post
from blogger_backup_parser.markup.decoding import SourceType
from blogger_backup_parser.shared import BackupError, DecoderConfig, get_logger


def decode(
    source: SourceType,
    correlation_id: Optional[str] = None,
    config: Optional[DecoderConfig] = None,
) -> List[Post]:
    """Decode a Blogger backup into posts ordered by publication time.

    Args:
        source: Path to the backup, raw bytes, or a binary file object
        correlation_id: Optional correlation ID attached to log records
        config: Optional decoder configuration

    Returns:
        Posts sorted by ascending ``published``, each carrying its comments

    Raises:
        BackupError: the backup could not be read or is malformed

    Examples:
        >>> posts = decode("backup.xml")
        >>> posts[0].comments[0].post_id == posts[0].id
        True
    """
    return decode_with_report(source, correlation_id, config).posts


def decode_file(
    file_path: Union[str, Path],
    correlation_id: Optional[str] = None,
    config: Optional[DecoderConfig] = None,
) -> List[Post]:
    """Decode a backup stored at ``file_path``."""
    return decode(Path(file_path), correlation_id, config)


def decode_with_report(
    source: SourceType,
    correlation_id: Optional[str] = None,
    config: Optional[DecoderConfig] = None,
) -> DecodeResult:
    """Decode a backup and keep orphans, diagnostics and metrics."""
    return BloggerBackupParser(config, correlation_id).decode_with_report(source)


class BloggerBackupParser:
    """Configured decoder for repeated use.

    Each call owns its own working state, so one instance can decode any
    number of backups one after another.

    Examples:
        >>> parser = BloggerBackupParser(DecoderConfig(logging_level="DEBUG"))
        >>> result = parser.decode_with_report("backup.xml")
        >>> result.metrics.orphaned_comments
        0
    """

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or DecoderConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "api")

    def decode(self, source: SourceType) -> List[Post]:
        """Decode ``source`` and return only the ordered posts."""
        return self.decode_with_report(source).posts

    def decode_with_report(self, source: SourceType) -> DecodeResult:
        """Decode ``source`` and return the full result."""
        decoder = BackupDecoder(self.config, self.correlation_id)
        try:
            return decoder.decode(source)
        except BackupError as e:
            self.logger.error(
                "Backup decode failed",
                extra={"error_type": type(e).__name__},
                exc_info=False,
            )
            raise
