"""Test module for blogger_backup_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import blogger_backup_parser

    # Assert
    assert blogger_backup_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import blogger_backup_parser

    # Assert
    assert isinstance(blogger_backup_parser.__version__, str)
    assert blogger_backup_parser.__version__ == "0.1.0"


def test_package_all_exports() -> None:
    """Test that __all__ exposes the decoding entry points."""
    # Arrange & Act
    import blogger_backup_parser

    # Assert
    for name in ("decode", "decode_file", "BloggerBackupParser", "Post", "Comment"):
        assert name in blogger_backup_parser.__all__
        assert hasattr(blogger_backup_parser, name)
