"""Path utilities for consistent path handling across packages."""

import os
import unicodedata
from pathlib import Path


def normalize_path(path: Path | str) -> str:
    """
    Normalize a path for consistent storage and comparison.

    Applies:
    - Unicode NFC normalization (canonical composition)
    - Forward slash conversion for cross-platform consistency

    Args:
        path: Path object or string to normalize

    Returns:
        Normalized path string with forward slashes and NFC Unicode normalization

    Examples:
        >>> normalize_path(Path("Assets/Textures/café.png"))
        'Assets/Textures/café.png'
        >>> normalize_path(r"Assets\\Scripts\\Player.cs")
        'Assets/Scripts/Player.cs'
    """
    path_str = str(path)
    normalized = unicodedata.normalize('NFC', path_str)
    return normalized.replace('\\', '/')


def is_within_directory(base_dir: Path | str, candidate: Path | str) -> bool:
    """Check that ``candidate`` resolves to ``base_dir`` or somewhere below it.

    Used to reject archive members and pathnames that would escape their
    extraction root (absolute paths, ``..`` segments, symlinked parents).

    Args:
        base_dir: Root directory that must contain the candidate
        candidate: Path to check (relative paths are taken relative to the
            current working directory, as ``Path.resolve`` does)

    Returns:
        True if safe, False otherwise
    """
    base = Path(base_dir).resolve()
    target = Path(candidate).resolve()
    try:
        return os.path.commonpath([base, target]) == str(base)
    except ValueError:
        # Different drives on Windows
        return False
