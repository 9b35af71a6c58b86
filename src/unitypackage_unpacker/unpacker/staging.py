"""Decompress a package into its staging directory."""

import logging
import tarfile
import zlib
from pathlib import Path
from typing import Callable, Optional

from unitypackage_unpacker.common import is_within_directory
from .errors import (
    CorruptPackageError,
    NotAPackageFileError,
    PackageNotFoundError,
    StagingDirectoryUnavailableError,
)

logger = logging.getLogger(__name__)

# Errors raised by tarfile/gzip on truncated or non-gzip input
_ARCHIVE_ERRORS = (tarfile.TarError, EOFError, zlib.error, OSError)


def stage_package(
    source_path: Path | str,
    staging_root: Path | str,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> int:
    """Extract the raw tar entries of a package into ``staging_root``.

    Each top-level entry of the archive becomes a ``<guid>`` subdirectory.
    Members that would land outside ``staging_root`` are skipped.

    Args:
        source_path: Package file (gzip-compressed tar)
        staging_root: Scratch directory to extract into; created if missing
        progress_callback: Optional callback(current, total) per member

    Returns:
        Number of members extracted

    Raises:
        PackageNotFoundError: If the package file does not exist
        NotAPackageFileError: If the package path is a directory
        StagingDirectoryUnavailableError: If ``staging_root`` cannot be created
        CorruptPackageError: If the archive cannot be decompressed or read
    """
    source_path = Path(source_path)
    staging_root = Path(staging_root)

    if source_path.is_dir():
        raise NotAPackageFileError(source_path)
    if not source_path.is_file():
        raise PackageNotFoundError(source_path)

    try:
        staging_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StagingDirectoryUnavailableError(staging_root, e) from e

    logger.info(f"Staging {source_path.name} into {staging_root}")

    try:
        tar_ref = tarfile.open(source_path, "r:gz")
    except PermissionError as e:
        raise PackageNotFoundError(source_path, e) from e
    except _ARCHIVE_ERRORS as e:
        raise CorruptPackageError(source_path, e) from e

    extracted = 0
    skipped = 0
    with tar_ref:
        try:
            members = tar_ref.getmembers()
        except _ARCHIVE_ERRORS as e:
            raise CorruptPackageError(source_path, e) from e

        total = len(members)
        logger.debug(f"Package contains {total} members")

        for i, member in enumerate(members):
            # Security check: prevent path traversal
            if not is_within_directory(staging_root, staging_root / member.name):
                logger.warning(f"Skipping unsafe path: {member.name}")
                skipped += 1
                continue

            try:
                tar_ref.extract(member, staging_root, filter="data")
            except _ARCHIVE_ERRORS as e:
                raise CorruptPackageError(source_path, e, member=member.name) from e

            extracted += 1
            if progress_callback:
                progress_callback(i + 1, total)

    if skipped > 0:
        logger.warning(f"Skipped {skipped} unsafe member(s) in {source_path.name}")
    logger.info(f"Staged {extracted} member(s) from {source_path.name}")
    return extracted
