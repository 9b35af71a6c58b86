"""Move staged assets into the destination project tree."""

import logging
import shutil
from pathlib import Path
from typing import Optional

from unitypackage_unpacker.common import is_within_directory
from .asset import AssetRecord
from .errors import CorruptEntryError, InvalidPathError, TargetDirectoryUnavailableError

logger = logging.getLogger(__name__)

# Appended to the full asset file name: IMGP1287.jpg -> IMGP1287.jpg.unitymeta
META_SUFFIX = ".unitymeta"


def metadata_file_name(asset_path: Path) -> str:
    """Name of the metadata file placed next to ``asset_path``.

    >>> metadata_file_name(Path("Assets/Textures/Ground/IMGP1287.jpg"))
    'IMGP1287.jpg.unitymeta'
    """
    name = Path(asset_path).name
    if not name:
        raise InvalidPathError(asset_path)
    return f"{name}{META_SUFFIX}"


def _move(source: Path, target: Path, identifier: str) -> None:
    # shutil.move would put the file inside an existing directory
    if target.is_dir():
        raise CorruptEntryError(
            source, identifier=identifier, target=str(target), reason="target is a directory"
        )
    try:
        # shutil.move falls back to copy+delete across filesystems
        shutil.move(str(source), str(target))
    except OSError as e:
        raise CorruptEntryError(source, e, identifier=identifier, target=str(target)) from e


def place_asset(record: AssetRecord, destination_root: Path | str) -> Optional[Path]:
    """Move a record's payload and metadata below ``destination_root``.

    Folder entries carry no payload and are skipped; their directories appear
    as a side effect of placing the files inside them.

    Args:
        record: Record built from a staged entry; consumed by this call
        destination_root: Root of the reconstructed project tree

    Returns:
        Path of the placed asset, or None for folder entries

    Raises:
        InvalidPathError: If the target path escapes ``destination_root``
        TargetDirectoryUnavailableError: If the parent directory cannot be created
        CorruptEntryError: If the payload or metadata cannot be moved
    """
    if record.is_directory_marker:
        logger.debug(f"Skipping folder entry {record}")
        return None

    destination_root = Path(destination_root)
    absolute_target = destination_root / record.relative_target_path

    if not is_within_directory(destination_root, absolute_target) or (
        absolute_target.resolve() == destination_root.resolve()
    ):
        raise InvalidPathError(
            absolute_target,
            identifier=record.identifier,
            pathname=str(record.relative_target_path),
        )

    parent = absolute_target.parent
    if parent == absolute_target:
        raise TargetDirectoryUnavailableError(absolute_target, identifier=record.identifier)

    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TargetDirectoryUnavailableError(parent, e, identifier=record.identifier) from e

    _move(record.source_payload_path, absolute_target, record.identifier)
    record.placed_payload_path = absolute_target

    metadata_target = parent / metadata_file_name(absolute_target)
    _move(record.source_metadata_path, metadata_target, record.identifier)
    record.placed_metadata_path = metadata_target

    logger.debug(f"Placed {record.identifier} at {absolute_target}")
    return absolute_target
