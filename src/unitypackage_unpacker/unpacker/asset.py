"""Asset records parsed from staged package entries.

A staged entry is a directory named by the asset GUID holding three members::

    <guid>/asset        payload (missing for folder entries)
    <guid>/asset.meta   metadata text
    <guid>/pathname     original path of the asset inside the project
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from unitypackage_unpacker.common import normalize_path
from .errors import CorruptEntryError, InvalidPathError, MetadataUnreadableError

logger = logging.getLogger(__name__)

ASSET_FILE_NAME = "asset"
META_FILE_NAME = "asset.meta"
PATHNAME_FILE_NAME = "pathname"

FOLDER_MARKER = "folderAsset: yes"


def _read_text(path: Path) -> str:
    # newline="" keeps the file content exactly as stored
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


@dataclass
class AssetRecord:
    """One asset of a package, keyed by its GUID.

    Fields are fixed once the record is built. Placing the record moves the
    files behind ``source_payload_path`` and ``source_metadata_path`` out of
    staging; their new locations are kept in ``placed_payload_path`` and
    ``placed_metadata_path``.
    """
    identifier: str
    source_payload_path: Path
    source_metadata_path: Path
    relative_target_path: Path
    is_directory_marker: bool
    placed_payload_path: Optional[Path] = field(default=None, compare=False)
    placed_metadata_path: Optional[Path] = field(default=None, compare=False)

    @classmethod
    def from_staging_dir(cls, entry_dir: Path | str) -> "AssetRecord":
        """Build a record from a staged ``<guid>`` directory.

        Only reads ``pathname`` and ``asset.meta``; nothing is moved.

        Args:
            entry_dir: Staging subdirectory named after the asset GUID

        Returns:
            Populated record

        Raises:
            InvalidPathError: If the directory has no usable final segment, or
                ``pathname`` is absolute or contains ``..`` segments
            CorruptEntryError: If ``pathname`` is missing, unreadable or empty
            MetadataUnreadableError: If ``asset.meta`` is missing or unreadable
        """
        entry_dir = Path(entry_dir)
        identifier = entry_dir.name
        if not identifier or identifier in (".", ".."):
            raise InvalidPathError(entry_dir)

        payload_path = entry_dir / ASSET_FILE_NAME
        metadata_path = entry_dir / META_FILE_NAME
        pathname_path = entry_dir / PATHNAME_FILE_NAME

        try:
            pathname = _read_text(pathname_path)
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptEntryError(pathname_path, e, identifier=identifier) from e

        if not pathname:
            raise CorruptEntryError(pathname_path, identifier=identifier, reason="empty pathname")

        relative_target = Path(pathname)
        # Root or drive, e.g. "/x" or "C:x"
        if relative_target.anchor or ".." in relative_target.parts:
            raise InvalidPathError(pathname_path, identifier=identifier, pathname=pathname)

        try:
            is_folder = FOLDER_MARKER in _read_text(metadata_path)
        except (OSError, UnicodeDecodeError) as e:
            raise MetadataUnreadableError(metadata_path, e, identifier=identifier) from e

        record = cls(
            identifier=identifier,
            source_payload_path=payload_path,
            source_metadata_path=metadata_path,
            relative_target_path=relative_target,
            is_directory_marker=is_folder,
        )
        logger.debug(f"Read entry {identifier}: {pathname!r} (folder={is_folder})")
        return record

    @property
    def is_placed(self) -> bool:
        """True once the payload and metadata have been moved out of staging."""
        return self.placed_payload_path is not None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the record, used for manifests."""
        return {
            "identifier": self.identifier,
            "relative_path": normalize_path(self.relative_target_path),
            "is_folder": self.is_directory_marker,
            "payload_path": str(self.placed_payload_path) if self.placed_payload_path else None,
            "metadata_path": str(self.placed_metadata_path) if self.placed_metadata_path else None,
        }

    def __str__(self) -> str:
        kind = "folder" if self.is_directory_marker else "file"
        return f"{self.identifier} -> {normalize_path(self.relative_target_path)} ({kind})"
