"""Package catalog: unpack a package and look its assets up by GUID."""

import json
import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional

from unitypackage_unpacker.common import LogContext, is_within_directory
from .asset import AssetRecord
from .errors import (
    CatalogStateError,
    InvalidPathError,
    StagingCleanupError,
    StagingDirectoryUnavailableError,
)
from .locations import default_destination_root, default_staging_root, resolve_source_path
from .placer import place_asset
from .staging import stage_package

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class CatalogState(Enum):
    """Lifecycle of a catalog; extraction runs at most once."""
    CREATED = "created"
    EXTRACTING = "extracting"
    EXTRACTED = "extracted"
    FAILED = "failed"


@dataclass
class PackageSummary:
    """Counts of what an extraction produced."""
    entries: int
    files: int
    folders: int

    def __str__(self) -> str:
        return f"{self.entries} entries ({self.files} files, {self.folders} folders)"


class UnityPackage:
    """Catalog of the assets in one package.

    Locations are resolved once, here; later changes of the working directory
    do not move them.
    """

    def __init__(
        self,
        file_name: Path | str,
        destination_root: Optional[Path | str] = None,
        staging_root: Optional[Path | str] = None,
    ):
        """Initialize the catalog.

        Args:
            file_name: Package path, absolute or relative to the working directory
            destination_root: Where the project tree is rebuilt
                (default: ``<cwd>/<package stem>``)
            staging_root: Scratch directory for raw entries (default: ``<cwd>/tmp``)

        Raises:
            WorkingDirectoryResolutionError: If a default needs the working
                directory and it cannot be determined
            NotAPackageFileError: If ``file_name`` has no file name component
            InvalidPathError: If ``destination_root`` is ``staging_root`` or lies
                inside it
        """
        self.source_path = resolve_source_path(file_name)
        self.destination_root = (
            Path(destination_root) if destination_root is not None
            else default_destination_root(self.source_path)
        )
        self.staging_root = (
            Path(staging_root) if staging_root is not None
            else default_staging_root()
        )
        if is_within_directory(self.staging_root, self.destination_root):
            raise InvalidPathError(
                self.destination_root,
                staging_root=str(self.staging_root),
                reason="destination inside staging directory",
            )
        self._records: Dict[str, AssetRecord] = {}
        self._state = CatalogState.CREATED

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def records(self) -> Mapping[str, AssetRecord]:
        """Read-only view of the records keyed by GUID."""
        return MappingProxyType(self._records)

    def get(self, identifier: str) -> Optional[AssetRecord]:
        """Look a record up by GUID; unknown GUIDs return None."""
        return self._records.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"UnityPackage({str(self.source_path)!r}, state={self._state.value})"

    def unpack(
        self,
        delete_staging: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Mapping[str, AssetRecord]:
        """Decompress the package and rebuild its project tree.

        Args:
            delete_staging: Remove the staging directory afterwards
            progress_callback: Optional callback(current, total, guid) per entry

        Returns:
            Records keyed by GUID

        Raises:
            CatalogStateError: If this catalog already ran an extraction
            PackageError: Any subclass, for the first failure encountered
        """
        return self._run(True, delete_staging, progress_callback)

    def extract_staging(
        self,
        delete_staging: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Mapping[str, AssetRecord]:
        """Rebuild the project tree from an already populated staging directory.

        Same contract as :meth:`unpack`, without reading the package file.
        """
        return self._run(False, delete_staging, progress_callback)

    def _run(
        self,
        stage: bool,
        delete_staging: bool,
        progress_callback: Optional[ProgressCallback],
    ) -> Mapping[str, AssetRecord]:
        if self._state is not CatalogState.CREATED:
            raise CatalogStateError(self.source_path, self._state)

        self._state = CatalogState.EXTRACTING
        logger.info(f"Unpacking {self.source_path.name} to {self.destination_root}")

        try:
            with LogContext(logger, package=self.source_path.name):
                if stage:
                    stage_package(self.source_path, self.staging_root)
                records = self._place_staged_entries(progress_callback)
        except Exception as e:
            self._state = CatalogState.FAILED
            logger.debug(f"Failed to unpack {self.source_path.name}: {e}")
            raise

        self._records = records
        self._state = CatalogState.EXTRACTED
        logger.info(f"Unpacked {self.source_path.name}: {self.summary()}")

        if delete_staging:
            self._delete_staging()

        return self.records

    def _place_staged_entries(self, progress_callback: Optional[ProgressCallback]) -> Dict[str, AssetRecord]:
        """Build and place one record per staged entry.

        Records are collected in a local table so that a failure leaves the
        catalog empty.
        """
        try:
            children = sorted(self.staging_root.iterdir())
        except OSError as e:
            raise StagingDirectoryUnavailableError(self.staging_root, e) from e

        entries = []
        for child in children:
            if child.is_dir():
                entries.append(child)
            else:
                # e.g. the package preview .icon.png
                logger.info(f"Ignoring non-entry file in staging: {child.name}")

        total = len(entries)
        records: Dict[str, AssetRecord] = {}

        for i, entry in enumerate(entries, start=1):
            with LogContext(logger, guid=entry.name):
                record = AssetRecord.from_staging_dir(entry)
                place_asset(record, self.destination_root)

            if record.identifier in records:
                logger.warning(f"Duplicate GUID {record.identifier}, replacing previous entry")
            records[record.identifier] = record

            if i % 100 == 0:
                logger.info(f"Placed {i}/{total} entries")
            if progress_callback:
                progress_callback(i, total, record.identifier)

        return records

    def _delete_staging(self) -> None:
        try:
            shutil.rmtree(self.staging_root)
        except OSError as e:
            raise StagingCleanupError(self.staging_root, e) from e
        logger.debug(f"Deleted staging directory {self.staging_root}")

    def summary(self) -> PackageSummary:
        folders = sum(1 for r in self._records.values() if r.is_directory_marker)
        return PackageSummary(
            entries=len(self._records),
            files=len(self._records) - folders,
            folders=folders,
        )

    def write_manifest(self, manifest_path: Path | str) -> Path:
        """Write the GUID -> record mapping as JSON.

        Args:
            manifest_path: Output file; parent directories are created

        Returns:
            Path of the written manifest
        """
        manifest_path = Path(manifest_path)
        manifest_path.parent.mkdir(parents=True, exist_ok=True)

        manifest = {guid: record.to_dict() for guid, record in sorted(self._records.items())}
        with open(manifest_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, ensure_ascii=False)

        logger.debug(f"Wrote manifest with {len(manifest)} entries to {manifest_path}")
        return manifest_path
