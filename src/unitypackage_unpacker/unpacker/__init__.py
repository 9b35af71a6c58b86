"""Package unpacker: staging, asset records, placement and the GUID catalog."""

from .asset import AssetRecord
from .catalog import CatalogState, PackageSummary, UnityPackage
from .errors import (
    PackageError,
    PackageNotFoundError,
    CorruptPackageError,
    CorruptEntryError,
    MetadataUnreadableError,
    StagingDirectoryUnavailableError,
    TargetDirectoryUnavailableError,
    InvalidPathError,
    NotAPackageFileError,
    WorkingDirectoryResolutionError,
    StagingCleanupError,
    CatalogStateError,
)
from .placer import place_asset, metadata_file_name
from .staging import stage_package

__all__ = [
    'AssetRecord',
    'CatalogState',
    'PackageSummary',
    'UnityPackage',
    'PackageError',
    'PackageNotFoundError',
    'CorruptPackageError',
    'CorruptEntryError',
    'MetadataUnreadableError',
    'StagingDirectoryUnavailableError',
    'TargetDirectoryUnavailableError',
    'InvalidPathError',
    'NotAPackageFileError',
    'WorkingDirectoryResolutionError',
    'StagingCleanupError',
    'CatalogStateError',
    'place_asset',
    'metadata_file_name',
    'stage_package',
]
