"""Unpacking-specific errors.

Every error carries the offending ``path`` and the underlying ``cause``
(usually an ``OSError``) as attributes and in ``context``; the message is
derived from them. Callers dispatch on the class, or on ``kind`` when the
error has crossed a serialization boundary (e.g. JSON logs).
"""

from pathlib import Path
from typing import Any, Optional

from unitypackage_unpacker.common import UnpackerError


class PackageError(UnpackerError):
    """Unpacking a package failed."""

    kind = "PackageError"
    description = "Package unpacking failed"

    def __init__(
        self,
        path: Optional[Path | str] = None,
        cause: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.cause = cause

        message = self.description
        if self.path is not None:
            message = f"{message}: {self.path}"
        if cause is not None:
            message = f"{message} ({cause})"

        super().__init__(
            message,
            kind=self.kind,
            path=str(self.path) if self.path is not None else None,
            cause=repr(cause) if cause is not None else None,
            **context,
        )


class PackageNotFoundError(PackageError):
    """Source archive cannot be opened or read."""

    kind = "PackageNotFound"
    description = "Package file not found"


class CorruptPackageError(PackageError):
    """Decompression or archive listing failed."""

    kind = "CorruptPackage"
    description = "Package is corrupt and cannot be unpacked"


class CorruptEntryError(CorruptPackageError):
    """One GUID entry is malformed or could not be moved into place."""

    kind = "CorruptEntry"
    description = "Package entry is corrupt"

    def __init__(
        self,
        path: Optional[Path | str] = None,
        cause: Optional[BaseException] = None,
        identifier: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.identifier = identifier
        super().__init__(path, cause, identifier=identifier, **context)


class MetadataUnreadableError(PackageError):
    """The ``asset.meta`` sidecar of an entry cannot be read."""

    kind = "MetadataUnreadable"
    description = "Could not read asset metadata"

    def __init__(
        self,
        path: Optional[Path | str] = None,
        cause: Optional[BaseException] = None,
        identifier: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.identifier = identifier
        super().__init__(path, cause, identifier=identifier, **context)


class StagingDirectoryUnavailableError(PackageError):
    """Staging directory cannot be created or listed."""

    kind = "StagingDirectoryUnavailable"
    description = "Staging directory is unavailable"


class TargetDirectoryUnavailableError(PackageError):
    """Destination directory for an asset cannot be created."""

    kind = "TargetDirectoryUnavailable"
    description = "Could not create target directory"


class InvalidPathError(PackageError):
    """A path cannot be interpreted (no file name, escapes its root, ...)."""

    kind = "InvalidPath"
    description = "Invalid path"


class NotAPackageFileError(InvalidPathError):
    """Source path has no file name or points to a directory."""

    kind = "InvalidPath"
    description = "Path does not point to a package file"


class WorkingDirectoryResolutionError(PackageError):
    """The process working directory is needed but cannot be determined."""

    kind = "WorkingDirectoryResolutionFailed"
    description = (
        "Could not determine the current working directory; "
        "pass absolute paths for the package, target and staging directories"
    )


class StagingCleanupError(PackageError):
    """Staging directory removal failed after a successful extraction.

    The destination tree and the catalog records are complete when this is
    raised.
    """

    kind = "StagingCleanupFailed"
    description = "Could not delete staging directory"


class CatalogStateError(PackageError):
    """Extraction requested on a catalog that already ran."""

    kind = "CatalogState"
    description = "Package has already been extracted"

    def __init__(self, path: Optional[Path | str] = None, state: Any = None, **context: Any) -> None:
        self.state = state
        super().__init__(path, None, state=getattr(state, "value", state), **context)
