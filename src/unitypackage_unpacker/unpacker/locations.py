"""Default locations derived from the working directory."""

from pathlib import Path

from .errors import NotAPackageFileError, WorkingDirectoryResolutionError

DEFAULT_STAGING_DIR_NAME = "tmp"


def working_directory() -> Path:
    """Return the process working directory.

    Raises:
        WorkingDirectoryResolutionError: If it was deleted or is inaccessible
    """
    try:
        return Path.cwd()
    except OSError as e:
        raise WorkingDirectoryResolutionError(cause=e) from e


def resolve_source_path(file_name: Path | str) -> Path:
    """Absolute package path; relative names are taken from the working directory."""
    path = Path(file_name)
    if path.is_absolute():
        return path
    return working_directory() / path


def default_staging_root() -> Path:
    """``<cwd>/tmp``."""
    return working_directory() / DEFAULT_STAGING_DIR_NAME


def package_stem(source_path: Path | str) -> str:
    """File name of the package without its extension.

    Raises:
        NotAPackageFileError: If the path has no file name component
    """
    stem = Path(source_path).stem
    if not stem:
        raise NotAPackageFileError(source_path)
    return stem


def default_destination_root(source_path: Path | str) -> Path:
    """``<cwd>/<package stem>``, e.g. ``./Textures`` for ``Textures.unitypackage``."""
    return working_directory() / package_stem(source_path)
