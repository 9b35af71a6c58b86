"""Tests for default location resolution."""

import pytest
from pathlib import Path
from unittest.mock import patch
from unitypackage_unpacker.unpacker.locations import (
    default_destination_root,
    default_staging_root,
    package_stem,
    resolve_source_path,
    working_directory,
)
from unitypackage_unpacker.unpacker.catalog import UnityPackage
from unitypackage_unpacker.unpacker.errors import (
    InvalidPathError,
    NotAPackageFileError,
    WorkingDirectoryResolutionError,
)


class TestLocations:
    """Test cwd-derived defaults."""

    def test_relative_source(self, tmp_path, monkeypatch):
        """Test that relative names resolve against the working directory."""
        monkeypatch.chdir(tmp_path)

        assert resolve_source_path("Packages/a.unitypackage") == tmp_path / "Packages" / "a.unitypackage"

    def test_absolute_source_unchanged(self, tmp_path):
        """Test that absolute paths are kept."""
        source = tmp_path / "a.unitypackage"

        assert resolve_source_path(source) == source

    def test_default_staging(self, tmp_path, monkeypatch):
        """Test the <cwd>/tmp staging default."""
        monkeypatch.chdir(tmp_path)

        assert default_staging_root() == tmp_path / "tmp"

    def test_default_destination(self, tmp_path, monkeypatch):
        """Test the <cwd>/<stem> destination default."""
        monkeypatch.chdir(tmp_path)

        assert default_destination_root("/elsewhere/Textures.unitypackage") == tmp_path / "Textures"

    def test_stem_strips_last_extension_only(self):
        """Test stems of names with several dots."""
        assert package_stem("Pack.v2.unitypackage") == "Pack.v2"
        assert package_stem("NoExtension") == "NoExtension"

    def test_no_file_name(self):
        """Test that a path without a file name has no stem."""
        with pytest.raises(NotAPackageFileError) as exc_info:
            package_stem("/")

        assert isinstance(exc_info.value, InvalidPathError)


class TestWorkingDirectoryErrors:
    """Test an unavailable working directory."""

    def test_working_directory_error(self):
        """Test that an OS failure is mapped to its own error."""
        with patch(
            "unitypackage_unpacker.unpacker.locations.Path.cwd",
            side_effect=FileNotFoundError("deleted"),
        ):
            with pytest.raises(WorkingDirectoryResolutionError) as exc_info:
                working_directory()

        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_catalog_defaults_need_cwd(self):
        """Test that a catalog relying on defaults reports the failure."""
        with patch(
            "unitypackage_unpacker.unpacker.locations.Path.cwd",
            side_effect=OSError("gone"),
        ):
            with pytest.raises(WorkingDirectoryResolutionError):
                UnityPackage("file.unitypackage")

    def test_catalog_with_explicit_locations(self, tmp_path):
        """Test that explicit absolute locations never query the cwd."""
        with patch(
            "unitypackage_unpacker.unpacker.locations.Path.cwd",
            side_effect=OSError("gone"),
        ):
            package = UnityPackage(
                tmp_path / "file.unitypackage",
                destination_root=tmp_path / "out",
                staging_root=tmp_path / "tmp",
            )

        assert package.destination_root == tmp_path / "out"
        assert package.staging_root == Path(tmp_path / "tmp")
