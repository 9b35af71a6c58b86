"""Shared fixtures for building staged entries and package archives."""

import io
import tarfile
from pathlib import Path
from typing import Iterable, Optional

import pytest

TEXTURE_GUID = "1af567ac160bb164fb19b8cb9b55b34b"
TEXTURE_PATH = "Assets/Textures/Ground/IMGP1287.jpg"


def meta_text(guid: str, folder: bool = False) -> str:
    """Minimal asset.meta content as written by the editor."""
    lines = ["fileFormatVersion: 2", f"guid: {guid}"]
    if folder:
        lines.append("folderAsset: yes")
    lines.append("timeCreated: 1479383291")
    return "\n".join(lines) + "\n"


def write_entry(
    staging_root: Path,
    guid: str,
    pathname: Optional[str],
    asset: Optional[bytes] = b"\xff\xd8\xff\xe0 fake jpeg",
    folder: bool = False,
    meta: Optional[str] = "",
) -> Path:
    """Create one ``<guid>`` staging directory.

    ``pathname=None`` or ``meta=None`` leaves that member out; an empty
    ``meta`` writes the default metadata for the entry kind.
    """
    entry = staging_root / guid
    entry.mkdir(parents=True, exist_ok=True)
    if pathname is not None:
        (entry / "pathname").write_bytes(pathname.encode("utf-8"))
    if meta is not None:
        (entry / "asset.meta").write_text(meta or meta_text(guid, folder), encoding="utf-8")
    if asset is not None and not folder:
        (entry / "asset").write_bytes(asset)
    return entry


def _add_bytes(tf: tarfile.TarFile, name: str, data: bytes) -> None:
    info = tarfile.TarInfo(name)
    info.type = tarfile.REGTYPE
    info.mode = 0o644
    info.size = len(data)
    tf.addfile(info, io.BytesIO(data))


def write_package(package_path: Path, entries: Iterable[tuple]) -> Path:
    """Write a gzip-compressed tar in the package layout.

    ``entries`` holds ``(guid, pathname, asset_bytes_or_None)`` tuples;
    ``None`` marks a folder entry.
    """
    with tarfile.open(package_path, "w:gz") as tf:
        for guid, pathname, asset in entries:
            info = tarfile.TarInfo(f"./{guid}/")
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            tf.addfile(info)

            _add_bytes(tf, f"./{guid}/pathname", pathname.encode("utf-8"))
            _add_bytes(tf, f"./{guid}/asset.meta", meta_text(guid, asset is None).encode("utf-8"))
            if asset is not None:
                _add_bytes(tf, f"./{guid}/asset", asset)
    return package_path


@pytest.fixture
def staging_root(tmp_path):
    """Empty staging directory."""
    root = tmp_path / "staging"
    root.mkdir()
    return root


@pytest.fixture
def destination_root(tmp_path):
    """Destination directory (not created; placement creates it)."""
    return tmp_path / "project"


@pytest.fixture
def sample_package(tmp_path):
    """Package with a folder entry, a texture and a script."""
    return write_package(
        tmp_path / "Textures.unitypackage",
        [
            ("0a1b2c3d4e5f60718293a4b5c6d7e8f9", "Assets/Textures", None),
            ("0f9e8d7c6b5a49382716051423324150", "Assets/Textures/Ground", None),
            (TEXTURE_GUID, TEXTURE_PATH, b"\xff\xd8\xff\xe0 fake jpeg"),
            ("5d41402abc4b2a76b9719d911017c592", "Assets/Scripts/Player.cs", b"public class Player {}\n"),
        ],
    )


@pytest.fixture
def make_entry():
    """Factory for staged ``<guid>`` directories, see ``write_entry``."""
    return write_entry


@pytest.fixture
def make_package():
    """Factory for package archives, see ``write_package``."""
    return write_package
