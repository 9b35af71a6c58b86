"""Tests for the unitypackage-unpack command."""

import json
import logging
import os
import pytest
from unittest.mock import patch
from unitypackage_unpacker.unpacker import cli

TEXTURE_PATH = "Assets/Textures/Ground/IMGP1287.jpg"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep host config files, env variables and root handlers out of the tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "home" / ".config"))
    for key in list(os.environ):
        if key.startswith("UNITYPACKAGE_UNPACKER_"):
            monkeypatch.delenv(key)
    with patch.object(cli, "setup_logging") as setup:
        yield setup


class TestMain:
    """Test successful runs."""

    def test_defaults(self, tmp_path, sample_package):
        """Test unpacking next to the working directory."""
        assert cli.main(["Textures.unitypackage"]) == 0

        assert (tmp_path / "Textures" / TEXTURE_PATH).exists()
        assert (tmp_path / "Textures" / "Assets/Textures/Ground/IMGP1287.jpg.unitymeta").exists()
        assert not (tmp_path / "tmp").exists()

    def test_overrides(self, tmp_path, sample_package):
        """Test explicit target and staging directories."""
        code = cli.main([
            str(sample_package),
            "--target-dir", str(tmp_path / "out"),
            "--staging-dir", str(tmp_path / "scratch"),
            "--keep-staging",
        ])

        assert code == 0
        assert (tmp_path / "out" / "Assets/Scripts/Player.cs").exists()
        assert (tmp_path / "scratch").is_dir()

    def test_manifest(self, tmp_path, sample_package):
        """Test writing the GUID manifest."""
        manifest = tmp_path / "guids.json"

        assert cli.main([str(sample_package), "--manifest", str(manifest)]) == 0

        data = json.loads(manifest.read_text(encoding="utf-8"))
        assert len(data) == 4

    def test_logging_configured_from_config(self, sample_package, isolated_environment):
        """Test that logging is set up from the loaded config."""
        cli.main([str(sample_package)])

        isolated_environment.assert_called_once()
        logging_config = isolated_environment.call_args.args[0]
        assert (logging_config.level, logging_config.format, logging_config.file) == ("INFO", "simple", None)
        assert logging_config.max_file_size_mb == 10

    def test_config_file(self, tmp_path, sample_package, isolated_environment):
        """Test values from an explicit config file."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text(
            '[logging]\nlevel = "debug"\n\n'
            f'[unpacker]\ntarget_dir = "{(tmp_path / "from-config").as_posix()}"\ndelete_staging = false\n'
        )

        assert cli.main([str(sample_package), "--config", str(config_file)]) == 0

        assert (tmp_path / "from-config" / TEXTURE_PATH).exists()
        assert (tmp_path / "tmp").is_dir()
        assert isolated_environment.call_args.args[0].level == "DEBUG"

    def test_env_override(self, tmp_path, sample_package, monkeypatch):
        """Test that environment variables override config files."""
        monkeypatch.setenv("UNITYPACKAGE_UNPACKER_UNPACKER_DELETE_STAGING", "false")
        monkeypatch.setenv("UNITYPACKAGE_UNPACKER_UNPACKER_STAGING_DIR", str(tmp_path / "env-staging"))

        assert cli.main([str(sample_package)]) == 0

        assert (tmp_path / "env-staging").is_dir()

    def test_cleanup_failure_is_not_fatal(self, tmp_path, sample_package):
        """Test that a staging directory that cannot be removed only warns."""
        with patch(
            "unitypackage_unpacker.unpacker.catalog.shutil.rmtree",
            side_effect=PermissionError("busy"),
        ):
            assert cli.main([str(sample_package)]) == 0

        assert (tmp_path / "Textures" / TEXTURE_PATH).exists()


class TestMainErrors:
    """Test failing runs."""

    def test_missing_package(self, tmp_path):
        """Test that a missing package exits with 1."""
        assert cli.main(["missing.unitypackage"]) == 1

        assert not (tmp_path / "missing").exists()

    def test_corrupt_package(self, tmp_path):
        """Test that a corrupt package exits with 1."""
        (tmp_path / "broken.unitypackage").write_bytes(b"not a package")

        assert cli.main(["broken.unitypackage"]) == 1

    def test_missing_config_file(self, tmp_path, sample_package, capsys):
        """Test that an explicit missing config file exits with 1."""
        assert cli.main([str(sample_package), "--config", str(tmp_path / "nope.toml")]) == 1

        assert "nope.toml" in capsys.readouterr().err

    def test_invalid_config_value(self, tmp_path, sample_package, monkeypatch):
        """Test that an invalid value exits with 1."""
        monkeypatch.setenv("UNITYPACKAGE_UNPACKER_LOGGING_LEVEL", "loud")

        assert cli.main([str(sample_package)]) == 1

    def test_destination_inside_staging(self, tmp_path, make_package):
        """Test that a package named like the staging directory is refused."""
        make_package(tmp_path / "tmp.unitypackage", [("a" * 32, "Assets/a.txt", b"a")])

        assert cli.main(["tmp.unitypackage"]) == 1

        assert not (tmp_path / "tmp").exists()

    def test_failure_logged_once(self, tmp_path, caplog):
        """Test that a failed unpack produces a single error line."""
        with caplog.at_level(logging.DEBUG):
            assert cli.main(["missing.unitypackage"]) == 1

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert errors[0].extra_fields["kind"] == "PackageNotFound"

    def test_usage_error(self):
        """Test that a missing argument is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 2
