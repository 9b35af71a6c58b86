"""CLI command for unpacking a package into a project tree."""

import logging
import argparse
from pathlib import Path
import sys
from typing import Optional

from .catalog import UnityPackage
from .config import UnpackerConfig
from .errors import StagingCleanupError
from unitypackage_unpacker.common import setup_logging, ConfigLoader, UnpackerError

# Application name derived from the top-level package name
_package = __package__ or "unitypackage_unpacker.unpacker"
APP_NAME = _package.split('.')[0].replace('_', '-')


def progress_callback(logger: logging.Logger, current: int, total: int, guid: str) -> None:
    """Log placement progress.

    Args:
        logger: Logger instance
        current: Current entry number (1-based)
        total: Total number of entries
        guid: GUID of the entry just placed
    """
    percent = (current / total) * 100 if total > 0 else 0
    logger.debug(f"Placed entry {current}/{total} ({percent:.1f}%): {guid}")


def unpack_command(
    config: UnpackerConfig,
    package: Path,
    target_dir_override: Optional[Path] = None,
    staging_dir_override: Optional[Path] = None,
    keep_staging: bool = False,
    manifest_override: Optional[Path] = None,
) -> int:
    """Unpack a package.

    Args:
        config: Configuration object
        package: Package file to unpack
        target_dir_override: Optional override for the target directory
        staging_dir_override: Optional override for the staging directory
        keep_staging: Keep the staging directory even if config deletes it
        manifest_override: Optional override for the manifest file

    Returns:
        Exit code (0 for success)
    """
    logger_name = __package__ or __name__
    logger = logging.getLogger(logger_name)

    target_dir = target_dir_override if target_dir_override else config.unpacker.target_path()
    staging_dir = staging_dir_override if staging_dir_override else config.unpacker.staging_path()
    manifest = manifest_override if manifest_override else config.unpacker.manifest_path()
    delete_staging = config.unpacker.delete_staging and not keep_staging

    try:
        catalog = UnityPackage(package, destination_root=target_dir, staging_root=staging_dir)

        logger.info(f"Package: {catalog.source_path}")
        logger.info(f"Target directory: {catalog.destination_root}")
        logger.info(f"Staging directory: {catalog.staging_root}")

        try:
            catalog.unpack(
                delete_staging=delete_staging,
                progress_callback=lambda c, t, g: progress_callback(logger, c, t, g),
            )
        except StagingCleanupError as e:
            # Assets are already in place
            logger.warning(f"{e.message}; remove it manually", extra={"extra_fields": e.context})

        if manifest:
            logger.info(f"Manifest written to {catalog.write_manifest(manifest)}")

        logger.info(f"Unpack complete: {catalog.summary()}")
        return 0

    except UnpackerError as e:
        logger.error(f"Unpack failed: {e.message}", extra={"extra_fields": e.context})
        return 1
    except Exception as e:
        logger.exception(f"Unpack failed: {e}")
        return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the unpack command."""
    parser = argparse.ArgumentParser(
        prog="unitypackage-unpack",
        description="Unpack a .unitypackage file into its original project layout"
    )
    parser.add_argument(
        "package",
        type=Path,
        help="Package file, absolute or relative to the working directory"
    )
    parser.add_argument(
        "--target-dir",
        type=Path,
        required=False,
        help="Directory to rebuild the project tree in (overrides config)"
    )
    parser.add_argument(
        "--staging-dir",
        type=Path,
        required=False,
        help="Scratch directory for raw package entries (overrides config)"
    )
    parser.add_argument(
        "--keep-staging",
        action="store_true",
        help="Keep the staging directory after unpacking"
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        help="Write a JSON GUID manifest to this file (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )

    args = parser.parse_args(argv)

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=UnpackerConfig
    )

    try:
        config = loader.load(defaults_path=args.config)
    except UnpackerError as e:
        # Logging is not configured yet
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    setup_logging(config.logging)

    return unpack_command(
        config=config,
        package=args.package,
        target_dir_override=args.target_dir,
        staging_dir_override=args.staging_dir,
        keep_staging=args.keep_staging,
        manifest_override=args.manifest,
    )


if __name__ == "__main__":
    sys.exit(main())
