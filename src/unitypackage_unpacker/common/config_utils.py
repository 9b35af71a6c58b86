"""Configuration utilities."""

import tempfile
import platformdirs
from pathlib import Path


def expand_path_variables(path: str) -> str:
    """Expand ${VAR} variables in paths.

    Supported variables:
        ${CWD}: Current working directory
        ${USER_HOME}: User's home directory
        ${USER_DATA}: User data directory
        ${USER_CONFIG}: User config directory
        ${USER_CACHE}: User cache directory
        ${USER_LOGS}: User log directory
        ${TEMP}: Temporary directory

    Args:
        path: Path string with variables

    Returns:
        Expanded path string
    """
    if not isinstance(path, str) or "${" not in path:
        return path

    replacements = {
        "${CWD}": lambda: str(Path.cwd()),
        "${USER_HOME}": lambda: str(Path.home()),
        "${USER_DATA}": platformdirs.user_data_dir,
        "${USER_CONFIG}": platformdirs.user_config_dir,
        "${USER_CACHE}": platformdirs.user_cache_dir,
        "${USER_LOGS}": platformdirs.user_log_dir,
        "${TEMP}": tempfile.gettempdir,
    }

    for var, resolve in replacements.items():
        if var in path:
            path = path.replace(var, resolve())

    return path
