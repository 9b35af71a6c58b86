"""Configuration schema for the package unpacker."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from unitypackage_unpacker.common import LoggingConfig, expand_path_variables


class UnpackConfig(BaseModel):
    """Configuration for unpacking packages."""

    model_config = ConfigDict(extra='forbid')

    target_dir: Optional[str] = Field(
        default=None,
        description="Directory to rebuild the project tree in (default: ./<package name>)"
    )
    staging_dir: Optional[str] = Field(
        default=None,
        description="Scratch directory for raw package entries (default: ./tmp)"
    )
    delete_staging: bool = Field(
        default=True,
        description="Delete the staging directory after a successful unpack"
    )
    manifest_file: Optional[str] = Field(
        default=None,
        description="Write a JSON GUID manifest to this file"
    )

    @field_validator('target_dir', 'staging_dir', 'manifest_file', mode='before')
    @classmethod
    def expand_paths(cls, v: Optional[str]) -> Optional[str]:
        """Expand ${VAR} in paths; empty strings mean "use the default"."""
        if isinstance(v, str):
            if not v.strip():
                return None
            return expand_path_variables(v)
        return v

    def target_path(self) -> Optional[Path]:
        return Path(self.target_dir) if self.target_dir else None

    def staging_path(self) -> Optional[Path]:
        return Path(self.staging_dir) if self.staging_dir else None

    def manifest_path(self) -> Optional[Path]:
        return Path(self.manifest_file) if self.manifest_file else None


class UnpackerConfig(BaseModel):
    """Root configuration for the package unpacker."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    unpacker: UnpackConfig = Field(default_factory=UnpackConfig)
