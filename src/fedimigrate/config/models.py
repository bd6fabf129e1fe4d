"""Pydantic configuration models for fedimigrate."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from fedimigrate.errors import VersionError
from fedimigrate.models.version import parse_version

DEFAULT_TEMPLATE_CONTENT = (
    "<p><strong>%title%</strong></p>\n\n%content%\n\n<p>%hashtags%</p>\n\n<p>%shortlink%</p>"
)


class StorageConfig(BaseModel):
    """Storage configuration."""

    backend: Literal["sqlite", "memory"] = "sqlite"
    data_directory: Path = Field(default_factory=lambda: Path("~/.fedimigrate").expanduser())
    state_db_name: str = "store.db"

    @field_validator("data_directory", mode="before")
    @classmethod
    def expand_path(cls, v: Path | str) -> Path:
        """Expand user path and resolve to absolute."""
        if isinstance(v, str):
            v = Path(v)
        return v.expanduser().resolve()

    @property
    def db_path(self) -> Path:
        """Full path of the SQLite store file."""
        return self.data_directory / self.state_db_name


class MigrationConfig(BaseModel):
    """Migration runner configuration."""

    lock_ttl_seconds: int = Field(default=1800, ge=1)
    interval_seconds: int = Field(default=3600, ge=1, le=86400)
    target_version: str | None = None

    @field_validator("target_version")
    @classmethod
    def validate_target_version(cls, v: str | None) -> str | None:
        """Reject target versions that cannot be compared."""
        if v is None:
            return v
        try:
            parse_version(v)
        except VersionError as e:
            raise ValueError(str(e)) from e
        return v


class TemplatesConfig(BaseModel):
    """Post template configuration."""

    default_content: str = DEFAULT_TEMPLATE_CONTENT


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["console", "json"] = "console"
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"


class Config(BaseSettings):
    """Root configuration for fedimigrate."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    migration: MigrationConfig = Field(default_factory=MigrationConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "FEDIMIGRATE_",
        "env_nested_delimiter": "__",
    }
