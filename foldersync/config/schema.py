"""
Configuration Schema and Models

Defines Pydantic models for the configuration schema, providing validation,
default values, and type checking for all configuration options.

Author: foldersync Project
License: MIT
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.file_ops import paths_overlap


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class HashAlgorithm(str, Enum):
    """Content checksum algorithms."""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"


class SyncConfig(BaseModel):
    """Source and replica trees."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    source_path: str = Field(
        description="Directory to mirror from"
    )
    replica_path: str = Field(
        description="Directory kept identical to the source"
    )
    hash_algorithm: HashAlgorithm = Field(
        default=HashAlgorithm.SHA256,
        description="Checksum used for change and move detection"
    )

    @field_validator("source_path", "replica_path")
    @classmethod
    def validate_path(cls, v):
        """Reject empty paths."""
        if not v or not v.strip():
            raise ValueError("Directory path must not be empty")
        return v

    @field_validator("hash_algorithm", mode="before")
    @classmethod
    def normalize_hash_algorithm(cls, v):
        """Accept algorithm names in any case."""
        if isinstance(v, str):
            return v.lower()
        return v

    @model_validator(mode="after")
    def validate_distinct_trees(self):
        """The replica must live outside the source and vice versa."""
        if paths_overlap(self.source_path, self.replica_path):
            raise ValueError(
                f"Source and replica directories must not overlap: "
                f"{self.source_path}, {self.replica_path}"
            )
        return self


class SchedulingConfig(BaseModel):
    """Pass scheduling configuration."""

    interval_seconds: int = Field(
        default=60,
        ge=1,
        description="Seconds to wait between the end of a pass and the next one"
    )


class LoggingConfig(BaseModel):
    """Log sink configuration."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    log_file_path: str = Field(
        default="foldersync.log",
        description="Log file (parent directory created if missing)"
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application logging level"
    )
    log_to_console: bool = Field(
        default=True,
        description="Also log to stdout"
    )
    log_rotation_size: int = Field(
        default=10485760,  # 10MB
        description="Log file size before rotation (bytes)"
    )
    log_retention_count: int = Field(
        default=5,
        description="Number of rotated log files to keep"
    )
    json_format: bool = Field(
        default=False,
        description="Write log records as JSON"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


class Config(BaseModel):
    """
    Root configuration model for foldersync.

    Loaded from an optional YAML file, then overridden by environment
    variables and command-line arguments.
    """

    model_config = ConfigDict(validate_assignment=True)

    sync: SyncConfig
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
