"""Configuration models using Pydantic for validation."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_dir: Path = Field(default=Path("logs"), description="Directory for log files")
    max_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1024, description="Max log file size before rotation (bytes)"
    )
    backup_count: int = Field(default=5, ge=1, description="Number of rotated log files to keep")
    console_enabled: bool = Field(default=True, description="Enable console logging")
    file_enabled: bool = Field(default=False, description="Enable file logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper


class AnalysisSettings(BaseModel):
    """Settings for document analysis."""

    media_dir: str = Field(
        default="word/media/", description="DOCX package folder whose entries count as images"
    )
    max_file_size_mb: float = Field(
        default=100, gt=0, description="Maximum file size read from disk (in MB)"
    )

    @field_validator("media_dir")
    @classmethod
    def normalize_media_dir(cls, v: str) -> str:
        """Store the folder as a relative archive path ending in a slash."""
        v = v.strip().strip("/")
        if not v:
            raise ValueError("media_dir must not be empty")
        return f"{v}/"


class DisplaySettings(BaseModel):
    """Settings for presenting results."""

    group_digits: bool = Field(default=True, description="Group thousands in counts (1,234)")
    size_decimals: int = Field(
        default=2, ge=0, le=6, description="Decimal places for human-readable file sizes"
    )


class DocStatsConfig(BaseModel):
    """Main configuration for DocStats."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )
    analysis: AnalysisSettings = Field(
        default_factory=AnalysisSettings, description="Analysis settings"
    )
    display: DisplaySettings = Field(
        default_factory=DisplaySettings, description="Display settings"
    )
