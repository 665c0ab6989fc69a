"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:8000", "http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # === Upload limits ===
    max_upload_bytes: int = Field(
        default=20 * 1024 * 1024,
        description="Max size of a single uploaded GPX file"
    )
    max_files: int = Field(default=50, description="Max files per request")

    # === Merge output ===
    merged_output_name: str = Field(default="merged.gpx")
    merged_track_name: str = Field(default="Merged Route")
    merged_track_description: str = Field(
        default="All uploaded tracks combined into one route"
    )
    merged_track_type: Optional[str] = Field(
        default=None,
        description="Optional <type> of the merged track (e.g. cycling)"
    )
    merge_creator: str = Field(default="GPX Merger")

    # === Normalize output ===
    normalize_creator: str = Field(default="GPX Normalizer")
    normalized_suffix: str = Field(default="_normalized")

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept 'debug', 'Info' etc."""
        return v.upper()

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GPX_MONSTER_",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
