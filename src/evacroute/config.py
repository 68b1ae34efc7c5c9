"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EVAC_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Evacuation Route Service"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    evacuation_points_file: Path = Field(
        default=Path("data/evacuation_points.csv"),
        description="Catalogue of evacuation points (Name, Latitude, Longitude, Type).",
    )
    directions_base_url: Optional[str] = Field(
        default="https://api.mapbox.com/directions/v5/mapbox",
        description="Base URL for the directions provider, without profile or coordinates.",
    )
    directions_profile: Literal["driving-traffic", "driving", "walking", "cycling"] = Field(
        default="driving-traffic",
        description="Routing profile. driving-traffic uses real-time traffic data.",
    )
    directions_access_token: Optional[str] = Field(
        default=None,
        description="Access token appended to every directions request.",
    )
    directions_timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_parallel_lookups: int = Field(
        default=8,
        ge=1,
        description="Concurrent destination lookups when ranking evacuation points (1 = sequential).",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "evacuation_points_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("directions_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
