"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from station_ranker.domain.models import DEFAULT_PRICE_FIELD, LATITUDE_FIELD, LONGITUDE_FIELD

from .duration import DurationParseError, parse_duration, validate_duration_range

DEFAULT_MINETUR_URL = (
    "https://sedeaplicaciones.minetur.gob.es/ServiciosRESTCarburantes/PreciosCarburantes/"
)
DEFAULT_IP_LOOKUP_URL = "http://ip-api.com/json/"


class SourceType(str, Enum):
    """Where the raw station batch comes from."""

    MINETUR = "minetur"
    FILE = "file"


class LocationType(str, Enum):
    """How the caller's location is obtained."""

    STATIC = "static"
    IP = "ip"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SourceConfig(BaseModel):
    """Station data source."""

    type: SourceType = Field(SourceType.MINETUR, description="Source type (minetur, file)")
    base_url: str = Field(DEFAULT_MINETUR_URL, description="Base URL of the fuel-price REST service")
    path: Optional[Path] = Field(None, description="JSON snapshot path (file sources)")
    latitude_field: str = Field(LATITUDE_FIELD, min_length=1)
    longitude_field: str = Field(LONGITUDE_FIELD, min_length=1)

    @field_validator("base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Endpoints are appended to base_url, so it must end with '/'."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("base_url cannot be empty")
        return stripped if stripped.endswith("/") else stripped + "/"

    @model_validator(mode="after")
    def require_path_for_file_source(self):
        if self.type == SourceType.FILE and self.path is None:
            raise ValueError("source.path is required when source.type is 'file'")
        return self

    model_config = {"use_enum_values": True}


class LocationConfig(BaseModel):
    """Caller location settings."""

    type: LocationType = Field(LocationType.STATIC, description="Location provider (static, ip)")
    latitude: Optional[float] = Field(None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(None, ge=-180.0, le=180.0)
    lookup_url: str = Field(DEFAULT_IP_LOOKUP_URL, description="IP geolocation endpoint")

    @model_validator(mode="after")
    def require_coordinates_for_static(self):
        if self.type == LocationType.STATIC:
            if self.latitude is None or self.longitude is None:
                raise ValueError(
                    "location.latitude and location.longitude are required for a static location"
                )
        return self

    model_config = {"use_enum_values": True}


class RankingConfig(BaseModel):
    """Result bounds."""

    top_k: int = Field(6, ge=1, description="Number of nearest stations to return")
    radius_km: Optional[float] = Field(
        None, gt=0, description="Drop stations farther than this (None = unbounded)"
    )


class DisplayConfig(BaseModel):
    """Presentation settings."""

    price_field: str = Field(DEFAULT_PRICE_FIELD, min_length=1, description="Price column to show")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format (json or key-value)")

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """HTTP settings shared by adapters and location providers."""

    http_request_timeout: int = Field(30, ge=5, le=300, description="Request timeout (seconds)")
    user_agent: str = Field("StationRanker/1.0", min_length=1)

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object."""

    source: SourceConfig = Field(default_factory=SourceConfig)
    location: LocationConfig = Field(default_factory=lambda: LocationConfig(type=LocationType.IP))
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    watch_interval: str = Field("5m", description="Location polling interval in watch mode")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)

    # Computed from watch_interval
    watch_interval_seconds: Optional[int] = None

    @field_validator("watch_interval")
    @classmethod
    def validate_watch_interval(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def compute_fields(self):
        self.watch_interval_seconds = parse_duration(self.watch_interval)
        return self
