"""
Configuration loader for the background-removal service.

Environment variables are centralized here to keep the rest of the code
focused on request handling and to make operational tuning clear.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

OUTPUT_FORMATS = {"image/png", "image/webp", "image/jpeg"}
OUTPUT_TYPES = {"foreground", "mask"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Model + output encoding
    rembg_model: str = "u2net"
    output_format: str = "image/png"
    output_quality: float = Field(0.8, ge=0.0, le=1.0)
    output_type: str = "foreground"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @field_validator("rembg_model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("REMBG_MODEL must not be empty")
        return v.strip()

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in OUTPUT_FORMATS:
            raise ValueError("OUTPUT_FORMAT must be one of image/png|image/webp|image/jpeg")
        return v

    @field_validator("output_type")
    @classmethod
    def validate_output_type(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in OUTPUT_TYPES:
            raise ValueError("OUTPUT_TYPE must be one of foreground|mask")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings to avoid reparsing env on every call."""
    return Settings()


def quality_to_encoder_quality(settings: Settings) -> int:
    """Translate the 0..1 quality setting into Pillow's 0..100 scale."""
    return int(round(settings.output_quality * 100))
