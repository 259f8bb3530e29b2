"""
Application configuration.

Settings are pydantic models populated from IMAGEOPS_* environment variables:

    IMAGEOPS_ENV=production
    IMAGEOPS_LOG_LEVEL=DEBUG
    IMAGEOPS_API_PORT=8080
    IMAGEOPS_CORS_ORIGINS=http://localhost:1880,http://localhost:3000
    IMAGEOPS_MAX_IMAGE_PIXELS=16777216

The engine itself reads no configuration; only the front-ends do.
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.constants import APIConstants, ImageIOConstants, SystemConstants

logger = logging.getLogger(__name__)

ENV_PREFIX = "IMAGEOPS_"


class SystemSettings(BaseModel):
    """Process-wide settings"""

    log_level: str = SystemConstants.LOG_LEVEL_DEFAULT
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class APISettings(BaseModel):
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = ["*"]


class ImageSettings(BaseModel):
    """Limits and defaults for decoding and encoding images"""

    max_upload_size_mb: float = Field(APIConstants.DEFAULT_MAX_UPLOAD_SIZE_MB, gt=0)
    max_image_pixels: int = Field(APIConstants.DEFAULT_MAX_IMAGE_PIXELS, gt=0)
    default_output_format: str = ImageIOConstants.DEFAULT_OUTPUT_FORMAT
    jpeg_quality: int = Field(ImageIOConstants.DEFAULT_JPEG_QUALITY, ge=1, le=100)

    @field_validator("default_output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        format = v.upper()
        if format not in ImageIOConstants.ALLOWED_OUTPUT_FORMATS:
            raise ValueError(
                f"Unsupported output format {v}, "
                f"expected one of {ImageIOConstants.ALLOWED_OUTPUT_FORMATS}"
            )
        return format


class Settings(BaseModel):
    """Top-level settings"""

    environment: str = "development"
    system: SystemSettings = SystemSettings()
    api: APISettings = APISettings()
    image: ImageSettings = ImageSettings()

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Unset variables keep their defaults. Invalid values raise
        pydantic.ValidationError.
        """
        environ = os.environ if environ is None else environ

        def read(name: str) -> Any:
            return environ.get(ENV_PREFIX + name)

        sections: Dict[str, Dict[str, Any]] = {"system": {}, "api": {}, "image": {}}
        mapping = {
            "LOG_LEVEL": ("system", "log_level"),
            "DEBUG": ("system", "debug"),
            "API_HOST": ("api", "host"),
            "API_PORT": ("api", "port"),
            "CORS_ENABLED": ("api", "cors_enabled"),
            "MAX_UPLOAD_SIZE_MB": ("image", "max_upload_size_mb"),
            "MAX_IMAGE_PIXELS": ("image", "max_image_pixels"),
            "OUTPUT_FORMAT": ("image", "default_output_format"),
            "JPEG_QUALITY": ("image", "jpeg_quality"),
        }

        for name, (section, field) in mapping.items():
            value = read(name)
            if value is not None:
                sections[section][field] = value

        origins = read("CORS_ORIGINS")
        if origins is not None:
            sections["api"]["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        return cls(
            environment=read("ENV") or "development",
            system=SystemSettings(**sections["system"]),
            api=APISettings(**sections["api"]),
            image=ImageSettings(**sections["image"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for the /config endpoint and app state"""
        return self.model_dump()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    settings = Settings.from_env()
    logger.debug(f"Loaded settings for environment {settings.environment}")
    return settings
