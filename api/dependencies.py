"""
Shared FastAPI dependencies.
Centralizes access to the objects created at startup.
"""

import logging
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request

from config import Settings, get_settings
from core.engine import Engine
from services.transform_service import TransformService

logger = logging.getLogger(__name__)


def get_engine(request: Request) -> Engine:
    """
    Get the Engine instance from app state.

    Raises:
        HTTPException: If the engine was not initialized
    """
    try:
        return request.app.state.engine
    except AttributeError as e:
        logger.error(f"Engine not initialized in app state: {e}")
        raise HTTPException(status_code=500, detail="Internal server error: Engine not initialized")


def get_app_settings(request: Request) -> Settings:
    """Settings stored at startup, or the cached environment settings"""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_config(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """Application configuration as a plain dict"""
    return settings.to_dict()


def get_transform_service(
    engine: Engine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
) -> TransformService:
    """
    Get transform service instance.

    Args:
        engine: Engine dependency
        settings: Settings dependency

    Returns:
        TransformService instance
    """
    return TransformService(engine=engine, settings=settings.image)
