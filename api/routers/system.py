"""
System API Router - Status and configuration
"""

import logging
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Depends

from api.dependencies import get_config
from api.exceptions import safe_endpoint
from schemas import SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/status")
@safe_endpoint
async def get_status() -> SystemStatus:
    """Get process status"""
    # Get memory usage
    process = psutil.Process()
    memory_info = process.memory_info()

    # Get system memory
    virtual_memory = psutil.virtual_memory()

    return SystemStatus(
        status="healthy",
        uptime=time.time() - START_TIME,
        memory_usage={
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": virtual_memory.percent,
            "available_mb": virtual_memory.available / 1024 / 1024,
        },
        cpu_percent=process.cpu_percent(interval=None),
    )


@router.get("/config")
@safe_endpoint
async def get_configuration(config: dict = Depends(get_config)) -> dict:
    """Get current configuration"""
    return config


@router.get("/health")
async def health_check() -> dict:
    """Simple health check"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
