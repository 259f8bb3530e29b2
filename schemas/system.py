"""
System API models.
"""

from typing import Dict

from pydantic import BaseModel


class SystemStatus(BaseModel):
    """Process status"""

    status: str
    uptime: float
    memory_usage: Dict[str, float]
    cpu_percent: float
