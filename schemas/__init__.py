"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain:
- operation: JSON form of the engine operations
- image: transform requests and responses
- system: status reporting
"""

from .image import (
    ErrorDetail,
    OperationInfo,
    OperationListResponse,
    OutputFormat,
    TransformRequest,
    TransformResponse,
)
from .operation import OPERATION_SPECS, BaseOperationSpec, OperationSpec
from .system import SystemStatus

__all__ = [
    # Operation models
    "BaseOperationSpec",
    "OperationSpec",
    "OPERATION_SPECS",
    # Image models
    "TransformRequest",
    "TransformResponse",
    "ErrorDetail",
    "OperationInfo",
    "OperationListResponse",
    "OutputFormat",
    # System models
    "SystemStatus",
]
