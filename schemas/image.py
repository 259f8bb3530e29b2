"""
Image transform API models.

This module contains models for image operations:
- Transform requests and responses
- Operation listing
- Engine failure details
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .operation import OperationSpec

OutputFormat = Literal["PNG", "JPEG", "BMP", "TIFF", "WEBP"]


class TransformRequest(BaseModel):
    """Request to run a pipeline on an image"""

    image_base64: str = Field(..., description="Encoded input image, base64")
    operations: Optional[List[OperationSpec]] = Field(
        None, description="Pipeline as a list of operation objects"
    )
    script: Optional[str] = Field(
        None, description="Pipeline as an operation script, e.g. 'blur 1.5; fliph'"
    )
    output_format: Optional[OutputFormat] = Field(
        None, description="Output encoding; defaults to the configured format"
    )
    quality: Optional[int] = Field(None, ge=1, le=100, description="JPEG/WebP quality")

    @model_validator(mode="after")
    def check_pipeline_source(self) -> "TransformRequest":
        if (self.operations is None) == (self.script is None):
            raise ValueError("Exactly one of 'operations' or 'script' must be given")
        return self


class TransformResponse(BaseModel):
    """Result of a successful transform"""

    image_base64: str
    width: int
    height: int
    color_model: str
    processing_time_ms: float


class ErrorDetail(BaseModel):
    """Failing step of a pipeline"""

    index: int
    operation: str
    kind: str
    message: str


class OperationInfo(BaseModel):
    """One operation accepted by the transform endpoint"""

    op: str
    parameters: Dict[str, Any] = Field(
        default_factory=dict, description="Parameter defaults, None when required"
    )


class OperationListResponse(BaseModel):
    """All operations and sampling filters"""

    operations: List[OperationInfo]
    resize_filters: List[str]
