"""
Image API Router - Pipeline execution on uploaded images
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_transform_service
from api.exceptions import safe_endpoint
from core.enums import ResizeFilter
from core.utils.enum_converter import enum_values
from schemas import (
    OPERATION_SPECS,
    ErrorDetail,
    OperationInfo,
    OperationListResponse,
    TransformRequest,
    TransformResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/transform",
    responses={
        400: {"description": "Script syntax error or undecodable image"},
        413: {"description": "Image exceeds the configured size limits"},
        422: {"model": ErrorDetail, "description": "A pipeline step failed"},
    },
)
@safe_endpoint
async def transform(
    request: TransformRequest, transform_service=Depends(get_transform_service)
) -> TransformResponse:
    """
    Run an operation pipeline on an image.

    The pipeline is given either as a list of operation objects or as an
    operation script. On failure no image is returned; the 422 detail names
    the index and operation of the failing step.
    """
    # Pixel work is CPU bound; keep it off the event loop
    return await run_in_threadpool(transform_service.transform, request)


@router.get("/operations")
@safe_endpoint
async def list_operations() -> OperationListResponse:
    """List operations accepted by /transform with their parameter defaults"""
    operations = [
        OperationInfo(op=model.model_fields["op"].default, parameters=model.parameters())
        for model in OPERATION_SPECS
    ]
    return OperationListResponse(operations=operations, resize_filters=enum_values(ResizeFilter))
