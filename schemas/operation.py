"""
Operation request models.

JSON form of the engine operations, discriminated by ``"op"``:

    {"op": "blur", "sigma": 1.5}
    {"op": "crop", "x": 0, "y": 0, "width": 100, "height": 80}
    {"op": "set_resize_filter", "filter": "nearest"}

Only types are checked here. Parameter domains (negative sigma, kernel size,
crop bounds) are checked by the engine when the step runs, so a bad value is
reported with its step index like any other engine failure.
"""

from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core import operations as ops
from core.constants import FilterConstants, ResizeConstants
from core.enums import ResizeFilter


class BaseOperationSpec(BaseModel):
    """Common behaviour of all operation models"""

    model_config = ConfigDict(extra="forbid")

    operation_type: ClassVar[type]

    def to_operation(self) -> ops.Operation:
        """Build the engine operation"""
        return self.operation_type(**self.model_dump(exclude={"op"}))

    @classmethod
    def parameters(cls) -> Dict[str, Any]:
        """Parameter names with their default, or None when required"""
        return {
            name: (None if field.is_required() else field.default)
            for name, field in cls.model_fields.items()
            if name != "op"
        }


class BlurSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Blur
    op: Literal["blur"] = "blur"
    sigma: float


class BrightenSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Brighten
    op: Literal["brighten"] = "brighten"
    delta: Union[int, float]


class ContrastSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Contrast
    op: Literal["contrast"] = "contrast"
    factor: float


class CropSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Crop
    op: Literal["crop"] = "crop"
    x: int
    y: int
    width: int
    height: int


class Filter3x3Spec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Filter3x3
    op: Literal["filter3x3"] = "filter3x3"
    weights: List[float] = Field(..., description="3x3 kernel, row-major")


class FlipHorizontalSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.FlipHorizontal
    op: Literal["fliph"] = "fliph"


class FlipVerticalSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.FlipVertical
    op: Literal["flipv"] = "flipv"


class GrayscaleSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Grayscale
    op: Literal["grayscale"] = "grayscale"


class HueRotateSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.HueRotate
    op: Literal["huerotate"] = "huerotate"
    degrees: float


class InvertSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Invert
    op: Literal["invert"] = "invert"


class ResizeSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Resize
    op: Literal["resize"] = "resize"
    width: Optional[int] = None
    height: Optional[int] = None
    filter: Optional[ResizeFilter] = Field(
        None, description="Sampling filter; defaults to the run's current filter"
    )
    preserve_aspect: bool = ResizeConstants.DEFAULT_PRESERVE_ASPECT


class Rotate90Spec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Rotate90
    op: Literal["rotate90"] = "rotate90"


class Rotate180Spec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Rotate180
    op: Literal["rotate180"] = "rotate180"


class Rotate270Spec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Rotate270
    op: Literal["rotate270"] = "rotate270"


class UnsharpenSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.Unsharpen
    op: Literal["unsharpen"] = "unsharpen"
    sigma: float
    amount: float = FilterConstants.DEFAULT_UNSHARPEN_AMOUNT
    threshold: int = FilterConstants.DEFAULT_UNSHARPEN_THRESHOLD


class SetResizeFilterSpec(BaseOperationSpec):
    operation_type: ClassVar[type] = ops.SetResizeFilter
    op: Literal["set_resize_filter"] = "set_resize_filter"
    filter: ResizeFilter


OPERATION_SPECS = (
    BlurSpec,
    BrightenSpec,
    ContrastSpec,
    CropSpec,
    Filter3x3Spec,
    FlipHorizontalSpec,
    FlipVerticalSpec,
    GrayscaleSpec,
    HueRotateSpec,
    InvertSpec,
    ResizeSpec,
    Rotate90Spec,
    Rotate180Spec,
    Rotate270Spec,
    UnsharpenSpec,
    SetResizeFilterSpec,
)

OperationSpec = Annotated[
    Union[
        BlurSpec,
        BrightenSpec,
        ContrastSpec,
        CropSpec,
        Filter3x3Spec,
        FlipHorizontalSpec,
        FlipVerticalSpec,
        GrayscaleSpec,
        HueRotateSpec,
        InvertSpec,
        ResizeSpec,
        Rotate90Spec,
        Rotate180Spec,
        Rotate270Spec,
        UnsharpenSpec,
        SetResizeFilterSpec,
    ],
    Field(discriminator="op"),
]
