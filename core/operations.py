"""
Operation variants.

Each operation is an immutable dataclass carrying only the parameters it
needs. Nothing is validated at construction time: static checks (kernel size,
sign of sigma) and checks against the buffer (crop bounds, color model) both
run when the operation is applied, see transforms.apply_operation.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union, get_args

from core.constants import FilterConstants, ResizeConstants
from core.enums import ResizeFilter


@dataclass(frozen=True)
class Blur:
    """Gaussian blur."""

    name: ClassVar[str] = "blur"

    sigma: float


@dataclass(frozen=True)
class Brighten:
    """Add ``delta`` to every color channel."""

    name: ClassVar[str] = "brighten"

    delta: Union[int, float]


@dataclass(frozen=True)
class Contrast:
    """Scale every color channel around the mid value by ``factor``."""

    name: ClassVar[str] = "contrast"

    factor: float


@dataclass(frozen=True)
class Crop:
    """Keep the rectangle [x, x + width) x [y, y + height)."""

    name: ClassVar[str] = "crop"

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, lx: int, ly: int, rx: int, ry: int) -> "Crop":
        """
        Build a crop from a top-left and an exclusive bottom-right corner.

        Corners in the wrong order give a non-positive size, which is reported
        when the crop is applied.
        """
        return cls(x=lx, y=ly, width=rx - lx, height=ry - ly)


@dataclass(frozen=True)
class Filter3x3:
    """3x3 convolution kernel, row-major."""

    name: ClassVar[str] = "filter3x3"

    weights: Tuple[float, ...]

    def __post_init__(self):
        # Length is checked when applied
        if isinstance(self.weights, Iterable) and not isinstance(
            self.weights, (tuple, str, bytes)
        ):
            object.__setattr__(self, "weights", tuple(self.weights))


@dataclass(frozen=True)
class FlipHorizontal:
    name: ClassVar[str] = "fliph"


@dataclass(frozen=True)
class FlipVertical:
    name: ClassVar[str] = "flipv"


@dataclass(frozen=True)
class Grayscale:
    name: ClassVar[str] = "grayscale"


@dataclass(frozen=True)
class HueRotate:
    """Rotate the hue of every pixel by ``degrees`` (any real number)."""

    name: ClassVar[str] = "huerotate"

    degrees: float


@dataclass(frozen=True)
class Invert:
    name: ClassVar[str] = "invert"


@dataclass(frozen=True)
class Resize:
    """
    Resample to a new size.

    At least one of width/height must be given. With ``preserve_aspect`` and a
    single dimension, the other one follows the source aspect ratio; with both
    dimensions the image is scaled to fit inside the box. A ``filter`` of None
    uses the filter chosen by an earlier SetResizeFilter step of the same run,
    or ResizeConstants.DEFAULT_FILTER.
    """

    name: ClassVar[str] = "resize"

    width: Optional[int] = None
    height: Optional[int] = None
    filter: Optional[ResizeFilter] = None
    preserve_aspect: bool = ResizeConstants.DEFAULT_PRESERVE_ASPECT


@dataclass(frozen=True)
class Rotate90:
    name: ClassVar[str] = "rotate90"


@dataclass(frozen=True)
class Rotate180:
    name: ClassVar[str] = "rotate180"


@dataclass(frozen=True)
class Rotate270:
    name: ClassVar[str] = "rotate270"


@dataclass(frozen=True)
class Unsharpen:
    """Unsharp mask: add ``amount`` times the detail lost by a Gaussian blur."""

    name: ClassVar[str] = "unsharpen"

    sigma: float
    amount: float = FilterConstants.DEFAULT_UNSHARPEN_AMOUNT
    threshold: int = FilterConstants.DEFAULT_UNSHARPEN_THRESHOLD


@dataclass(frozen=True)
class SetResizeFilter:
    """Choose the resampling filter for later Resize steps of the same run."""

    name: ClassVar[str] = "set_resize_filter"

    filter: ResizeFilter


Operation = Union[
    Blur,
    Brighten,
    Contrast,
    Crop,
    Filter3x3,
    FlipHorizontal,
    FlipVertical,
    Grayscale,
    HueRotate,
    Invert,
    Resize,
    Rotate90,
    Rotate180,
    Rotate270,
    Unsharpen,
    SetResizeFilter,
]

OPERATION_TYPES = get_args(Operation)

OPERATIONS_BY_NAME = {op_type.name: op_type for op_type in OPERATION_TYPES}


def operation_name(operation: object) -> str:
    """Name of an operation, or its class name for unknown objects."""
    return getattr(operation, "name", type(operation).__name__)
