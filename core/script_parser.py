"""
Operation script parser.

Both front-ends (CLI and HTTP API) describe pipelines with the same small
text format: statements separated by ';', tokens by whitespace.

    blur 1.5; brighten -10; crop 0 0 100 80; set resize sampling_filter nearest;
    resize 50 40; rotate90

Only the shape of each statement is checked here (name, argument count,
number syntax). Whether the values make sense is decided by the engine when
the step runs.
"""

import logging
from typing import Callable, Dict, List, Union

from core.constants import FilterConstants
from core.enums import ResizeFilter
from core.exceptions import ScriptSyntaxError
from core.operations import (
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
    Operation,
    Resize,
    Rotate90,
    Rotate180,
    Rotate270,
    SetResizeFilter,
    Unsharpen,
)
from core.pipeline import Pipeline
from core.utils.enum_converter import enum_values, parse_enum

logger = logging.getLogger(__name__)

STATEMENT_SEPARATOR = ";"


class _ArgumentError(ValueError):
    """Raised by statement builders; turned into ScriptSyntaxError with context."""


def _float(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise _ArgumentError(f"expected a number, got {token!r}") from None


def _int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise _ArgumentError(f"expected an integer, got {token!r}") from None


def _int_or_float(token: str) -> Union[int, float]:
    try:
        return int(token)
    except ValueError:
        return _float(token)


def _expect(name: str, args: List[str], count: int) -> None:
    if len(args) != count:
        raise _ArgumentError(f"{name} takes {count} argument(s), got {len(args)}")


def _no_args(operation_type) -> Callable[[List[str]], Operation]:
    def build(args: List[str]) -> Operation:
        _expect(operation_type.name, args, 0)
        return operation_type()

    return build


def _blur(args: List[str]) -> Operation:
    _expect("blur", args, 1)
    return Blur(sigma=_float(args[0]))


def _brighten(args: List[str]) -> Operation:
    _expect("brighten", args, 1)
    return Brighten(delta=_int_or_float(args[0]))


def _contrast(args: List[str]) -> Operation:
    _expect("contrast", args, 1)
    return Contrast(factor=_float(args[0]))


def _crop(args: List[str]) -> Operation:
    _expect("crop", args, 4)
    lx, ly, rx, ry = (_int(a) for a in args)
    return Crop.from_corners(lx, ly, rx, ry)


def _filter3x3(args: List[str]) -> Operation:
    _expect("filter3x3", args, FilterConstants.KERNEL_3X3_SIZE)
    return Filter3x3(weights=tuple(_float(a) for a in args))


def _huerotate(args: List[str]) -> Operation:
    _expect("huerotate", args, 1)
    return HueRotate(degrees=_float(args[0]))


def _resize(args: List[str]) -> Operation:
    _expect("resize", args, 2)
    return Resize(width=_int(args[0]), height=_int(args[1]), preserve_aspect=False)


def _unsharpen(args: List[str]) -> Operation:
    if len(args) not in (2, 3):
        raise _ArgumentError(f"unsharpen takes 2 or 3 arguments, got {len(args)}")
    amount = _float(args[2]) if len(args) == 3 else FilterConstants.DEFAULT_UNSHARPEN_AMOUNT
    return Unsharpen(sigma=_float(args[0]), threshold=_int(args[1]), amount=amount)


def _set(args: List[str]) -> Operation:
    # Only one environment option exists: "set resize sampling_filter <name>"
    if len(args) != 3 or [a.lower() for a in args[:2]] != ["resize", "sampling_filter"]:
        raise _ArgumentError("expected 'set resize sampling_filter <filter>'")

    resize_filter = parse_enum(args[2], ResizeFilter, None, normalize=True)
    if resize_filter is None:
        raise _ArgumentError(
            f"unknown sampling filter {args[2]!r}, expected one of {enum_values(ResizeFilter)}"
        )
    return SetResizeFilter(filter=resize_filter)


STATEMENTS: Dict[str, Callable[[List[str]], Operation]] = {
    "blur": _blur,
    "brighten": _brighten,
    "contrast": _contrast,
    "crop": _crop,
    "filter3x3": _filter3x3,
    "fliph": _no_args(FlipHorizontal),
    "flipv": _no_args(FlipVertical),
    "grayscale": _no_args(Grayscale),
    "huerotate": _huerotate,
    "invert": _no_args(Invert),
    "resize": _resize,
    "rotate90": _no_args(Rotate90),
    "rotate180": _no_args(Rotate180),
    "rotate270": _no_args(Rotate270),
    "unsharpen": _unsharpen,
    "set": _set,
}


def parse_statement(statement: str, index: int = 0) -> Operation:
    """
    Parse a single statement.

    Raises:
        ScriptSyntaxError: Unknown operation, wrong argument count or bad number
    """
    tokens = statement.split()
    if not tokens:
        raise ScriptSyntaxError("empty statement", index, statement)

    name, args = tokens[0].lower(), tokens[1:]
    builder = STATEMENTS.get(name)
    if builder is None:
        raise ScriptSyntaxError(f"unknown operation {tokens[0]!r}", index, statement)

    try:
        return builder(args)
    except _ArgumentError as e:
        raise ScriptSyntaxError(str(e), index, statement) from None


def parse_script(script: str) -> Pipeline:
    """
    Parse a whole script into a pipeline.

    Blank statements (for example a trailing ';') are skipped. An empty
    script gives an empty pipeline.
    """
    operations = []
    statements = [s.strip() for s in script.split(STATEMENT_SEPARATOR)]

    for statement in statements:
        if not statement:
            continue
        operations.append(parse_statement(statement, len(operations)))

    pipeline = Pipeline(operations)
    logger.debug(f"Parsed script into {pipeline!r}")
    return pipeline
