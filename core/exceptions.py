"""
Exception hierarchy for the image operations engine.

Transforms raise the three failure kinds (invalid parameter, out of bounds,
invalid color model). The pipeline wraps the first failure with the position
and name of the step that raised it; the engine re-raises that as EngineError
for front-ends.
"""

from typing import Any, Dict, Optional

from core.enums import ErrorKind


class ImageOpsError(Exception):
    """Base class for all engine errors."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameterError(ImageOpsError):
    """An operation's own parameters are out of their declared domain."""

    kind = ErrorKind.INVALID_PARAMETER


class OutOfBoundsError(ImageOpsError):
    """Parameters are inconsistent with the current buffer's dimensions."""

    kind = ErrorKind.OUT_OF_BOUNDS


class InvalidColorModelError(ImageOpsError):
    """The buffer's color model lacks a capability the operation needs."""

    kind = ErrorKind.INVALID_COLOR_MODEL


class PipelineError(ImageOpsError):
    """A pipeline step failed; carries the step index and operation name."""

    def __init__(self, index: int, operation: str, cause: ImageOpsError):
        self.index = index
        self.operation = operation
        self.cause = cause
        self.kind = cause.kind
        super().__init__(f"step {index} ({operation}): {cause.kind.value}: {cause.message}")

    @property
    def reason(self) -> str:
        return self.cause.message

    def to_dict(self) -> Dict[str, Any]:
        """Structured diagnostic for front-ends."""
        return {
            "index": self.index,
            "operation": self.operation,
            "kind": self.kind.value,
            "message": self.reason,
        }


class EngineError(PipelineError):
    """Raised by Engine.run; no partial buffer accompanies it."""

    @classmethod
    def from_pipeline_error(cls, error: PipelineError) -> "EngineError":
        return cls(error.index, error.operation, error.cause)


class ScriptSyntaxError(ImageOpsError, ValueError):
    """An operation script could not be parsed."""

    def __init__(self, message: str, statement_index: Optional[int] = None, statement: str = ""):
        self.statement_index = statement_index
        self.statement = statement
        if statement_index is not None:
            message = f"statement {statement_index} ({statement!r}): {message}"
        super().__init__(message)


class ImageDecodeError(ImageOpsError, ValueError):
    """Input bytes could not be decoded into a raster buffer."""
