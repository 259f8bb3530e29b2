"""
Operation pipeline - ordered sequence of operations and its execution.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from core.exceptions import (
    InvalidColorModelError,
    InvalidParameterError,
    OutOfBoundsError,
    PipelineError,
)
from core.operations import Operation, operation_name
from core.raster import RasterBuffer
from transforms import RunContext, apply_operation

logger = logging.getLogger(__name__)


class Pipeline:
    """
    Immutable, ordered sequence of operations.

    Order is significant and kept exactly as given. An empty pipeline is valid
    and returns a copy of its input.
    """

    def __init__(self, operations: Iterable[Operation] = ()):
        self._operations: Tuple[Operation, ...] = tuple(operations)

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return self._operations

    def then(self, operation: Operation) -> "Pipeline":
        """New pipeline with ``operation`` appended."""
        return Pipeline(self._operations + (operation,))

    def names(self) -> List[str]:
        return [operation_name(op) for op in self._operations]

    def apply(self, buffer: RasterBuffer) -> RasterBuffer:
        """
        Run every operation in order.

        Each step is validated right before it runs, against the buffer
        produced by the previous step. The first failure stops the run.

        Args:
            buffer: Input buffer (never modified)

        Returns:
            Buffer produced by the last step

        Raises:
            PipelineError: With the index and name of the failing step
        """
        context = RunContext()
        current = buffer

        for index, operation in enumerate(self._operations):
            name = operation_name(operation)
            logger.debug(f"Step {index} ({name}) on {current!r}")
            try:
                current = apply_operation(operation, current, context)
            except (InvalidParameterError, OutOfBoundsError, InvalidColorModelError) as e:
                logger.warning(f"Step {index} ({name}) failed: {e}")
                raise PipelineError(index, name, e) from e

        if current is buffer:
            return buffer.copy()
        return current

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Pipeline(self._operations[index])
        return self._operations[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pipeline):
            return NotImplemented
        return self._operations == other._operations

    def __hash__(self) -> int:
        return hash(self._operations)

    def __repr__(self) -> str:
        return f"Pipeline({', '.join(self.names())})"
