"""
Engine - public entry point for running operation pipelines on raster buffers.

The engine is a pure function of (buffer, pipeline): it keeps no state
between runs, so independent runs may be executed concurrently by the caller.
"""

import logging
from typing import Iterable, Union

from core.exceptions import EngineError, PipelineError
from core.operations import Operation
from core.pipeline import Pipeline
from core.raster import RasterBuffer
from core.script_parser import parse_script
from core.utils.decorators import timer

logger = logging.getLogger(__name__)


class Engine:
    """Runs pipelines and reports the failing step on error."""

    def run(
        self, buffer: RasterBuffer, pipeline: Union[Pipeline, Iterable[Operation]]
    ) -> RasterBuffer:
        """
        Apply a pipeline to a buffer.

        Args:
            buffer: Input buffer; left unchanged
            pipeline: Pipeline or plain sequence of operations

        Returns:
            Final buffer

        Raises:
            EngineError: index, operation name, failure kind and message of
                the first failing step. No partial result is returned.
        """
        if not isinstance(pipeline, Pipeline):
            pipeline = Pipeline(pipeline)

        with timer() as t:
            try:
                result = pipeline.apply(buffer)
            except PipelineError as e:
                raise EngineError.from_pipeline_error(e) from e.cause

        logger.debug(
            f"Ran {len(pipeline)} operations on {buffer!r} -> {result!r} in {t['ms']:.1f} ms"
        )
        return result

    def run_script(self, buffer: RasterBuffer, script: str) -> RasterBuffer:
        """
        Parse an operation script and run it.

        Raises:
            ScriptSyntaxError: If the script cannot be parsed
            EngineError: If a step fails
        """
        return self.run(buffer, parse_script(script))
