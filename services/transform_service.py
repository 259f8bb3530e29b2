"""
Transform Service - Business logic for the image transform endpoint.

Decodes the request image, enforces the configured size limits, runs the
pipeline through the engine and encodes the result.
"""

import logging

from api.exceptions import ImageTooLargeException
from config import ImageSettings
from core.constants import ErrorMessages
from core.engine import Engine
from core.image import ImageConverters
from core.pipeline import Pipeline
from core.raster import RasterBuffer
from core.script_parser import parse_script
from core.utils.decorators import timer
from schemas import TransformRequest, TransformResponse

logger = logging.getLogger(__name__)


class TransformService:
    """
    Service for running operation pipelines on uploaded images.

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(self, engine: Engine, settings: ImageSettings):
        """
        Initialize transform service.

        Args:
            engine: Engine instance
            settings: Image limits and output defaults
        """
        self.engine = engine
        self.settings = settings

    def decode(self, image_base64: str) -> RasterBuffer:
        """
        Decode a base64 image within the configured limits.

        Raises:
            ImageTooLargeException: Upload or pixel count over the limit
            ImageDecodeError: Data is not a decodable image
        """
        # Decoded size is 3/4 of the base64 length
        size_mb = len(image_base64) * 3 / 4 / (1024 * 1024)
        if size_mb > self.settings.max_upload_size_mb:
            raise ImageTooLargeException(
                ErrorMessages.UPLOAD_TOO_LARGE.format(
                    size_mb=size_mb, limit_mb=self.settings.max_upload_size_mb
                )
            )

        buffer = ImageConverters.from_base64(image_base64)

        pixels = buffer.width * buffer.height
        if pixels > self.settings.max_image_pixels:
            raise ImageTooLargeException(
                ErrorMessages.IMAGE_TOO_LARGE.format(
                    pixels=pixels, limit=self.settings.max_image_pixels
                )
            )
        return buffer

    @staticmethod
    def build_pipeline(request: TransformRequest) -> Pipeline:
        """
        Pipeline from either the operation list or the script of a request.

        Raises:
            ScriptSyntaxError: If the script cannot be parsed
        """
        if request.script is not None:
            return parse_script(request.script)
        return Pipeline(item.to_operation() for item in request.operations)

    def transform(self, request: TransformRequest) -> TransformResponse:
        """
        Run a transform request.

        Raises:
            ImageTooLargeException, ImageDecodeError, ScriptSyntaxError,
            EngineError: translated to HTTP responses by the API layer
        """
        pipeline = self.build_pipeline(request)
        output_format = request.output_format or self.settings.default_output_format
        quality = request.quality or self.settings.jpeg_quality

        with timer() as t:
            source = self.decode(request.image_base64)
            result = self.engine.run(source, pipeline)

        encoded = ImageConverters.to_base64(result, output_format, quality)

        logger.info(
            f"Transformed {source.width}x{source.height} {source.color_model.value} image "
            f"with {len(pipeline)} operations -> {result.width}x{result.height} "
            f"{output_format} in {t['ms']:.1f} ms"
        )

        return TransformResponse(
            image_base64=encoded,
            width=result.width,
            height=result.height,
            color_model=result.color_model.value,
            processing_time_ms=round(t["ms"], 2),
        )
