"""
Tests for Pipeline
"""

import cv2
import numpy as np
import pytest

import core.pipeline
from core.enums import ErrorKind, ResizeFilter
from core.exceptions import PipelineError
from core.operations import (
    Blur,
    Crop,
    Filter3x3,
    FlipHorizontal,
    Invert,
    Resize,
    Rotate90,
    SetResizeFilter,
)
from core.pipeline import Pipeline
from transforms import apply_operation, filtering, geometry


class TestPipelineSequence:
    """Test the sequence behaviour"""

    def test_empty_pipeline(self):
        pipeline = Pipeline()
        assert len(pipeline) == 0
        assert repr(pipeline) == "Pipeline()"

    def test_order_is_kept(self):
        pipeline = Pipeline([Blur(1.0), FlipHorizontal(), Invert()])
        assert pipeline.names() == ["blur", "fliph", "invert"]
        assert list(pipeline)[1] == FlipHorizontal()

    def test_then_returns_new_pipeline(self):
        first = Pipeline([Invert()])
        second = first.then(Rotate90())
        assert len(first) == 1
        assert second.names() == ["invert", "rotate90"]

    def test_slicing_and_equality(self):
        pipeline = Pipeline([Invert(), Rotate90(), FlipHorizontal()])
        assert pipeline[1:] == Pipeline([Rotate90(), FlipHorizontal()])
        assert pipeline[0] == Invert()
        assert hash(pipeline) == hash(Pipeline([Invert(), Rotate90(), FlipHorizontal()]))

    def test_array_weights_become_tuple(self):
        weights = np.array([0, 0, 0, 0, 1, 0, 0, 0, 0], dtype=np.float64)
        operation = Filter3x3(weights)
        assert isinstance(operation.weights, tuple)
        assert operation == Filter3x3((0, 0, 0, 0, 1, 0, 0, 0, 0))
        expected = Pipeline([Filter3x3((0, 0, 0, 0, 1, 0, 0, 0, 0))])
        assert hash(Pipeline([operation])) == hash(expected)


class TestPipelineApply:
    """Test running pipelines"""

    def test_empty_pipeline_returns_equal_copy(self, gradient_rgba):
        result = Pipeline().apply(gradient_rgba)
        assert result == gradient_rgba
        assert result is not gradient_rgba

    def test_steps_see_previous_result(self, gradient_rgba):
        # The crop is only valid after the rotation swapped width and height
        pipeline = Pipeline([Rotate90(), Crop(0, 0, 4, 8)])
        assert pipeline.apply(gradient_rgba).size == (4, 8)

    def test_failure_reports_step(self, gradient_rgba):
        pipeline = Pipeline([Invert(), Crop(0, 0, 4, 8)])
        with pytest.raises(PipelineError) as exc_info:
            pipeline.apply(gradient_rgba)

        error = exc_info.value
        assert error.index == 1
        assert error.operation == "crop"
        assert error.kind == ErrorKind.OUT_OF_BOUNDS

    def test_stops_at_first_failure(self, gradient_rgba, monkeypatch):
        applied = []

        def recording_apply(operation, buffer, context):
            applied.append(operation.name)
            return apply_operation(operation, buffer, context)

        monkeypatch.setattr(core.pipeline, "apply_operation", recording_apply)
        pipeline = Pipeline([Invert(), Crop(5, 0, 4, 4), Rotate90(), Blur(-1.0)])

        with pytest.raises(PipelineError) as exc_info:
            pipeline.apply(gradient_rgba)

        assert exc_info.value.index == 1
        assert exc_info.value.kind == ErrorKind.OUT_OF_BOUNDS
        assert applied == ["invert", "crop"]

    def test_opencv_failure_reports_step(self, gradient_rgba, monkeypatch):
        def failing_blur(*args, **kwargs):
            raise cv2.error("kernel size out of range")

        monkeypatch.setattr(filtering.cv2, "GaussianBlur", failing_blur)
        with pytest.raises(PipelineError) as exc_info:
            Pipeline([Invert(), Blur(2.0)]).apply(gradient_rgba)

        error = exc_info.value
        assert error.index == 1
        assert error.operation == "blur"
        assert error.kind == ErrorKind.INVALID_PARAMETER
        assert isinstance(error.cause.__cause__, cv2.error)

    def test_resize_filter_applies_to_later_steps_only(self, gradient_rgba):
        pipeline = Pipeline(
            [
                Resize(4, 2, preserve_aspect=False),
                SetResizeFilter(ResizeFilter.NEAREST),
                Resize(2, 1, preserve_aspect=False),
            ]
        )
        linear = geometry.resize(gradient_rgba, 4, 2, ResizeFilter.LINEAR, False)
        expected = geometry.resize(linear, 2, 1, ResizeFilter.NEAREST, False)
        assert pipeline.apply(gradient_rgba) == expected

    def test_resize_filter_does_not_leak_between_runs(self, gradient_rgba):
        Pipeline([SetResizeFilter(ResizeFilter.NEAREST)]).apply(gradient_rgba)
        result = Pipeline([Resize(3, 3, preserve_aspect=False)]).apply(gradient_rgba)
        assert result == geometry.resize(gradient_rgba, 3, 3, ResizeFilter.LINEAR, False)

    def test_explicit_filter_wins(self, gradient_rgba):
        pipeline = Pipeline(
            [
                SetResizeFilter(ResizeFilter.NEAREST),
                Resize(3, 3, filter=ResizeFilter.AREA, preserve_aspect=False),
            ]
        )
        expected = geometry.resize(gradient_rgba, 3, 3, ResizeFilter.AREA, False)
        assert pipeline.apply(gradient_rgba) == expected

    def test_unknown_operation(self, gradient_rgba):
        with pytest.raises(PipelineError) as exc_info:
            Pipeline([object()]).apply(gradient_rgba)
        assert exc_info.value.kind == ErrorKind.INVALID_PARAMETER
        assert exc_info.value.operation == "object"
