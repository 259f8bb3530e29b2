"""
Pytest configuration for API integration tests
"""

import base64
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from config import Settings
    from core.engine import Engine
    from main import app

    app.state.engine = Engine()
    app.state.settings = Settings()

    # Create test client (no context manager to avoid running lifespan)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client


@pytest.fixture
def png_base64():
    """Encode an RGBA array as a base64 PNG"""

    def encode(array: np.ndarray) -> str:
        output = io.BytesIO()
        Image.fromarray(array).save(output, format="PNG")
        return base64.b64encode(output.getvalue()).decode("utf-8")

    return encode


@pytest.fixture
def red_png(png_base64):
    """4x4 opaque red PNG, base64"""
    array = np.zeros((4, 4, 4), dtype=np.uint8)
    array[:, :] = (255, 0, 0, 255)
    return png_base64(array)


@pytest.fixture
def decode_image():
    """Decode a base64 image to an array"""

    def decode(image_base64: str) -> np.ndarray:
        return np.array(Image.open(io.BytesIO(base64.b64decode(image_base64))))

    return decode
