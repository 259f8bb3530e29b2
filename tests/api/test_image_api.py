"""
Integration tests for the image transform API
"""

import numpy as np

from config import ImageSettings, Settings


class TestTransform:
    """Test POST /api/image/transform"""

    def test_operations_list(self, client, red_png, decode_image):
        response = client.post(
            "/api/image/transform",
            json={"image_base64": red_png, "operations": [{"op": "grayscale"}]},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["width"] == 4
        assert data["height"] == 4
        assert data["color_model"] == "RGBA"
        assert data["processing_time_ms"] >= 0

        pixels = decode_image(data["image_base64"])
        assert np.all(pixels == np.array([54, 54, 54, 255], dtype=np.uint8))

    def test_script(self, client, png_base64):
        array = np.zeros((4, 8, 4), dtype=np.uint8)
        response = client.post(
            "/api/image/transform",
            json={"image_base64": png_base64(array), "script": "rotate90; crop 0 0 3 5"},
        )
        assert response.status_code == 200
        data = response.json()
        assert (data["width"], data["height"]) == (3, 5)

    def test_parameterized_operations(self, client, png_base64):
        array = np.zeros((4, 8, 4), dtype=np.uint8)
        operations = [
            {"op": "set_resize_filter", "filter": "nearest"},
            {"op": "resize", "width": 2},
            {"op": "blur", "sigma": 0.5},
        ]
        response = client.post(
            "/api/image/transform",
            json={"image_base64": png_base64(array), "operations": operations},
        )
        assert response.status_code == 200
        assert (response.json()["width"], response.json()["height"]) == (2, 1)

    def test_empty_pipeline(self, client, red_png, decode_image):
        response = client.post(
            "/api/image/transform", json={"image_base64": red_png, "operations": []}
        )
        assert response.status_code == 200
        pixels = decode_image(response.json()["image_base64"])
        assert np.all(pixels == np.array([255, 0, 0, 255], dtype=np.uint8))

    def test_jpeg_output(self, client, red_png, decode_image):
        response = client.post(
            "/api/image/transform",
            json={"image_base64": red_png, "script": "invert", "output_format": "JPEG"},
        )
        assert response.status_code == 200
        assert decode_image(response.json()["image_base64"]).shape == (4, 4, 3)

    def test_engine_failure(self, client, red_png):
        response = client.post(
            "/api/image/transform",
            json={
                "image_base64": red_png,
                "operations": [
                    {"op": "invert"},
                    {"op": "crop", "x": 0, "y": 0, "width": 10, "height": 10},
                ],
            },
        )
        assert response.status_code == 422

        detail = response.json()["detail"]
        assert detail["index"] == 1
        assert detail["operation"] == "crop"
        assert detail["kind"] == "OutOfBounds"
        assert "10" in detail["message"]

    def test_invalid_parameter_from_script(self, client, red_png):
        response = client.post(
            "/api/image/transform", json={"image_base64": red_png, "script": "blur -1"}
        )
        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == "InvalidParameter"

    def test_huge_sigma(self, client, red_png):
        response = client.post(
            "/api/image/transform",
            json={"image_base64": red_png, "operations": [{"op": "blur", "sigma": 1e9}]},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["index"] == 0
        assert response.json()["detail"]["operation"] == "blur"

    def test_script_syntax_error(self, client, red_png):
        response = client.post(
            "/api/image/transform", json={"image_base64": red_png, "script": "sparkle 3"}
        )
        assert response.status_code == 400
        assert "sparkle" in response.json()["detail"]

    def test_undecodable_image(self, client):
        response = client.post(
            "/api/image/transform", json={"image_base64": "aGVsbG8=", "operations": []}
        )
        assert response.status_code == 400

    def test_image_too_large(self, client, red_png):
        client.app.state.settings = Settings(image=ImageSettings(max_image_pixels=10))
        response = client.post(
            "/api/image/transform", json={"image_base64": red_png, "operations": []}
        )
        assert response.status_code == 413

    def test_requires_exactly_one_pipeline_source(self, client, red_png):
        neither = client.post("/api/image/transform", json={"image_base64": red_png})
        both = client.post(
            "/api/image/transform",
            json={"image_base64": red_png, "operations": [], "script": "invert"},
        )
        assert neither.status_code == 422
        assert both.status_code == 422

    def test_unknown_operation(self, client, red_png):
        response = client.post(
            "/api/image/transform",
            json={"image_base64": red_png, "operations": [{"op": "sparkle"}]},
        )
        assert response.status_code == 422


class TestOperationListing:
    """Test GET /api/image/operations"""

    def test_lists_all_operations(self, client):
        response = client.get("/api/image/operations")
        assert response.status_code == 200

        data = response.json()
        operations = {item["op"]: item["parameters"] for item in data["operations"]}
        assert len(operations) == 16
        assert operations["blur"] == {"sigma": None}
        assert operations["unsharpen"] == {"sigma": None, "amount": 1.0, "threshold": 0}
        assert operations["invert"] == {}
        assert data["resize_filters"] == ["nearest", "linear", "cubic", "lanczos", "area"]
