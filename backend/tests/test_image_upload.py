"""Tests for the image-upload client and its use on restaurant updates."""

import json

import httpx
import pytest

from dineops.core.config import Settings
from dineops.core.exceptions import ValidationError
from dineops.main import app
from dineops.services.image_upload_service import (
    LOGO_FOLDER,
    ImageUploader,
    ImageUploadError,
    get_image_uploader,
)

DATA_URI = "data:image/png;base64,iVBORw0KGgo="


def _settings(**overrides):
    values = {"image_upload_base_url": "https://images.example.com", "secret_key": "x" * 32}
    values.update(overrides)
    return Settings(**values)


def _uploader(handler, **overrides):
    return ImageUploader(_settings(**overrides), transport=httpx.MockTransport(handler))


class TestImageUploader:
    def test_url_passes_through(self):
        def handler(request):
            raise AssertionError("no request expected")

        uploader = _uploader(handler)
        assert uploader.save_image("https://cdn.example.com/a.png", LOGO_FOLDER) == "https://cdn.example.com/a.png"

    def test_upload(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"url": "https://images.example.com/logos/1.png"})

        stored = _uploader(handler).save_image(DATA_URI, LOGO_FOLDER)
        assert stored == "https://images.example.com/logos/1.png"
        assert seen["url"] == "https://images.example.com/uploads/logos"
        assert seen["body"] == {"image": DATA_URI}

    def test_custom_prefix(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"url": "https://images.example.com/x.png"})

        _uploader(handler, image_upload_path_prefix="media/").save_image(DATA_URI, "/backgrounds")
        assert seen["url"] == "https://images.example.com/media/backgrounds"

    def test_not_configured(self):
        uploader = ImageUploader(_settings(image_upload_base_url=None))
        with pytest.raises(ValidationError):
            uploader.save_image(DATA_URI, LOGO_FOLDER)

    def test_rejected_upload(self):
        uploader = _uploader(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(ImageUploadError):
            uploader.save_image(DATA_URI, LOGO_FOLDER)

    def test_response_without_url(self):
        uploader = _uploader(lambda request: httpx.Response(200, json=["not", "a", "dict"]))
        with pytest.raises(ImageUploadError):
            uploader.save_image(DATA_URI, LOGO_FOLDER)

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ImageUploadError):
            _uploader(handler).save_image(DATA_URI, LOGO_FOLDER)


class TestRestaurantImages:
    def test_logo_is_uploaded_on_update(self, client, test_restaurant):
        def handler(request):
            return httpx.Response(200, json={"url": "https://images.example.com/logos/bistro.png"})

        app.dependency_overrides[get_image_uploader] = lambda: _uploader(handler)
        res = client.put(f"/api/restaurants/{test_restaurant.id}", json={"logo": DATA_URI})
        assert res.status_code == 200
        assert res.json()["logo"] == "https://images.example.com/logos/bistro.png"

    def test_upload_failure_is_502(self, client, db_session, test_restaurant):
        app.dependency_overrides[get_image_uploader] = lambda: _uploader(
            lambda request: httpx.Response(503)
        )
        res = client.put(f"/api/restaurants/{test_restaurant.id}", json={"bg_image": DATA_URI})
        assert res.status_code == 502
        assert res.json()["error"] == "Image upload failed"
        db_session.refresh(test_restaurant)
        assert test_restaurant.bg_image == ""

    def test_unconfigured_upload_is_400(self, client, test_restaurant):
        app.dependency_overrides[get_image_uploader] = lambda: ImageUploader(
            _settings(image_upload_base_url=None)
        )
        res = client.put(f"/api/restaurants/{test_restaurant.id}", json={"logo": DATA_URI})
        assert res.status_code == 400
