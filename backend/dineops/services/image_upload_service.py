"""Client for the external image-upload service.

Restaurant logos and background images are stored as URLs. Values that are
already http(s) URLs are kept as they are; anything else (typically a
base64 data URI from the dashboard) is posted to the upload service, which
answers with the public URL.
"""

import logging
from typing import Optional

import httpx

from dineops.core.config import Settings, get_settings
from dineops.core.exceptions import ServiceError, ValidationError
from dineops.core.validators import URL_RE, is_missing

logger = logging.getLogger(__name__)

LOGO_FOLDER = "/logos"
BACKGROUND_FOLDER = "/backgrounds"


class ImageUploadError(ServiceError):
    """The upload service failed or answered with something unusable."""

    status_code = 502


class ImageUploader:
    """Uploads images and returns their public URL."""

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = (settings.image_upload_base_url or "").rstrip("/")
        self.path_prefix = settings.image_upload_path_prefix
        self.timeout = settings.image_upload_timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    def upload_url(self, folder: str) -> str:
        return f"{self.base_url}{self.path_prefix}{folder}"

    def save_image(self, image: str, folder: str) -> str:
        """Return a URL for *image*, uploading it to *folder* when needed."""
        if is_missing(image):
            raise ValidationError("Image is required")
        if URL_RE.match(image):
            return image
        if not self.configured:
            raise ValidationError("Image upload is not configured; provide an http(s) URL")

        url = self.upload_url(folder)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(url, json={"image": image})
        except httpx.RequestError as e:
            logger.error(f"Image upload to {url} failed: {e}")
            raise ImageUploadError("Image upload failed")

        if response.status_code >= 400:
            logger.warning(
                f"Image upload to {url} rejected: {response.status_code} {response.text[:200]}"
            )
            raise ImageUploadError("Image upload failed")

        try:
            payload = response.json()
        except ValueError:
            payload = None
        stored = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(stored, str) or not URL_RE.match(stored):
            logger.warning(f"Image upload to {url} returned no usable url")
            raise ImageUploadError("Image upload failed")

        logger.info(f"Uploaded image to {folder}: {stored}")
        return stored


def get_image_uploader() -> ImageUploader:
    """FastAPI dependency for the configured uploader."""
    return ImageUploader(get_settings())
