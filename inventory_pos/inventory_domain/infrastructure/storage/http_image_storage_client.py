"""Client for the remote binary object store holding article images."""

import logging
import mimetypes
import os
import uuid

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from inventory_pos.common.config.settings import settings
from inventory_pos.common.exceptions.custom_exceptions import APIError
from inventory_pos.inventory_domain.domain.repositories.image_storage import IImageStorage

logger = logging.getLogger(__name__)


class HttpImageStorageClient(IImageStorage):
    """
    Uploads and removes objects in a storage bucket over HTTP.

    Objects are written to ``{base}/storage/v1/object/{bucket}/{name}`` and
    served from ``{base}/storage/v1/object/public/{bucket}/{name}``.
    """

    def __init__(self) -> None:
        self.base_url = (settings.IMAGE_STORE_BASE_URL or "").rstrip("/")
        self.token = settings.IMAGE_STORE_TOKEN
        self.bucket = settings.IMAGE_STORE_BUCKET

        self.session = requests.Session()
        retry_strategy = Retry(
            total=3,
            status_forcelist=[429, 500, 502, 503, 504],
            # Uploads are not retried; a repeated POST could create a second object
            allowed_methods=["HEAD", "GET", "OPTIONS", "DELETE"],
            backoff_factor=1,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _headers(self) -> dict:
        if not self.token:
            raise APIError("IMAGE_STORE_TOKEN is not set in environment variables.")
        return {"Authorization": f"Bearer {self.token}", "apikey": self.token}

    @property
    def public_prefix(self) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/"

    def upload_image(self, file_path: str) -> str:
        """Uploads the file under a unique name and returns its public URL."""
        if not self.base_url:
            raise APIError("IMAGE_STORE_BASE_URL is not set in environment variables.")

        object_name = f"{uuid.uuid4()}-{os.path.basename(file_path)}"
        content_type = mimetypes.guess_type(file_path)[0] or "application/octet-stream"
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{object_name}"
        headers = {**self._headers(), "Content-Type": content_type, "Cache-Control": "3600", "x-upsert": "false"}

        try:
            with open(file_path, "rb") as f:
                response = self.session.post(url, data=f, headers=headers, timeout=60)
            response.raise_for_status()
        except OSError as e:
            raise APIError(f"Could not read image file {file_path}", original_exception=e)
        except requests.exceptions.Timeout as e:
            raise APIError(f"Image upload timed out for {object_name}", original_exception=e)
        except requests.exceptions.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            raise APIError(f"Error uploading image {object_name}: {e}", original_exception=e, status_code=status_code)

        public_url = f"{self.public_prefix}{object_name}"
        logger.info(f"Image uploaded successfully: {public_url}")
        return public_url

    def delete_image(self, image_url: str) -> None:
        if not image_url or not self.base_url or not image_url.startswith(self.public_prefix):
            return

        object_name = image_url[len(self.public_prefix) :]
        url = f"{self.base_url}/storage/v1/object/{self.bucket}"
        try:
            response = self.session.delete(url, json={"prefixes": [object_name]}, headers=self._headers(), timeout=30)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            raise APIError(f"Error deleting image {object_name}: {e}", original_exception=e, status_code=status_code)
        logger.info(f"Image deleted successfully: {object_name}")
