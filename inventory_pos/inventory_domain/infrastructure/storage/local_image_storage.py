"""Local directory implementation of the image storage."""

import logging
import os
import shutil
import uuid

from inventory_pos.common.exceptions.custom_exceptions import ImageStorageError
from inventory_pos.inventory_domain.domain.repositories.image_storage import IImageStorage

logger = logging.getLogger(__name__)


class LocalImageStorage(IImageStorage):
    """Copies article images into a directory and references them by absolute path."""

    def __init__(self, image_dir: str) -> None:
        self.image_dir = os.path.abspath(image_dir)

    def upload_image(self, file_path: str) -> str:
        target = os.path.join(self.image_dir, f"{uuid.uuid4()}-{os.path.basename(file_path)}")
        try:
            os.makedirs(self.image_dir, exist_ok=True)
            shutil.copyfile(file_path, target)
        except OSError as e:
            raise ImageStorageError(f"Error storing image {file_path}", original_exception=e)
        logger.info(f"Image stored at {target}")
        return target

    def delete_image(self, image_url: str) -> None:
        if not image_url:
            return
        path = os.path.abspath(image_url)
        if os.path.dirname(path) != self.image_dir:
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning(f"Image {path} was already removed")
        except OSError as e:
            raise ImageStorageError(f"Error deleting image {path}", original_exception=e)
