"""Article image storage interface."""
from abc import ABC, abstractmethod


class IImageStorage(ABC):

    @abstractmethod
    def upload_image(self, file_path: str) -> str:
        """Stores the image file and returns the reference to keep on the article."""
        pass

    @abstractmethod
    def delete_image(self, image_url: str) -> None:
        """Removes a stored image. References this store does not own are ignored."""
        pass
