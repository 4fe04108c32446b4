"""
Abstract base class for image providers
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple


class ImageProvider(ABC):
    """Abstract interface for product image storage"""

    @abstractmethod
    def upload_image(self, prefix: str, filename: str, image_data: bytes, content_type: Optional[str] = None) -> Optional[str]:
        """
        Upload an image to the provider.

        Args:
            prefix: Folder the image belongs to (the product id)
            filename: Original file name
            image_data: Image bytes
            content_type: MIME type of the image

        Returns:
            Public URL if successful, None otherwise
        """
        pass

    @abstractmethod
    def delete_image(self, url: str) -> bool:
        """
        Delete an image from the provider.

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def get_image(self, url: str) -> Tuple[bytes, str, Optional[int]]:
        """
        Fetch an image by its public URL.

        Returns:
            (image bytes, content type, content length)
        """
        pass

    @abstractmethod
    def get_image_url(self, key: str) -> str:
        """Get the public URL for a stored object key"""
        pass

    def upload_multiple(self, prefix: str, files: List[Tuple[str, bytes, Optional[str]]]) -> List[str]:
        """
        Upload multiple images.

        Args:
            prefix: Folder the images belong to
            files: (filename, bytes, content type) tuples

        Returns:
            URLs of the images that uploaded successfully, in input order
        """
        urls = []
        for filename, data, content_type in files:
            url = self.upload_image(prefix, filename, data, content_type)
            if url:
                urls.append(url)
        return urls
