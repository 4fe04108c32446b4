"""
S3 image provider implementation
"""
import logging
from typing import Optional, Tuple

from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.db.dynamo import get_s3_client
from storefront.exceptions import BadRequestError, NotFoundError
from storefront.services.image_providers.base import ImageProvider

logger = logging.getLogger(__name__)


class S3ImageProvider(ImageProvider):
    """S3 implementation of ImageProvider; objects are public-read"""

    def __init__(self, s3_client=None):
        self.s3 = s3_client or get_s3_client()
        self.bucket = settings.bucket_name
        self.bucket_url = settings.bucket_url

    def key_for_url(self, url: str) -> Optional[str]:
        """Object key for a public URL, or None if the URL is not in our bucket"""
        if not url or not url.startswith(self.bucket_url):
            return None
        return url[len(self.bucket_url):]

    def get_image_url(self, key: str) -> str:
        return f"{self.bucket_url}{key}"

    def upload_image(self, prefix: str, filename: str, image_data: bytes, content_type: Optional[str] = None) -> Optional[str]:
        """
        Upload an image to S3 under <prefix>/<filename>.
        Returns the public URL if successful, None otherwise.
        """
        key = f"{prefix}/{filename}"
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=image_data,
                ContentType=content_type or "application/octet-stream",
                ACL="public-read",
            )
            logger.info(f"Uploaded image to S3: {key}")
            return self.get_image_url(key)
        except ClientError as e:
            logger.error(f"Unable to post to s3 bucket: {key}: {e}", exc_info=True)
            return None

    def delete_image(self, url: str) -> bool:
        key = self.key_for_url(url)
        if key is None:
            logger.warning(f"Refusing to delete image outside bucket: {url}")
            return False
        try:
            self.s3.delete_object(Bucket=self.bucket, Key=key)
            logger.info(f"Deleted image from S3: {key}")
            return True
        except ClientError as e:
            logger.error(f"Failed to delete S3 file {url}: {e}")
            return False

    def get_image(self, url: str) -> Tuple[bytes, str, Optional[int]]:
        key = self.key_for_url(url)
        if key is None:
            raise BadRequestError("Invalid S3 URL")
        try:
            result = self.s3.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise NotFoundError("Image")
            logger.error(f"Failed to fetch image from S3: {e}", exc_info=True)
            raise
        body = result["Body"].read()
        content_type = result.get("ContentType") or "application/octet-stream"
        return body, content_type, result.get("ContentLength")
