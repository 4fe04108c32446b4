# Package exports - these allow cleaner imports like:
# from storefront.services.image_providers import ImageProvider, S3ImageProvider
from storefront.services.image_providers.base import ImageProvider
from storefront.services.image_providers.s3_provider import S3ImageProvider
