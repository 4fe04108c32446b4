def get_image_provider():
    """Get the configured image provider instance"""
    from storefront.services.image_providers.s3_provider import S3ImageProvider
    return S3ImageProvider()
