from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = "kalakala-corner-api"
    version: str = "1.0.0"
    environment: str = Field(default="dev", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origin: str = Field(default="*", validation_alias="ORIGIN")

    # AWS
    aws_region: str = Field(default="us-east-1", validation_alias="AWS_REGION")
    dynamodb_endpoint_url: Optional[str] = Field(None, validation_alias="DYNAMODB_ENDPOINT_URL")
    s3_endpoint_url: Optional[str] = Field(None, validation_alias="S3_ENDPOINT_URL")
    s3_bucket_name: Optional[str] = Field(None, validation_alias="S3_BUCKET_NAME")

    # DynamoDB tables
    products_table: str = Field(default="product-catalogue", validation_alias="PRODUCTS_TABLE")
    categories_table: str = Field(default="product-categories", validation_alias="CATEGORIES_TABLE")
    testimonials_table: str = Field(default="testimonials", validation_alias="TESTIMONIALS_TABLE")
    enquiries_table: str = Field(default="customer-enquiries", validation_alias="ENQUIRIES_TABLE")
    users_table: str = Field(default="app-config", validation_alias="USERS_TABLE")

    # Admin auth (HS256 signing secret for admin session tokens)
    admin_token: Optional[str] = Field(None, validation_alias="ADMIN_TOKEN")
    token_ttl_minutes: int = Field(default=30, validation_alias="TOKEN_TTL_MINUTES")

    # Enquiry notifications (SES / SNS)
    sender_email: Optional[str] = Field(None, validation_alias="SENDER_EMAIL")
    recipient_email: str = Field(default="", validation_alias="RECIPIENT_EMAIL")
    admin_phone_number: str = Field(default="", validation_alias="ADMIN_PHONE_NUMBER")

    @property
    def bucket_name(self) -> str:
        return self.s3_bucket_name or f"kalakala-corner-{self.environment}"

    @property
    def bucket_url(self) -> str:
        """Public URL prefix of objects in the image bucket"""
        return f"https://{self.bucket_name}.s3.{self.aws_region}.amazonaws.com/"

    @property
    def is_production(self) -> bool:
        return self.environment in ("prod", "production")

    @property
    def enable_detailed_errors(self) -> bool:
        return not self.is_production

    @property
    def recipient_emails(self) -> List[str]:
        return [e.strip() for e in self.recipient_email.split(",") if e.strip()]

    @property
    def admin_phone_numbers(self) -> List[str]:
        return [p.strip() for p in self.admin_phone_number.split(",") if p.strip()]


settings = Settings()
