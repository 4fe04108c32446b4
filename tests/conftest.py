"""Shared pytest fixtures for the test suite.

AWS is replaced in-process by moto. Environment variables are set before any
``storefront`` import because settings are read when the package loads.

Fixture overview
----------------
aws             - mocked DynamoDB/S3/SES/SNS with every table and the image bucket created
client          - FastAPI TestClient over the app (requires ``aws``)
admin_headers   - Authorization header carrying a valid admin token
admin_user      - admin user "admin" / "s3cret" stored with a bcrypt hash
png_bytes       - a tiny valid PNG image
"""

import os

os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["ENVIRONMENT"] = "test"
os.environ["ADMIN_TOKEN"] = "test-secret"
os.environ["S3_BUCKET_NAME"] = "test-bucket"
for name in ("SENDER_EMAIL", "RECIPIENT_EMAIL", "ADMIN_PHONE_NUMBER", "DYNAMODB_ENDPOINT_URL", "S3_ENDPOINT_URL"):
    os.environ.pop(name, None)

from io import BytesIO

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws
from PIL import Image

from storefront.auth.jwt_validator import jwt_validator
from storefront.config import settings
from storefront.db.dynamo import reset_clients
from storefront.db.tables import create_tables
from storefront.main import app
from storefront.services.auth_service import AuthService

BUCKET_URL = "https://test-bucket.s3.us-east-1.amazonaws.com/"
ADMIN_PASSWORD = "s3cret"


@pytest.fixture
def aws():
    """Mocked AWS with all storefront tables and the image bucket"""
    with mock_aws():
        reset_clients()
        create_tables()
        boto3.client("s3", region_name="us-east-1").create_bucket(Bucket=settings.bucket_name)
        yield
        reset_clients()


@pytest.fixture
def client(aws) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_token() -> str:
    return jwt_validator.issue_token("admin")


@pytest.fixture
def admin_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def admin_user(aws) -> str:
    AuthService().set_admin_user("admin", ADMIN_PASSWORD)
    return "admin"


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8), (200, 30, 90)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def s3():
    """Raw S3 client for asserting on stored objects (use with ``aws``)"""
    return boto3.client("s3", region_name="us-east-1")
