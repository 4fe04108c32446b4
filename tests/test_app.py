"""
App-level behaviour: health endpoints, error envelopes, request ids.
"""

import re

from storefront.lambda_handler import health_check


class TestHealth:
    def test_health(self, client) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "test"
        assert body["timestamp"].endswith("Z")

    def test_root(self, client) -> None:
        body = client.get("/").json()

        assert body["version"] == "1.0.0"
        assert body["environment"] == "test"

    def test_lambda_health_check(self) -> None:
        response = health_check({}, None)

        assert response["statusCode"] == 200
        assert '"status": "healthy"' in response["body"]


class TestErrorEnvelope:
    def test_unknown_route(self, client) -> None:
        response = client.get("/no-such-thing")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 404
        assert body["error"]["message"] == "Route GET /no-such-thing not found"

    def test_validation_errors_are_400(self, client) -> None:
        response = client.post("/save-customer-enquiry", content="not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestRequestId:
    def test_header_format(self, client) -> None:
        response = client.get("/health")

        assert re.fullmatch(r"req_\d+_[a-z0-9]{9}", response.headers["x-request-id"])

    def test_unique_per_request(self, client) -> None:
        first = client.get("/health").headers["x-request-id"]
        second = client.get("/health").headers["x-request-id"]

        assert first != second
