"""Tests for the user id header dependency."""

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.dependencies.auth import get_current_user_id


def make_request(headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    }
    return Request(scope)


class TestGetCurrentUserId:
    """Header-based caller identity."""

    def test_returns_header_value(self):
        assert get_current_user_id(make_request({"X-User-Id": " user-1 "})) == "user-1"

    @pytest.mark.parametrize("headers", [{}, {"X-User-Id": ""}, {"X-User-Id": "   "}])
    def test_missing_header_is_unauthorized(self, headers):
        with pytest.raises(HTTPException) as exc_info:
            get_current_user_id(make_request(headers))
        assert exc_info.value.status_code == 401


class TestProtectedRoutes:
    """Every API route needs the header."""

    @pytest.mark.parametrize(
        "path",
        [
            "/api/portfolios",
            "/api/accounts",
            "/api/holdings",
            "/api/dividends",
            "/api/dashboard/summary",
            "/api/projections",
            "/api/prices/KO/latest",
        ],
    )
    def test_requests_without_user_are_rejected(self, client, path):
        assert client.get(path).status_code == 401

    def test_health_is_public(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
