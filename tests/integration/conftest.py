"""Pytest configuration and fixtures for API integration tests."""

from typing import Dict

import httpx
import pytest
import pytest_asyncio

from apps.api.main import create_app
from apps.api.security import create_access_token
from tests.support import ADMIN_ID, CUSTOMER_ID, MANAGER_ID, OTHER_CUSTOMER_ID


@pytest.fixture
def app(container):
    """FastAPI app using the test container instead of the startup-built one."""
    app = create_app()
    app.state.container = container
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(container):
    """Bearer headers for a seeded user id."""

    def build(user_id: str) -> Dict[str, str]:
        token = create_access_token(container.settings.auth, user_id)
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
def customer_headers(auth_headers):
    return auth_headers(CUSTOMER_ID)


@pytest.fixture
def other_customer_headers(auth_headers):
    return auth_headers(OTHER_CUSTOMER_ID)


@pytest.fixture
def admin_headers(auth_headers):
    return auth_headers(ADMIN_ID)


@pytest.fixture
def manager_headers(auth_headers):
    return auth_headers(MANAGER_ID)


@pytest.fixture
def order_payload():
    return {
        "items": [{"productId": "prod-1", "quantity": 2, "price": 10}],
        "address": "12 Ring Road, Accra",
        "paymentMethod": "cod",
        "paymentChannel": "cod_pickup",
        "totalAmount": 20,
        "email": "ama@example.com",
    }
