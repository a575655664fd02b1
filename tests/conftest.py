"""Shared fixtures: file-backed SQLite database, fakes and a wired service container."""

from typing import Any, Callable, Dict

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from apps.api.deps import build_container
from core.application.dtos.order_dto import CreateOrderRequest
from core.data.models import Base, UserDeviceModel, UserModel
from core.domain.enums import NotificationType
from core.infrastructure.adapters.notifications.mock_notification_channel import (
    MockNotificationChannel,
)
from core.infrastructure.adapters.payments.mock_gateway import MockPaymentGateway
from core.infrastructure.adapters.realtime.memory_publisher import InMemoryRealtimePublisher
from core.infrastructure.database.config import create_session_factory
from core.settings import AppSettings, NotificationSettings
from core.settings.sections.application import ApplicationSettings
from core.settings.sections.auth import AuthSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.notifications import EmailSettings, PushSettings, SmsSettings
from core.settings.sections.paystack import PaystackSettings
from core.settings.sections.realtime import RealtimeSettings
from tests.support import (
    ADMIN_ID,
    BACKEND_URL,
    CUSTOMER_ID,
    FRONTEND_URL,
    MANAGER_ID,
    OTHER_CUSTOMER_ID,
    WEBHOOK_SECRET,
)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'fosten_test.db'}"


@pytest.fixture
def app_settings(database_url) -> AppSettings:
    return AppSettings(
        application=ApplicationSettings(
            APP_ENV="test",
            FRONTEND_URL=FRONTEND_URL,
            BACKEND_URL=BACKEND_URL,
            APP_CURRENCY="GHS",
        ),
        database=DatabaseSettings(DATABASE_URL=database_url),
        auth=AuthSettings(JWT_SECRET="test-jwt-secret", JWT_ALGORITHM="HS512"),
        paystack=PaystackSettings(PAYMENT_PROVIDER="mock", PAYSTACK_SECRET_KEY=WEBHOOK_SECRET),
        notifications=NotificationSettings(
            email=EmailSettings(), sms=SmsSettings(), push=PushSettings()
        ),
        realtime=RealtimeSettings(REALTIME_ENABLED=False),
    )


@pytest_asyncio.fixture
async def db_engine(database_url):
    """Create test database engine with all tables."""
    engine = create_async_engine(database_url, connect_args={"check_same_thread": False})

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        session.add_all(
            [
                UserModel(id=CUSTOMER_ID, name="Ama Mensah", email="ama@example.com", phone="+233200000001"),
                UserModel(id=OTHER_CUSTOMER_ID, name="Kofi Boateng", email="kofi@example.com"),
                UserModel(id=ADMIN_ID, name="Admin", email="admin@example.com", role="admin"),
                UserModel(id=MANAGER_ID, name="Manager", email="manager@example.com", role="manager"),
                UserDeviceModel(id="device-1", user_id=CUSTOMER_ID, device_token="fcm-token-1"),
                UserDeviceModel(
                    id="device-2", user_id=CUSTOMER_ID, device_token="fcm-token-old", active=False
                ),
            ]
        )
        await session.commit()
    yield session_factory


@pytest.fixture
def gateway() -> MockPaymentGateway:
    return MockPaymentGateway(secret_key=WEBHOOK_SECRET, checkout_url="https://checkout.test")


@pytest.fixture
def realtime() -> InMemoryRealtimePublisher:
    return InMemoryRealtimePublisher()


@pytest.fixture
def channels() -> Dict[NotificationType, MockNotificationChannel]:
    return {
        NotificationType.EMAIL: MockNotificationChannel("email"),
        NotificationType.SMS: MockNotificationChannel("sms"),
        NotificationType.PUSH: MockNotificationChannel("push"),
    }


@pytest_asyncio.fixture
async def container(app_settings, db_engine, session_factory, gateway, realtime, channels):
    """Services wired against the test database and fakes."""
    container = build_container(
        app_settings,
        engine=db_engine,
        gateway=gateway,
        realtime=realtime,
        channels=channels,
    )
    yield container
    await container.shutdown()


@pytest.fixture
def order_request() -> Callable[..., CreateOrderRequest]:
    """Build a CreateOrderRequest; keyword overrides use the wire (camelCase) names."""

    def build(**overrides: Any) -> CreateOrderRequest:
        payload = {
            "items": [
                {"productId": "prod-1", "quantity": 2, "price": "7.50"},
                {"productId": "prod-2", "quantity": 1, "price": "5.00"},
            ],
            "address": "12 Ring Road, Accra",
            "paymentMethod": "cod",
            "paymentChannel": "cod_pickup",
            "totalAmount": "20.00",
            "email": "ama@example.com",
            "phone": "+233200000001",
        }
        payload.update(overrides)
        return CreateOrderRequest.model_validate(payload)

    return build
