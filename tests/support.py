"""Constants and helpers shared by the test modules."""

from sqlalchemy import func, select

WEBHOOK_SECRET = "sk_test_webhook_secret"
FRONTEND_URL = "http://shop.test"
BACKEND_URL = "http://api.test"

CUSTOMER_ID = "user-customer-1"
OTHER_CUSTOMER_ID = "user-customer-2"
ADMIN_ID = "user-admin-1"
MANAGER_ID = "user-manager-1"


async def count_rows(session_factory, model, *criteria) -> int:
    """Count rows of a model, optionally filtered."""
    async with session_factory() as session:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        return (await session.execute(query)).scalar_one()
