"""SQLAlchemy implementation of UserRepository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import User
from core.domain.repositories import UserRepository

from ..mappers import UserMapper
from ..models import UserDeviceModel, UserModel


class SqlAlchemyUserRepository(UserRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)
        return UserMapper.to_domain(model) if model else None

    async def active_device_tokens(self, user_id: str) -> List[str]:
        result = await self._session.execute(
            select(UserDeviceModel.device_token).where(
                UserDeviceModel.user_id == user_id,
                UserDeviceModel.active.is_(True),
            )
        )
        return list(result.scalars().all())
