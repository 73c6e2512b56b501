from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from board.exceptions import EntityNotFoundError
from board.models import UserAccount


class UserAccountRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, user_id: str) -> UserAccount | None:
        return await self._session.get(UserAccount, user_id)

    async def get_reference_by_id(self, user_id: str) -> UserAccount:
        user_account = await self.find_by_id(user_id)
        if user_account is None:
            raise EntityNotFoundError("UserAccount", user_id)
        return user_account

    async def count(self) -> int:
        q = select(func.count()).select_from(UserAccount)
        return (await self._session.execute(q)).scalar_one()

    async def save(self, user_account: UserAccount) -> UserAccount:
        self._session.add(user_account)
        await self._session.flush()
        return user_account
