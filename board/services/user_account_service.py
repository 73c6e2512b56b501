"""
User account service.

Registration and lookup only; authentication lives outside this package.
``user_password`` is stored exactly as supplied, so callers hash it first.
Uniqueness of ``user_id`` and ``email`` is enforced by the database and the
router translates the resulting integrity error into a 409.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from board.auditing import auditing
from board.models import UserAccount
from board.repositories import UserAccountRepository
from board.schemas import UserAccountDto


async def get_user_account(db: AsyncSession, user_id: str) -> UserAccountDto | None:
    user_account = await UserAccountRepository(db).find_by_id(user_id)
    if user_account is None:
        return None
    return UserAccountDto.from_entity(user_account)


async def save_user_account(db: AsyncSession, dto: UserAccountDto) -> UserAccountDto:
    """Register a new account; its audit columns are attributed to itself."""
    user_account = UserAccount(
        user_id=dto.user_id,
        user_password=dto.user_password,
        email=dto.email,
        nickname=dto.nickname,
        memo=dto.memo,
    )
    with auditing(dto.user_id):
        await UserAccountRepository(db).save(user_account)
    return UserAccountDto.from_entity(user_account)
