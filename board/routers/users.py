from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from board.database import get_db
from board.schemas import UserAccountRequest, UserAccountResponse
from board.services import user_account_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/{user_id}", response_model=UserAccountResponse)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    user = await user_account_service.get_user_account(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserAccountResponse.from_dto(user)


@router.post("", status_code=201, response_model=UserAccountResponse)
async def create_user(data: UserAccountRequest, db: AsyncSession = Depends(get_db)):
    try:
        user = await user_account_service.save_user_account(db, data.to_dto())
    except IntegrityError:
        raise HTTPException(
            status_code=409,
            detail="A user with this user id or email already exists",
        )
    return UserAccountResponse.from_dto(user)
