from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from board.database import get_db
from board.dependencies import get_current_user
from board.schemas import ArticleCommentRequest, UserAccountDto, WriteResponse
from board.services import article_comment_service

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])


@router.post("", status_code=201, response_model=WriteResponse)
async def create_comment(
    data: ArticleCommentRequest,
    user: UserAccountDto = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await article_comment_service.save_article_comment(db, data.to_dto(user))
    return WriteResponse(id=result.entity_id)


@router.put("/{comment_id}", status_code=204)
async def update_comment(
    comment_id: int,
    data: ArticleCommentRequest,
    user: UserAccountDto = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await article_comment_service.update_article_comment(db, data.to_dto(user, comment_id))


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: int,
    user: UserAccountDto = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await article_comment_service.delete_article_comment(db, comment_id, user.user_id)
