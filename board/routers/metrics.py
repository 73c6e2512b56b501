from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from board.database import get_db
from board.repositories import (
    ArticleCommentRepository,
    ArticleRepository,
    HashtagRepository,
    UserAccountRepository,
)
from board.schemas import MetricsResponse

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):
    total_articles = await ArticleRepository(db).count()
    total_comments = await ArticleCommentRepository(db).count()
    avg_comments = total_comments / total_articles if total_articles > 0 else 0

    return MetricsResponse(
        total_articles=total_articles,
        total_comments=total_comments,
        total_users=await UserAccountRepository(db).count(),
        total_hashtags=await HashtagRepository(db).count(),
        avg_comments_per_article=round(avg_comments, 2),
    )
