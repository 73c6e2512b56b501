from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from board.exceptions import EntityNotFoundError
from board.models import ArticleComment


class ArticleCommentRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_article_id(self, article_id: int) -> list[ArticleComment]:
        """Comments of *article_id* with their authors, oldest first."""
        q = (
            select(ArticleComment)
            .options(joinedload(ArticleComment.user_account))
            .where(ArticleComment.article_id == article_id)
            .order_by(ArticleComment.created_at, ArticleComment.id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(q)
        return list(result.unique().scalars().all())

    async def find_by_id(self, article_comment_id: int) -> ArticleComment | None:
        return await self._session.get(ArticleComment, article_comment_id)

    async def get_reference_by_id(self, article_comment_id: int) -> ArticleComment:
        comment = await self.find_by_id(article_comment_id)
        if comment is None:
            raise EntityNotFoundError("ArticleComment", article_comment_id)
        return comment

    async def count(self) -> int:
        q = select(func.count()).select_from(ArticleComment)
        return (await self._session.execute(q)).scalar_one()

    async def save(self, comment: ArticleComment) -> ArticleComment:
        self._session.add(comment)
        await self._session.flush()
        return comment

    async def delete(self, comment: ArticleComment) -> None:
        await self._session.delete(comment)
        await self._session.flush()

    async def delete_by_id(self, article_comment_id: int) -> int:
        result = await self._session.execute(
            delete(ArticleComment).where(ArticleComment.id == article_comment_id)
        )
        return result.rowcount
