"""
Article persistence.

Paged finders return ``(rows, total)``; the service layer wraps them into
``Page`` DTOs.  Every read eager-loads the author and hashtags (the
relationships are ``noload`` by default) and uses ``populate_existing`` so
rows already in the session's identity map are refreshed rather than served
with stale collections.
"""
from typing import Sequence

from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from board.exceptions import EntityNotFoundError
from board.models import Article, ArticleComment, Hashtag, UserAccount, article_hashtags
from board.schemas import PageRequest

# Columns that are safe to sort by; guards against arbitrary attribute access.
_SORTABLE_COLUMNS: frozenset[str] = frozenset(
    {"id", "title", "created_at", "created_by", "modified_at"}
)


def _resolve_sort_column(sort_by: str):
    """Map *sort_by* to a column, falling back to ``Article.created_at``."""
    if sort_by in _SORTABLE_COLUMNS:
        return getattr(Article, sort_by)
    return Article.created_at


class ArticleRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Paged finders
    # ------------------------------------------------------------------

    async def find_all(self, page_request: PageRequest) -> tuple[list[Article], int]:
        return await self._find_page(page_request)

    async def find_by_title_containing(
        self, title: str, page_request: PageRequest
    ) -> tuple[list[Article], int]:
        return await self._find_page(page_request, Article.title.icontains(title, autoescape=True))

    async def find_by_content_containing(
        self, content: str, page_request: PageRequest
    ) -> tuple[list[Article], int]:
        return await self._find_page(
            page_request, Article.content.icontains(content, autoescape=True)
        )

    async def find_by_user_account_nickname_containing(
        self, nickname: str, page_request: PageRequest
    ) -> tuple[list[Article], int]:
        return await self._find_page(
            page_request,
            Article.user_account.has(UserAccount.nickname.icontains(nickname, autoescape=True)),
        )

    async def find_by_user_account_user_id_containing(
        self, user_id: str, page_request: PageRequest
    ) -> tuple[list[Article], int]:
        return await self._find_page(
            page_request, Article.user_account_id.contains(user_id, autoescape=True)
        )

    async def find_by_hashtag(
        self, hashtag_name: str, page_request: PageRequest
    ) -> tuple[list[Article], int]:
        return await self.find_by_hashtag_names([hashtag_name], page_request)

    async def find_by_hashtag_names(
        self, hashtag_names: Sequence[str], page_request: PageRequest
    ) -> tuple[list[Article], int]:
        """Articles tagged with any of *hashtag_names* (exact match)."""
        tagged_ids = (
            select(article_hashtags.c.article_id)
            .join(Hashtag, Hashtag.id == article_hashtags.c.hashtag_id)
            .where(Hashtag.hashtag_name.in_(list(hashtag_names)))
        )
        return await self._find_page(page_request, Article.id.in_(tagged_ids))

    async def _find_page(self, page_request: PageRequest, *criteria) -> tuple[list[Article], int]:
        count_q = select(func.count()).select_from(Article).where(*criteria)
        total: int = (await self._session.execute(count_q)).scalar_one()
        if total == 0:
            return [], 0

        direction = desc if page_request.sort_order == "desc" else asc
        q = (
            self._select_articles()
            .where(*criteria)
            .order_by(direction(_resolve_sort_column(page_request.sort_by)), direction(Article.id))
            .offset(page_request.offset)
            .limit(page_request.page_size)
        )
        result = await self._session.execute(q)
        return list(result.unique().scalars().all()), total

    # ------------------------------------------------------------------
    # Single-row access
    # ------------------------------------------------------------------

    async def find_by_id(self, article_id: int) -> Article | None:
        """Load one article with author, hashtags and comments (with their authors)."""
        q = (
            self._select_articles()
            .options(
                selectinload(Article.article_comments).joinedload(ArticleComment.user_account)
            )
            .where(Article.id == article_id)
        )
        result = await self._session.execute(q)
        return result.unique().scalar_one_or_none()

    async def get_reference_by_id(self, article_id: int) -> Article:
        article = await self._session.get(Article, article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def count(self) -> int:
        return (await self._session.execute(select(func.count()).select_from(Article))).scalar_one()

    async def find_all_distinct_hashtags(self) -> list[str]:
        """Names of hashtags attached to at least one article, in creation order."""
        q = (
            select(Hashtag.hashtag_name)
            .where(Hashtag.id.in_(select(article_hashtags.c.hashtag_id)))
            .order_by(Hashtag.id)
        )
        return list((await self._session.execute(q)).scalars().all())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def save(self, article: Article) -> Article:
        self._session.add(article)
        await self._session.flush()
        return article

    async def delete_by_id_and_user_id(self, article_id: int, user_id: str) -> int:
        """
        Delete the article if *user_id* wrote it, removing its comments and
        hashtag links first.  Returns the number of articles deleted (0 or 1).
        """
        owned = await self._session.execute(
            select(Article.id).where(Article.id == article_id, Article.user_account_id == user_id)
        )
        if owned.scalar_one_or_none() is None:
            return 0

        await self._session.execute(
            delete(ArticleComment).where(ArticleComment.article_id == article_id)
        )
        await self._session.execute(
            delete(article_hashtags).where(article_hashtags.c.article_id == article_id)
        )
        await self._session.execute(delete(Article).where(Article.id == article_id))
        return 1

    @staticmethod
    def _select_articles():
        return (
            select(Article)
            .options(joinedload(Article.user_account), selectinload(Article.hashtags))
            .execution_options(populate_existing=True)
        )
