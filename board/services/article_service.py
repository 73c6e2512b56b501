"""
Article service: business logic for the Article aggregate.

Design notes
------------
- Reads by id raise ``EntityNotFoundError`` (message carries the id); the
  router turns that into a 404.
- Writes are soft-fail.  Updating or deleting an article that is gone, or
  that belongs to someone else, logs a warning and returns a ``WriteResult``
  with a skipped status instead of raising.  A stale form should not blow
  up the user's flow.
- Hashtags are derived from the article content plus any hashtags passed
  explicitly on the DTO.  Hashtags that lose their last article are pruned.
- Search kinds map to repository finders through ``_SEARCH_QUERIES``;
  adding a kind is one table entry.
- Service functions flush but do not commit.
"""
import logging
from typing import Awaitable, Callable, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from board.constants import SearchType, WriteResult
from board.exceptions import EntityNotFoundError
from board.models import Article
from board.repositories import ArticleRepository, UserAccountRepository
from board.schemas import ArticleDto, ArticleWithCommentsDto, Page, PageRequest
from board.services import hashtag_service

logger = logging.getLogger(__name__)

ArticleQuery = Callable[[ArticleRepository, str, PageRequest], Awaitable[tuple[list[Article], int]]]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _find_by_hashtag_query(
    repo: ArticleRepository, search_value: str, page_request: PageRequest
) -> tuple[list[Article], int]:
    """Exact match on any of the whitespace-separated hashtags in *search_value*."""
    names = [
        name
        for name in (hashtag_service.normalize_hashtag_name(v) for v in search_value.split())
        if name
    ]
    if not names:
        return [], 0
    return await repo.find_by_hashtag_names(names, page_request)


_SEARCH_QUERIES: dict[SearchType, ArticleQuery] = {
    SearchType.TITLE: ArticleRepository.find_by_title_containing,
    SearchType.CONTENT: ArticleRepository.find_by_content_containing,
    SearchType.USER_ID: ArticleRepository.find_by_user_account_user_id_containing,
    SearchType.NICKNAME: ArticleRepository.find_by_user_account_nickname_containing,
    SearchType.HASHTAG: _find_by_hashtag_query,
}


def _collect_hashtag_names(content: str, extra_hashtags: Iterable[str]) -> set[str]:
    names = hashtag_service.parse_hashtag_names(content)
    for value in extra_hashtags:
        name = hashtag_service.normalize_hashtag_name(value)
        if name:
            names.add(name)
    return names


def _to_page(rows: list[Article], total: int, page_request: PageRequest) -> Page[ArticleDto]:
    return Page[ArticleDto].of([ArticleDto.from_entity(a) for a in rows], total, page_request)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

async def search_articles(
    db: AsyncSession,
    search_type: SearchType | None = None,
    search_value: str | None = None,
    page_request: PageRequest | None = None,
) -> Page[ArticleDto]:
    """
    Return one page of articles, optionally filtered.

    A missing *search_type* or a blank *search_value* returns the unfiltered
    listing rather than an empty page.
    """
    page_request = page_request or PageRequest()
    repo = ArticleRepository(db)

    if search_type is None or not search_value or not search_value.strip():
        rows, total = await repo.find_all(page_request)
    else:
        query = _SEARCH_QUERIES[SearchType(search_type)]
        rows, total = await query(repo, search_value.strip(), page_request)

    return _to_page(rows, total, page_request)


async def search_articles_via_hashtag(
    db: AsyncSession,
    hashtag: str | None,
    page_request: PageRequest | None = None,
) -> Page[ArticleDto]:
    """
    Return one page of articles tagged with exactly *hashtag*.

    Blank input returns an empty page without touching the database.
    """
    page_request = page_request or PageRequest()
    hashtag_name = hashtag_service.normalize_hashtag_name(hashtag)
    if hashtag_name is None:
        return Page[ArticleDto].empty(page_request)

    rows, total = await ArticleRepository(db).find_by_hashtag(hashtag_name, page_request)
    return _to_page(rows, total, page_request)


async def get_article_with_comments(db: AsyncSession, article_id: int) -> ArticleWithCommentsDto:
    article = await ArticleRepository(db).find_by_id(article_id)
    if article is None:
        raise EntityNotFoundError("Article", article_id)
    return ArticleWithCommentsDto.from_entity(article)


async def get_article(db: AsyncSession, article_id: int) -> ArticleDto:
    article = await ArticleRepository(db).find_by_id(article_id)
    if article is None:
        raise EntityNotFoundError("Article", article_id)
    return ArticleDto.from_entity(article)


async def get_article_count(db: AsyncSession) -> int:
    return await ArticleRepository(db).count()


async def get_hashtags(db: AsyncSession) -> list[str]:
    """Distinct hashtag names in use, oldest first."""
    return await ArticleRepository(db).find_all_distinct_hashtags()


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

async def save_article(db: AsyncSession, dto: ArticleDto) -> WriteResult:
    """Create an article written by ``dto.user_account`` and return its id."""
    try:
        user_account = await UserAccountRepository(db).get_reference_by_id(
            dto.user_account.user_id
        )
    except EntityNotFoundError as exc:
        logger.warning("Article not saved, author could not be resolved: %s", exc)
        return WriteResult.not_found()

    hashtags = await hashtag_service.resolve_hashtags(
        db, _collect_hashtag_names(dto.content, dto.hashtags)
    )
    article = Article(
        user_account=user_account,
        title=dto.title,
        content=dto.content,
        hashtags=hashtags,
    )
    await ArticleRepository(db).save(article)

    logger.info("Article %s created by %s", article.id, user_account.user_id)
    return WriteResult.done(article.id)


async def update_article(db: AsyncSession, article_id: int, dto: ArticleDto) -> WriteResult:
    """
    Update title, content and hashtags of *article_id* if ``dto.user_account``
    wrote it.  Blank title or content leaves that field unchanged.
    """
    article = await ArticleRepository(db).find_by_id(article_id)
    if article is None:
        logger.warning("Article update skipped, article not found - id: %s", article_id)
        return WriteResult.not_found(article_id)

    requester = dto.user_account.user_id
    if article.user_account_id != requester:
        logger.warning(
            "Article update skipped, %s is not the author of article %s", requester, article_id
        )
        return WriteResult.unauthorized(article_id)

    if dto.title and dto.title.strip():
        article.title = dto.title
    if dto.content and dto.content.strip():
        article.content = dto.content

    previous_ids = {h.id for h in article.hashtags}
    hashtags = await hashtag_service.resolve_hashtags(
        db, _collect_hashtag_names(article.content, dto.hashtags)
    )
    article.hashtags.clear()
    article.hashtags.extend(hashtags)
    await db.flush()

    await hashtag_service.delete_hashtags_without_articles(
        db, previous_ids - {h.id for h in hashtags}
    )
    logger.info("Article %s updated by %s", article_id, requester)
    return WriteResult.done(article_id)


async def delete_article(db: AsyncSession, article_id: int, user_id: str) -> WriteResult:
    """Delete *article_id* and its comments if *user_id* wrote it."""
    repo = ArticleRepository(db)
    article = await repo.find_by_id(article_id)
    if article is None:
        logger.warning("Article delete skipped, article not found - id: %s", article_id)
        return WriteResult.not_found(article_id)
    if article.user_account_id != user_id:
        logger.warning(
            "Article delete skipped, %s is not the author of article %s", user_id, article_id
        )
        return WriteResult.unauthorized(article_id)

    hashtag_ids = [h.id for h in article.hashtags]
    await repo.delete_by_id_and_user_id(article_id, user_id)
    await hashtag_service.delete_hashtags_without_articles(db, hashtag_ids)

    logger.info("Article %s deleted by %s", article_id, user_id)
    return WriteResult.done(article_id)
