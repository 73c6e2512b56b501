"""
Article comment service.

Comments hang off an article and are edited or deleted only by their
author.  Like article writes, comment writes never raise for a missing row
or a foreign author: they log and return a skipped ``WriteResult``.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from board.constants import WriteResult
from board.exceptions import EntityNotFoundError
from board.models import ArticleComment
from board.repositories import ArticleCommentRepository, ArticleRepository, UserAccountRepository
from board.schemas import ArticleCommentDto

logger = logging.getLogger(__name__)


async def search_article_comments(db: AsyncSession, article_id: int) -> list[ArticleCommentDto]:
    """Comments of *article_id*, oldest first; empty when there are none."""
    comments = await ArticleCommentRepository(db).find_by_article_id(article_id)
    return [ArticleCommentDto.from_entity(c) for c in comments]


async def save_article_comment(db: AsyncSession, dto: ArticleCommentDto) -> WriteResult:
    try:
        article = await ArticleRepository(db).get_reference_by_id(dto.article_id)
        user_account = await UserAccountRepository(db).get_reference_by_id(
            dto.user_account.user_id
        )
    except EntityNotFoundError as exc:
        logger.warning("Comment not saved, reference could not be resolved: %s", exc)
        return WriteResult.not_found()

    comment = ArticleComment(
        article_id=article.id,
        user_account=user_account,
        content=dto.content,
    )
    await ArticleCommentRepository(db).save(comment)

    logger.info("Comment %s added to article %s by %s", comment.id, article.id, user_account.user_id)
    return WriteResult.done(comment.id)


async def update_article_comment(db: AsyncSession, dto: ArticleCommentDto) -> WriteResult:
    comment = await ArticleCommentRepository(db).find_by_id(dto.id) if dto.id is not None else None
    if comment is None:
        logger.warning("Comment update skipped, comment not found - id: %s", dto.id)
        return WriteResult.not_found(dto.id)

    requester = dto.user_account.user_id
    if comment.user_account_id != requester:
        logger.warning("Comment update skipped, %s is not the author of comment %s", requester, dto.id)
        return WriteResult.unauthorized(dto.id)

    if dto.content and dto.content.strip():
        comment.content = dto.content
        await db.flush()
    return WriteResult.done(dto.id)


async def delete_article_comment(
    db: AsyncSession, article_comment_id: int, user_id: str
) -> WriteResult:
    repo = ArticleCommentRepository(db)
    comment = await repo.find_by_id(article_comment_id)
    if comment is None:
        logger.warning("Comment delete skipped, comment not found - id: %s", article_comment_id)
        return WriteResult.not_found(article_comment_id)
    if comment.user_account_id != user_id:
        logger.warning(
            "Comment delete skipped, %s is not the author of comment %s", user_id, article_comment_id
        )
        return WriteResult.unauthorized(article_comment_id)

    await repo.delete(comment)
    logger.info("Comment %s deleted by %s", article_comment_id, user_id)
    return WriteResult.done(article_comment_id)
