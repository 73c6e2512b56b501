"""
Repository tests: persistence behaviour below the service layer.
"""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from board.exceptions import EntityNotFoundError
from board.models import Article, ArticleComment, Hashtag, UserAccount, article_hashtags
from board.repositories import (
    ArticleCommentRepository,
    ArticleRepository,
    HashtagRepository,
    UserAccountRepository,
)
from board.schemas import PageRequest


async def _seed(db: AsyncSession) -> tuple[Article, Article]:
    user = await UserAccountRepository(db).save(UserAccount(user_id="haco", user_password="pw"))
    java, spring = await HashtagRepository(db).save_all(
        [Hashtag(hashtag_name="#java"), Hashtag(hashtag_name="#spring")]
    )
    repo = ArticleRepository(db)
    first = await repo.save(
        Article(user_account=user, title="first", content="c", hashtags=[java, spring])
    )
    second = await repo.save(Article(user_account=user, title="second", content="c", hashtags=[java]))
    comments = ArticleCommentRepository(db)
    for i in range(3):
        await comments.save(ArticleComment(article_id=first.id, user_account=user, content=f"c{i}"))
    await comments.save(ArticleComment(article_id=second.id, user_account=user, content="other"))
    return first, second


@pytest.mark.asyncio
async def test_insert_increments_count(db_session: AsyncSession):
    repo = ArticleRepository(db_session)
    user = await UserAccountRepository(db_session).save(
        UserAccount(user_id="haco", user_password="pw")
    )
    previous = await repo.count()

    await repo.save(Article(user_account=user, title="new article", content="new content"))

    assert await repo.count() == previous + 1


@pytest.mark.asyncio
async def test_delete_cascades_to_comments_and_links(db_session: AsyncSession):
    first, _ = await _seed(db_session)
    repo = ArticleRepository(db_session)
    comments = ArticleCommentRepository(db_session)
    previous_articles = await repo.count()
    previous_comments = await comments.count()

    deleted = await repo.delete_by_id_and_user_id(first.id, "haco")

    assert deleted == 1
    assert await repo.count() == previous_articles - 1
    assert await comments.count() == previous_comments - 3
    assert await comments.find_by_article_id(first.id) == []
    links = await db_session.execute(
        select(func.count()).select_from(article_hashtags).where(
            article_hashtags.c.article_id == first.id
        )
    )
    assert links.scalar_one() == 0


@pytest.mark.asyncio
async def test_delete_requires_matching_user(db_session: AsyncSession):
    first, _ = await _seed(db_session)
    repo = ArticleRepository(db_session)

    assert await repo.delete_by_id_and_user_id(first.id, "someone-else") == 0
    assert await repo.find_by_id(first.id) is not None


@pytest.mark.asyncio
async def test_find_by_hashtag_returns_distinct_articles(db_session: AsyncSession):
    await _seed(db_session)
    repo = ArticleRepository(db_session)

    rows, total = await repo.find_by_hashtag_names(["#java", "#spring"], PageRequest())

    assert total == 2
    assert sorted(a.title for a in rows) == ["first", "second"]


@pytest.mark.asyncio
async def test_orphans_are_detected_after_unlinking(db_session: AsyncSession):
    first, second = await _seed(db_session)
    repo = ArticleRepository(db_session)
    hashtags = HashtagRepository(db_session)
    spring = (await hashtags.find_by_names(["#spring"]))[0]

    await repo.delete_by_id_and_user_id(first.id, "haco")

    candidates = await hashtags.find_by_names(["#java", "#spring"])
    orphans = await hashtags.find_orphans([h.id for h in candidates])
    assert [h.id for h in orphans] == [spring.id]
    assert await repo.find_all_distinct_hashtags() == ["#java"]


@pytest.mark.asyncio
async def test_get_reference_by_id_raises_for_missing_rows(db_session: AsyncSession):
    with pytest.raises(EntityNotFoundError, match="Article not found - id: 3"):
        await ArticleRepository(db_session).get_reference_by_id(3)
    with pytest.raises(EntityNotFoundError, match="ghost"):
        await UserAccountRepository(db_session).get_reference_by_id("ghost")
    with pytest.raises(EntityNotFoundError):
        await ArticleCommentRepository(db_session).get_reference_by_id(8)


@pytest.mark.asyncio
async def test_unknown_sort_column_falls_back(db_session: AsyncSession):
    await _seed(db_session)

    rows, total = await ArticleRepository(db_session).find_all(
        PageRequest(sort_by="user_password; drop table articles")
    )

    assert total == 2
    assert len(rows) == 2
