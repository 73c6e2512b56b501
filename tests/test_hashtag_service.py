"""
Hashtag parsing and hashtag-table maintenance tests.
"""
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.models import Hashtag
from board.services import hashtag_service
from board.services.hashtag_service import normalize_hashtag_name, parse_hashtag_names


# ---------------------------------------------------------------------------
# parse_hashtag_names
# ---------------------------------------------------------------------------

def test_parse_stops_at_hyphen():
    assert parse_hashtag_names("hello #java and #spring-boot") == {"#java", "#spring"}


def test_parse_without_tags():
    assert parse_hashtag_names("no tags here") == set()


@pytest.mark.parametrize("content", [None, ""])
def test_parse_empty_input(content):
    assert parse_hashtag_names(content) == set()


def test_parse_keeps_case_and_deduplicates():
    content = "#Java #java #java #snake_case #v2"
    assert parse_hashtag_names(content) == {"#Java", "#java", "#snake_case", "#v2"}


def test_parse_ignores_bare_hash():
    assert parse_hashtag_names("# not a tag, neither is #! or # #") == set()


def test_parse_adjacent_tags():
    assert parse_hashtag_names("#blue#green, (#red)") == {"#blue", "#green", "#red"}


def test_parse_unicode_letters():
    assert parse_hashtag_names("모임 #자바 공부") == {"#자바"}


# ---------------------------------------------------------------------------
# normalize_hashtag_name
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value, expected",
    [
        ("#java", "#java"),
        ("java", "#java"),
        ("  #Java ", "#Java"),
        ("", None),
        ("   ", None),
        (None, None),
        ("#", None),
        ("spring-boot", None),
        ("two words", None),
    ],
)
def test_normalize_hashtag_name(value, expected):
    assert normalize_hashtag_name(value) == expected


# ---------------------------------------------------------------------------
# resolve / prune
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_resolve_creates_only_unseen_hashtags(db_session: AsyncSession):
    first = await hashtag_service.resolve_hashtags(db_session, {"#java", "#spring"})
    assert {h.hashtag_name for h in first} == {"#java", "#spring"}

    second = await hashtag_service.resolve_hashtags(db_session, {"#java", "#python"})
    assert {h.hashtag_name for h in second} == {"#java", "#python"}

    java_ids = {h.id for h in first + second if h.hashtag_name == "#java"}
    assert len(java_ids) == 1

    names = (await db_session.execute(select(Hashtag.hashtag_name))).scalars().all()
    assert sorted(names) == ["#java", "#python", "#spring"]


@pytest.mark.asyncio
async def test_resolve_nothing(db_session: AsyncSession):
    assert await hashtag_service.resolve_hashtags(db_session, []) == []


@pytest.mark.asyncio
async def test_delete_hashtags_without_articles(db_session: AsyncSession):
    hashtags = await hashtag_service.resolve_hashtags(db_session, {"#lonely"})
    deleted = await hashtag_service.delete_hashtags_without_articles(
        db_session, [h.id for h in hashtags]
    )
    assert deleted == 1
    assert await hashtag_service.find_hashtags_by_names(db_session, ["#lonely"]) == []
