"""
Hashtag service: parsing hashtags out of text and keeping the hashtag
table in step with the articles that reference it.

A hashtag is ``#`` followed by one or more word characters (letters,
digits, underscore).  Names are stored as written, leading ``#`` included,
so ``#Java`` and ``#java`` are distinct tags.
"""
import logging
import re
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from board.models import Hashtag
from board.repositories import HashtagRepository

logger = logging.getLogger(__name__)

_HASHTAG_RE = re.compile(r"#\w+")


def parse_hashtag_names(content: str | None) -> set[str]:
    """Return the distinct hashtags found in *content*.

    >>> sorted(parse_hashtag_names("hello #java and #spring-boot"))
    ['#java', '#spring']
    """
    if not content:
        return set()
    return set(_HASHTAG_RE.findall(content))


def normalize_hashtag_name(value: str | None) -> str | None:
    """
    Turn user input such as ``"java"`` or ``" #java "`` into ``"#java"``.

    Returns None when the input is blank or is not a single valid hashtag.
    """
    if value is None:
        return None
    name = value.strip()
    if not name:
        return None
    if not name.startswith("#"):
        name = f"#{name}"
    return name if _HASHTAG_RE.fullmatch(name) else None


async def find_hashtags_by_names(db: AsyncSession, hashtag_names: Iterable[str]) -> list[Hashtag]:
    return await HashtagRepository(db).find_by_names(hashtag_names)


async def resolve_hashtags(db: AsyncSession, hashtag_names: Iterable[str]) -> list[Hashtag]:
    """
    Return Hashtag rows for every name in *hashtag_names*, inserting the
    ones that do not exist yet.  Inserts are flushed in the caller's
    transaction.
    """
    names = set(hashtag_names)
    if not names:
        return []

    repo = HashtagRepository(db)
    existing = await repo.find_by_names(names)
    known = {h.hashtag_name for h in existing}
    created = [Hashtag(hashtag_name=name) for name in sorted(names - known)]
    if created:
        await repo.save_all(created)
        logger.debug("Created %d hashtag(s): %s", len(created), [h.hashtag_name for h in created])
    return existing + created


async def delete_hashtags_without_articles(db: AsyncSession, hashtag_ids: Iterable[int]) -> int:
    """Delete the hashtags among *hashtag_ids* that no article uses any more."""
    repo = HashtagRepository(db)
    orphans = await repo.find_orphans(hashtag_ids)
    if orphans:
        await repo.delete_all(orphans)
        logger.debug("Pruned %d orphaned hashtag(s)", len(orphans))
    return len(orphans)
