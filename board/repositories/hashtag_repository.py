from typing import Iterable

from sqlalchemy import exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from board.models import Hashtag, article_hashtags


class HashtagRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_names(self, hashtag_names: Iterable[str]) -> list[Hashtag]:
        names = list(hashtag_names)
        if not names:
            return []
        q = select(Hashtag).where(Hashtag.hashtag_name.in_(names)).order_by(Hashtag.id)
        return list((await self._session.execute(q)).scalars().all())

    async def find_orphans(self, hashtag_ids: Iterable[int]) -> list[Hashtag]:
        """Hashtags among *hashtag_ids* no longer linked to any article."""
        ids = list(hashtag_ids)
        if not ids:
            return []
        linked = exists().where(article_hashtags.c.hashtag_id == Hashtag.id)
        q = select(Hashtag).where(Hashtag.id.in_(ids), ~linked)
        return list((await self._session.execute(q)).scalars().all())

    async def count(self) -> int:
        return (await self._session.execute(select(func.count()).select_from(Hashtag))).scalar_one()

    async def save_all(self, hashtags: list[Hashtag]) -> list[Hashtag]:
        self._session.add_all(hashtags)
        await self._session.flush()
        return hashtags

    async def delete_all(self, hashtags: list[Hashtag]) -> None:
        for hashtag in hashtags:
            await self._session.delete(hashtag)
        await self._session.flush()
