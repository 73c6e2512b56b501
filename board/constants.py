from dataclasses import dataclass
from enum import Enum


class SearchType(str, Enum):
    """Fields an article listing can be filtered on."""

    TITLE = "TITLE"
    CONTENT = "CONTENT"
    USER_ID = "USER_ID"
    NICKNAME = "NICKNAME"
    HASHTAG = "HASHTAG"

    @property
    def description(self) -> str:
        return _SEARCH_TYPE_DESCRIPTIONS[self]


_SEARCH_TYPE_DESCRIPTIONS = {
    SearchType.TITLE: "Title",
    SearchType.CONTENT: "Content",
    SearchType.USER_ID: "User ID",
    SearchType.NICKNAME: "Nickname",
    SearchType.HASHTAG: "Hashtag",
}


class WriteStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED_NOT_FOUND = "skipped_not_found"
    SKIPPED_UNAUTHORIZED = "skipped_unauthorized"


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of a service write.

    Writes against a missing row or someone else's row complete without
    raising; the status records which case happened so it can be logged and
    asserted on, while HTTP callers only ever see success.
    """

    status: WriteStatus
    entity_id: int | None = None

    @property
    def applied(self) -> bool:
        return self.status is WriteStatus.APPLIED

    @classmethod
    def done(cls, entity_id: int | None = None) -> "WriteResult":
        return cls(WriteStatus.APPLIED, entity_id)

    @classmethod
    def not_found(cls, entity_id: int | None = None) -> "WriteResult":
        return cls(WriteStatus.SKIPPED_NOT_FOUND, entity_id)

    @classmethod
    def unauthorized(cls, entity_id: int | None = None) -> "WriteResult":
        return cls(WriteStatus.SKIPPED_UNAUTHORIZED, entity_id)
