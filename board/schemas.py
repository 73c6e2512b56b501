import math
from datetime import datetime
from typing import Callable, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from board.config import settings
from board.constants import SearchType

T = TypeVar("T")
U = TypeVar("U")


# --- Paging ---

class PageRequest(BaseModel):
    """Zero-based page request; ``sort_by`` is validated by the repository."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(0, ge=0)
    page_size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)
    sort_by: str = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"

    @property
    def offset(self) -> int:
        return self.page * self.page_size


class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int
    pages: int

    @classmethod
    def of(cls, items: list[T], total: int, page_request: PageRequest) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            page=page_request.page,
            page_size=page_request.page_size,
            pages=math.ceil(total / page_request.page_size) if total > 0 else 0,
        )

    @classmethod
    def empty(cls, page_request: PageRequest) -> "Page[T]":
        return cls.of([], 0, page_request)

    def map(self, fn: Callable[[T], U], item_type: type[U]) -> "Page[U]":
        return Page[item_type](
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            page_size=self.page_size,
            pages=self.pages,
        )


# --- DTOs (immutable snapshots of entities) ---

class AuditedDto(BaseModel):
    model_config = ConfigDict(frozen=True)

    created_at: datetime | None = None
    created_by: str | None = None
    modified_at: datetime | None = None
    modified_by: str | None = None


def _audit_fields(entity) -> dict:
    return {
        "created_at": entity.created_at,
        "created_by": entity.created_by,
        "modified_at": entity.modified_at,
        "modified_by": entity.modified_by,
    }


class UserAccountDto(AuditedDto):
    user_id: str
    user_password: str = Field(repr=False)
    email: str | None = None
    nickname: str | None = None
    memo: str | None = None

    @classmethod
    def from_entity(cls, entity) -> "UserAccountDto":
        return cls(
            user_id=entity.user_id,
            user_password=entity.user_password,
            email=entity.email,
            nickname=entity.nickname,
            memo=entity.memo,
            **_audit_fields(entity),
        )


class ArticleCommentDto(AuditedDto):
    id: int | None = None
    article_id: int
    user_account: UserAccountDto
    content: str

    @classmethod
    def from_entity(cls, entity) -> "ArticleCommentDto":
        return cls(
            id=entity.id,
            article_id=entity.article_id,
            user_account=UserAccountDto.from_entity(entity.user_account),
            content=entity.content,
            **_audit_fields(entity),
        )


class ArticleDto(AuditedDto):
    id: int | None = None
    user_account: UserAccountDto
    title: str
    content: str
    # Hashtag names including the leading '#'.
    hashtags: frozenset[str] = frozenset()

    @classmethod
    def from_entity(cls, entity) -> "ArticleDto":
        return cls(
            id=entity.id,
            user_account=UserAccountDto.from_entity(entity.user_account),
            title=entity.title,
            content=entity.content,
            hashtags=frozenset(h.hashtag_name for h in entity.hashtags),
            **_audit_fields(entity),
        )


class ArticleWithCommentsDto(AuditedDto):
    id: int
    user_account: UserAccountDto
    title: str
    content: str
    hashtags: frozenset[str] = frozenset()
    article_comments: tuple[ArticleCommentDto, ...] = ()

    @classmethod
    def from_entity(cls, entity) -> "ArticleWithCommentsDto":
        return cls(
            id=entity.id,
            user_account=UserAccountDto.from_entity(entity.user_account),
            title=entity.title,
            content=entity.content,
            hashtags=frozenset(h.hashtag_name for h in entity.hashtags),
            article_comments=tuple(
                ArticleCommentDto.from_entity(c) for c in entity.article_comments
            ),
            **_audit_fields(entity),
        )


# --- Requests ---

class UserAccountRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=50)
    user_password: str = Field(min_length=1, max_length=255)
    email: str | None = Field(None, max_length=100)
    nickname: str | None = Field(None, max_length=100)
    memo: str | None = Field(None, max_length=255)

    def to_dto(self) -> UserAccountDto:
        return UserAccountDto(**self.model_dump())


class ArticleRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    hashtags: list[str] = []  # extra tags on top of those written in the content

    def to_dto(self, user_account: UserAccountDto, article_id: int | None = None) -> ArticleDto:
        return ArticleDto(
            id=article_id,
            user_account=user_account,
            title=self.title,
            content=self.content,
            hashtags=frozenset(self.hashtags),
        )


class ArticleCommentRequest(BaseModel):
    article_id: int
    content: str = Field(min_length=1, max_length=500)

    def to_dto(
        self, user_account: UserAccountDto, article_comment_id: int | None = None
    ) -> ArticleCommentDto:
        return ArticleCommentDto(
            id=article_comment_id,
            article_id=self.article_id,
            user_account=user_account,
            content=self.content,
        )


# --- Responses ---

def _display_name(user_account: UserAccountDto) -> str:
    return user_account.nickname or user_account.user_id


class UserAccountResponse(BaseModel):
    user_id: str
    email: str | None
    nickname: str | None
    memo: str | None
    created_at: datetime | None

    @classmethod
    def from_dto(cls, dto: UserAccountDto) -> "UserAccountResponse":
        return cls(
            user_id=dto.user_id,
            email=dto.email,
            nickname=dto.nickname,
            memo=dto.memo,
            created_at=dto.created_at,
        )


class ArticleCommentResponse(BaseModel):
    id: int
    content: str
    created_at: datetime | None
    user_id: str
    email: str | None
    nickname: str

    @classmethod
    def from_dto(cls, dto: ArticleCommentDto) -> "ArticleCommentResponse":
        return cls(
            id=dto.id,
            content=dto.content,
            created_at=dto.created_at,
            user_id=dto.user_account.user_id,
            email=dto.user_account.email,
            nickname=_display_name(dto.user_account),
        )


class ArticleResponse(BaseModel):
    id: int
    title: str
    content: str
    hashtags: list[str]
    created_at: datetime | None
    user_id: str
    email: str | None
    nickname: str

    @classmethod
    def from_dto(cls, dto: ArticleDto) -> "ArticleResponse":
        return cls(
            id=dto.id,
            title=dto.title,
            content=dto.content,
            hashtags=sorted(dto.hashtags),
            created_at=dto.created_at,
            user_id=dto.user_account.user_id,
            email=dto.user_account.email,
            nickname=_display_name(dto.user_account),
        )


class ArticleWithCommentsResponse(ArticleResponse):
    article_comments: list[ArticleCommentResponse] = []

    @classmethod
    def from_dto(cls, dto: ArticleWithCommentsDto) -> "ArticleWithCommentsResponse":
        return cls(
            id=dto.id,
            title=dto.title,
            content=dto.content,
            hashtags=sorted(dto.hashtags),
            created_at=dto.created_at,
            user_id=dto.user_account.user_id,
            email=dto.user_account.email,
            nickname=_display_name(dto.user_account),
            article_comments=[ArticleCommentResponse.from_dto(c) for c in dto.article_comments],
        )


class SearchTypeResponse(BaseModel):
    name: SearchType
    description: str


class ArticlePageResponse(BaseModel):
    articles: Page[ArticleResponse]
    pagination_bar_numbers: list[int]
    search_types: list[SearchTypeResponse] = []
    hashtags: list[str] = []


class ArticleDetailResponse(BaseModel):
    article: ArticleWithCommentsResponse
    total_count: int


class WriteResponse(BaseModel):
    id: int | None = None


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_articles: int
    total_comments: int
    total_users: int
    total_hashtags: int
    avg_comments_per_article: float
