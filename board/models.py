from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from board.auditing import get_current_auditor
from board.database import Base

# ---------------------------------------------------------------------------
# Association table: Article <-> Hashtag (many-to-many)
# ---------------------------------------------------------------------------
article_hashtags = Table(
    "article_hashtags",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("hashtag_id", Integer, ForeignKey("hashtags.id", ondelete="CASCADE"), primary_key=True),
)


# ---------------------------------------------------------------------------
# Audit columns shared by every entity
# ---------------------------------------------------------------------------
class AuditingFields:
    # Fetch server-generated timestamps on flush so DTOs can be built
    # without a lazy refresh (which async sessions do not allow).
    __mapper_args__ = {"eager_defaults": True}

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    created_by: Mapped[str] = mapped_column(
        String(100), default=get_current_auditor, nullable=False
    )
    modified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    modified_by: Mapped[str] = mapped_column(
        String(100), default=get_current_auditor, onupdate=get_current_auditor, nullable=False
    )


# ---------------------------------------------------------------------------
# UserAccount
# ---------------------------------------------------------------------------
class UserAccount(AuditingFields, Base):
    __tablename__ = "user_accounts"

    user_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    user_password: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(100), unique=True, nullable=True)
    nickname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    memo: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


# ---------------------------------------------------------------------------
# Hashtag
# ---------------------------------------------------------------------------
class Hashtag(AuditingFields, Base):
    __tablename__ = "hashtags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hashtag_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------
class Article(AuditingFields, Base):
    __tablename__ = "articles"

    __table_args__ = (
        # Author's articles by date (user id search, profile listing)
        Index("ix_articles_user_account_id_created_at", "user_account_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Foreign key; set at creation and never reassigned
    user_account_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("user_accounts.user_id"), nullable=False
    )

    # Relationships point one way only (article -> related rows) and are
    # lazy="noload": services must request them with selectinload/joinedload.
    # Comment removal is an explicit step in ArticleRepository, not an ORM cascade.
    user_account: Mapped["UserAccount"] = relationship("UserAccount", lazy="noload")
    hashtags: Mapped[List["Hashtag"]] = relationship(
        "Hashtag", secondary=article_hashtags, lazy="noload"
    )
    article_comments: Mapped[List["ArticleComment"]] = relationship(
        "ArticleComment",
        lazy="noload",
        passive_deletes=True,
        order_by=lambda: [ArticleComment.created_at, ArticleComment.id],
    )


# ---------------------------------------------------------------------------
# ArticleComment
# ---------------------------------------------------------------------------
class ArticleComment(AuditingFields, Base):
    __tablename__ = "article_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(String(500), nullable=False)

    article_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_account_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("user_accounts.user_id"), nullable=False
    )

    user_account: Mapped["UserAccount"] = relationship("UserAccount", lazy="noload")
