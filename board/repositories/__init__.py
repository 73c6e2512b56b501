# Repositories package.
#
# Thin persistence adapters over an AsyncSession, one per aggregate:
#
#   ArticleRepository         - paged searches, lookups and explicit cascade delete
#   ArticleCommentRepository  - comments by article, lookups, save/delete
#   HashtagRepository         - lookup by name and orphan detection
#   UserAccountRepository     - account lookup/save
#
# Repositories flush but never commit; the caller owns the transaction.
from board.repositories.article_comment_repository import ArticleCommentRepository
from board.repositories.article_repository import ArticleRepository
from board.repositories.hashtag_repository import HashtagRepository
from board.repositories.user_account_repository import UserAccountRepository

__all__ = [
    "ArticleRepository",
    "ArticleCommentRepository",
    "HashtagRepository",
    "UserAccountRepository",
]
