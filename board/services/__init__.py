# Services package.
#
# Each module exposes async functions that hold the business rules for one
# aggregate, plus two pure helpers:
#
#   article_service          - search, read, create, update, delete for Article
#   article_comment_service  - read, create, update, delete for ArticleComment
#   user_account_service     - registration and lookup for UserAccount
#   hashtag_service          - hashtag parsing, resolution and orphan cleanup
#   pagination_service       - pagination bar numbers (pure)
#
# Service functions take an AsyncSession first and flush but never commit;
# the ``get_db`` dependency owns the transaction.  Writes against missing or
# foreign rows do not raise: they log a warning and return a WriteResult.
