from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from board.auditing import current_auditor_var
from board.config import settings
from board.database import get_db
from board.schemas import PageRequest, UserAccountDto
from board.services import user_account_service


def get_page_request(
    page: int = Query(
        0,
        ge=0,
        description="Page number (0-based).",
    ),
    page_size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=100,
        description="Number of items returned per page (max 100).",
    ),
    sort_by: str = Query(
        "created_at",
        description="Column name to sort results by.",
    ),
    sort_order: str = Query(
        "desc",
        pattern="^(asc|desc)$",
        description="Sort direction: 'asc' or 'desc'.",
    ),
) -> PageRequest:
    """
    Parse paging and sorting query parameters into a ``PageRequest``.

    ``page_size`` is clamped to ``settings.MAX_PAGE_SIZE`` on top of the
    query validation so that lowering the ceiling is a settings change only.
    """
    return PageRequest(
        page=page,
        page_size=min(page_size, settings.MAX_PAGE_SIZE),
        sort_by=sort_by,
        sort_order=sort_order,
    )


async def get_current_user(
    x_user_id: str | None = Header(None, description="Authenticated user id."),
    db: AsyncSession = Depends(get_db),
) -> UserAccountDto:
    """
    Resolve the requesting user from the ``X-User-Id`` header.

    The header is expected to be set by an authenticating proxy.  The user
    also becomes the current auditor, so rows written during the request
    record them in ``created_by`` / ``modified_by``.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    user_account = await user_account_service.get_user_account(db, x_user_id)
    if user_account is None:
        raise HTTPException(status_code=401, detail="Unknown user")

    current_auditor_var.set(user_account.user_id)
    return user_account
