from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from board.constants import SearchType
from board.database import get_db
from board.dependencies import get_current_user, get_page_request
from board.exceptions import EntityNotFoundError
from board.schemas import (
    ArticleCommentResponse,
    ArticleDetailResponse,
    ArticlePageResponse,
    ArticleRequest,
    ArticleResponse,
    ArticleWithCommentsResponse,
    PageRequest,
    SearchTypeResponse,
    UserAccountDto,
    WriteResponse,
)
from board.services import article_comment_service, article_service, pagination_service

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])


@router.get("", response_model=ArticlePageResponse)
async def list_articles(
    search_type: SearchType | None = None,
    search_value: str | None = None,
    page_request: PageRequest = Depends(get_page_request),
    db: AsyncSession = Depends(get_db),
):
    articles = await article_service.search_articles(db, search_type, search_value, page_request)
    return ArticlePageResponse(
        articles=articles.map(ArticleResponse.from_dto, ArticleResponse),
        pagination_bar_numbers=pagination_service.get_pagination_bar_numbers(
            page_request.page, articles.pages
        ),
        search_types=[SearchTypeResponse(name=t, description=t.description) for t in SearchType],
    )


@router.get("/search-hashtag", response_model=ArticlePageResponse)
async def search_articles_via_hashtag(
    search_value: str | None = None,
    page_request: PageRequest = Depends(get_page_request),
    db: AsyncSession = Depends(get_db),
):
    articles = await article_service.search_articles_via_hashtag(db, search_value, page_request)
    return ArticlePageResponse(
        articles=articles.map(ArticleResponse.from_dto, ArticleResponse),
        pagination_bar_numbers=pagination_service.get_pagination_bar_numbers(
            page_request.page, articles.pages
        ),
        hashtags=await article_service.get_hashtags(db),
    )


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(article_id: int, db: AsyncSession = Depends(get_db)):
    try:
        article = await article_service.get_article_with_comments(db, article_id)
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return ArticleDetailResponse(
        article=ArticleWithCommentsResponse.from_dto(article),
        total_count=await article_service.get_article_count(db),
    )


@router.get("/{article_id}/comments", response_model=list[ArticleCommentResponse])
async def list_article_comments(article_id: int, db: AsyncSession = Depends(get_db)):
    comments = await article_comment_service.search_article_comments(db, article_id)
    return [ArticleCommentResponse.from_dto(c) for c in comments]


@router.post("", status_code=201, response_model=WriteResponse)
async def create_article(
    data: ArticleRequest,
    user: UserAccountDto = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await article_service.save_article(db, data.to_dto(user))
    return WriteResponse(id=result.entity_id)


@router.put("/{article_id}", status_code=204)
async def update_article(
    article_id: int,
    data: ArticleRequest,
    user: UserAccountDto = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await article_service.update_article(db, article_id, data.to_dto(user, article_id))


@router.delete("/{article_id}", status_code=204)
async def delete_article(
    article_id: int,
    user: UserAccountDto = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await article_service.delete_article(db, article_id, user.user_id)
