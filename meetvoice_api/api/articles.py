# meetvoice_api/api/articles.py
from fastapi import APIRouter, Depends, Query
from typing import Optional
from meetvoice_api.db.mongo import get_collection
from meetvoice_api.services import articles as svc
from meetvoice_api.models.schemas import Article, ArticleListResponse, ErrorResponse, ListQuery, MAX_PAGE

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("", response_model=ArticleListResponse,
            responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
            summary="Paginated article list (summary fields)")
async def api_list_articles(
    page: Optional[int] = Query(None, le=MAX_PAGE, description="Page number, values below 1 become 1"),
    limit: Optional[int] = Query(None, description="Page size, values below 1 become 10, capped at 50"),
    categorie: Optional[str] = Query(None, description="Exact category match"),
    theme: Optional[str] = Query(None, description="Case-insensitive substring of the theme"),
    collection=Depends(get_collection),
):
    """
    Most recent first. `total` counts every article matching the filters,
    independent of the requested page.
    """
    query = ListQuery(page=page, limit=limit, categorie=categorie, theme=theme)
    return await svc.list_articles(collection, query)


@router.get("/{slug}", response_model=Article,
            responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
            summary="Full article by slug")
async def api_get_article(slug: str, collection=Depends(get_collection)):
    return await svc.get_article_by_slug(collection, slug)
