from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from meetvoice_api.core.errors import ArticleNotFoundError, StoreError
from meetvoice_api.models.schemas import Article, ArticleListResponse, ArticleSummary, ListQuery


logger = logging.getLogger("meetvoice_api.articles")

SUMMARY_PROJECTION: Dict[str, int] = {
    "slug": 1,
    "titre": 1,
    "petit_description": 1,
    "theme": 1,
    "categorie": 1,
    "photo": 1,
    "date_publication": 1,
}

# Null/missing dates compare lowest in BSON order, so they come last under DESCENDING
SORT_ORDER = [("date_publication", DESCENDING), ("_id", DESCENDING)]


def build_filter(query: ListQuery) -> Dict[str, Any]:
    filter_doc: Dict[str, Any] = {}
    if query.categorie is not None:
        filter_doc["categorie"] = query.categorie
    if query.theme is not None:
        filter_doc["theme"] = {"$regex": re.escape(query.theme), "$options": "i"}
    return filter_doc


async def list_articles(collection, query: ListQuery) -> ArticleListResponse:
    filter_doc = build_filter(query)
    try:
        total = await collection.count_documents(filter_doc)
        cursor = (
            collection.find(filter_doc, SUMMARY_PROJECTION)
            .sort(SORT_ORDER)
            .skip(query.skip)
            .limit(query.limit)
        )
        docs: List[dict] = await cursor.to_list()
        articles = [ArticleSummary.model_validate(d) for d in docs]
    except PyMongoError as exc:
        raise StoreError(str(exc)) from exc
    except ValidationError as exc:
        raise StoreError(str(exc)) from exc

    logger.debug(
        "Listed articles",
        extra={
            "event": "articles_listed",
            "filter": filter_doc,
            "page": query.page,
            "limit": query.limit,
            "returned": len(articles),
            "total": total,
        },
    )
    return ArticleListResponse(articles=articles, total=total, page=query.page, limit=query.limit)


async def get_article_by_slug(collection, slug: str) -> Article:
    try:
        doc = await collection.find_one({"slug": slug})
        if doc is None:
            raise ArticleNotFoundError(slug)
        return Article.model_validate(doc)
    except PyMongoError as exc:
        raise StoreError(str(exc)) from exc
    except ValidationError as exc:
        raise StoreError(str(exc)) from exc
