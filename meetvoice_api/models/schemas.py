# meetvoice_api/models/schemas.py
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer
from typing import Optional, List, Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
# Largest page whose skip still fits in a signed 64-bit BSON int
MAX_PAGE = (2**63 - 1) // MAX_LIMIT + 1


# --- Short article form ---
# Used for list responses; mirrors the projection applied in the store query
class ArticleSummary(BaseModel):
    slug: str
    titre: str
    petit_description: Optional[str] = None
    theme: Optional[str] = None
    categorie: Optional[str] = None
    photo: Optional[str] = None
    date_publication: Optional[str] = None


# --- Full article ---
# Used for lookup by slug
class Article(ArticleSummary):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    contenu: Optional[str] = None
    photo_description: Optional[str] = None
    photo_highlight: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[List[str]] = None

    @field_validator("id", mode="before")
    def stringify_object_id(cls, v: Any):
        # ObjectId -> hex string
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @model_serializer(mode="wrap")
    def omit_missing_id(self, handler):
        data = handler(self)
        for key in ("_id", "id"):
            if key in data and data[key] is None:
                del data[key]
        return data


class ListQuery(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    categorie: Optional[str] = None
    theme: Optional[str] = None

    @field_validator("page", mode="before")
    def clamp_page(cls, v):
        if v is None:
            return DEFAULT_PAGE
        return max(int(v), 1)

    @field_validator("limit", mode="before")
    def clamp_limit(cls, v):
        if v is None or int(v) < 1:
            return DEFAULT_LIMIT
        return min(int(v), MAX_LIMIT)

    @field_validator("theme", mode="before")
    def blank_theme_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class ArticleListResponse(BaseModel):
    articles: List[ArticleSummary]
    total: int
    page: int
    limit: int


class ErrorResponse(BaseModel):
    error: str
