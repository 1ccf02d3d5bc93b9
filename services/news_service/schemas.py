from typing import List, Optional

from pydantic import BaseModel


class Article(BaseModel):
    id: str
    title: Optional[str]
    description: Optional[str]
    url: Optional[str]
    urlToImage: Optional[str]
    publishedAt: Optional[str]
    source: Optional[str]
    content: Optional[str]
    author: Optional[str]


class Pagination(BaseModel):
    page: int
    limit: int
    total: int


class NewsPage(BaseModel):
    articles: List[Article]
    pagination: Pagination
