import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from .schemas import Article, NewsPage
from .service import NewsService

router = APIRouter(prefix="/news", tags=["News"])


def get_news_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.news_client


def get_news_service(request: Request, client: httpx.AsyncClient = Depends(get_news_client)) -> NewsService:
    return NewsService(client, request.app.state.settings)


@router.get("", response_model=NewsPage)
async def list_news(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    service: NewsService = Depends(get_news_service),
):
    return await service.list_news(page, limit)


@router.get("/{article_id}", response_model=Article)
async def get_article(article_id: str, service: NewsService = Depends(get_news_service)):
    article = await service.get_article(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return article
