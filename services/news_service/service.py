from typing import Any, Optional

import httpx
import structlog

from shared.observability.metrics import shop_news_fallback_total

from .fallback import FALLBACK_AUTHOR, fallback_article, fallback_page, generic_article
from .schemas import Article, NewsPage, Pagination

logger = structlog.get_logger(__name__)

DETAIL_PAGE_SIZE = 20


def _reshape(raw: dict[str, Any], article_id: str) -> Article:
    return Article(
        id=article_id,
        title=raw.get("title"),
        description=raw.get("description"),
        url=raw.get("url"),
        urlToImage=raw.get("urlToImage"),
        publishedAt=raw.get("publishedAt"),
        source=(raw.get("source") or {}).get("name"),
        content=raw.get("content"),
        author=raw.get("author") or FALLBACK_AUTHOR,
    )


class NewsService:
    """Proxies the NewsAPI ``everything`` endpoint and falls back to static articles."""

    def __init__(self, client: httpx.AsyncClient, settings):
        self.client = client
        self.settings = settings

    async def _fetch(self, page: int, page_size: int) -> dict[str, Any]:
        resp = await self.client.get(
            self.settings.news_api_url,
            params={
                "q": self.settings.news_query,
                "language": self.settings.news_language,
                "sortBy": "publishedAt",
                "page": page,
                "pageSize": page_size,
                "apiKey": self.settings.news_api_key,
            },
        )
        resp.raise_for_status()
        return resp.json()

    async def list_news(self, page: int, limit: int) -> NewsPage:
        try:
            data = await self._fetch(page, limit)
            articles = [
                _reshape(raw, f"news_{page}_{index}")
                for index, raw in enumerate(data["articles"])
            ]
            return NewsPage(
                articles=articles,
                pagination=Pagination(page=page, limit=limit, total=data.get("totalResults", len(articles))),
            )
        except Exception as e:
            logger.warning("news_feed_failed", error=str(e), page=page)
            shop_news_fallback_total.inc()
            return fallback_page()

    async def get_article(self, article_id: str) -> Optional[Article]:
        """Resolve ``news_<page>_<index>`` or ``fallback_<n>``; None when the id matches neither."""
        if article_id.startswith("fallback_"):
            n = article_id.removeprefix("fallback_")
            if not n.isdigit():
                return None
            article = fallback_article(int(n), size="w=800&h=600")
            article.content = (
                f"Detailed coverage of this season's collections, part {n}. "
                "We review new fabrics, tailoring techniques and styling tips, "
                "from breathable summer linens to structured winter outerwear."
            )
            return article

        if not article_id.startswith("news_"):
            return None
        try:
            _, page, index = article_id.split("_")
            page, index = int(page), int(index)
        except ValueError:
            return None

        try:
            data = await self._fetch(page, DETAIL_PAGE_SIZE)
            raws = data["articles"]
        except Exception as e:
            logger.warning("news_detail_failed", error=str(e), article_id=article_id)
            shop_news_fallback_total.inc()
            return generic_article(article_id)

        if not 0 <= index < len(raws):
            return None
        article = _reshape(raws[index], article_id)
        if not article.content:
            article.content = f"{article.description}\n\nRead the full article at: {article.url}"
        return article
