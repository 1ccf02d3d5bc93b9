"""Static articles served whenever the news feed cannot be reached."""
from datetime import datetime, timezone

from .schemas import Article, NewsPage, Pagination

FALLBACK_SOURCE = "Fashion Daily"
FALLBACK_AUTHOR = "Fashion Editor"
FALLBACK_COUNT = 10
FALLBACK_TOTAL = 50
_IMAGE = "https://images.unsplash.com/photo-1445205170230-053b83016050"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def fallback_article(n: int, size: str = "w=400&h=300") -> Article:
    return Article(
        id=f"fallback_{n}",
        title=f"Fashion news {n}",
        description=f"The latest trends in clothing and materials, part {n}",
        url="#",
        urlToImage=f"{_IMAGE}?{size}&fit=crop&auto=format&q=80&ixid={n}",
        publishedAt=_now(),
        source=FALLBACK_SOURCE,
        content=(
            f"Detailed coverage of this season's collections, part {n}. "
            "A look at new fabrics, cuts and how to build an everyday wardrobe."
        ),
        author=FALLBACK_AUTHOR,
    )


def fallback_page() -> NewsPage:
    return NewsPage(
        articles=[fallback_article(i) for i in range(1, FALLBACK_COUNT + 1)],
        pagination=Pagination(page=1, limit=FALLBACK_COUNT, total=FALLBACK_TOTAL),
    )


def generic_article(article_id: str) -> Article:
    """Placeholder detail used when the feed fails while fetching a single article."""
    return Article(
        id=article_id,
        title="Fashion news",
        description="The latest from the fashion industry",
        url="#",
        urlToImage=f"{_IMAGE}?w=800&h=600&fit=crop",
        publishedAt=_now(),
        source=FALLBACK_SOURCE,
        content="The news feed is temporarily unavailable, so we are showing default content about new collections.",
        author=FALLBACK_AUTHOR,
    )
