import httpx
import pytest

from main import app
from services.news_service.router import get_news_client

RAW_ARTICLES = [
    {
        "title": "Linen is back",
        "description": "Summer fabrics",
        "url": "https://news.test/linen",
        "urlToImage": "https://news.test/linen.jpg",
        "publishedAt": "2026-10-18T10:00:00Z",
        "source": {"id": None, "name": "Vogue VN"},
        "content": "Full linen story",
        "author": None,
    },
    {
        "title": "Denim forecast",
        "description": "Jeans for autumn",
        "url": "https://news.test/denim",
        "urlToImage": None,
        "publishedAt": "2026-10-17T10:00:00Z",
        "source": {"id": None, "name": "Elle"},
        "content": None,
        "author": "Lan",
    },
]


@pytest.fixture
def feed(client):
    calls = []
    state = {"fail": False}

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(dict(request.url.params))
        if state["fail"]:
            return httpx.Response(503, json={"status": "error"})
        return httpx.Response(200, json={"status": "ok", "totalResults": 42, "articles": RAW_ARTICLES})

    mock_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_news_client] = lambda: mock_client
    state["calls"] = calls
    return state


def test_news_is_reshaped(client, feed):
    response = client.get("/api/news", params={"page": 2, "limit": 5})
    assert response.status_code == 200
    body = response.json()
    assert body["pagination"] == {"page": 2, "limit": 5, "total": 42}
    first = body["articles"][0]
    assert first["id"] == "news_2_0"
    assert first["source"] == "Vogue VN"
    assert first["author"] == "Fashion Editor"
    assert body["articles"][1]["author"] == "Lan"

    params = feed["calls"][0]
    assert params["page"] == "2"
    assert params["pageSize"] == "5"
    assert params["sortBy"] == "publishedAt"


def test_news_falls_back_when_feed_fails(client, feed):
    feed["fail"] = True
    body = client.get("/api/news").json()
    assert [a["id"] for a in body["articles"]] == [f"fallback_{i}" for i in range(1, 11)]
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 50}


def test_news_detail_from_feed(client, feed):
    response = client.get("/api/news/news_1_1")
    assert response.status_code == 200
    article = response.json()
    assert article["title"] == "Denim forecast"
    assert article["content"] == "Jeans for autumn\n\nRead the full article at: https://news.test/denim"
    assert feed["calls"][0]["pageSize"] == "20"


def test_news_detail_for_fallback_article(client, feed):
    article = client.get("/api/news/fallback_3").json()
    assert article["id"] == "fallback_3"
    assert article["url"] == "#"
    assert feed["calls"] == []


def test_news_detail_when_feed_fails(client, feed):
    feed["fail"] = True
    article = client.get("/api/news/news_1_0").json()
    assert article["id"] == "news_1_0"
    assert article["title"] == "Fashion news"


@pytest.mark.parametrize("article_id", ["unknown", "news_1_9", "news_x_y", "fallback_x"])
def test_news_detail_not_found(client, feed, article_id):
    response = client.get(f"/api/news/{article_id}")
    assert response.status_code == 404
    assert response.json() == {"message": "Article not found"}
