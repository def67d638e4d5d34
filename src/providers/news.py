"""News search adapters.

NewsAPI and The Guardian return differently shaped payloads; both are mapped
to fresh Article records here so the Fetch stage never sees provider fields.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from common.models import NO_DESCRIPTION_FETCHED, Article

logger = logging.getLogger(__name__)


def _build_article(title: Any, description: Any, url: Any) -> Article | None:
    if not title or not url:
        return None
    return Article(title=title, url=url, description=description or NO_DESCRIPTION_FETCHED)


def map_newsapi_articles(data: dict[str, Any]) -> list[Article]:
    """Map a NewsAPI top-headlines response to Articles."""
    articles = []
    for raw in data.get("articles") or []:
        article = _build_article(raw.get("title"), raw.get("description"), raw.get("url"))
        if article is None:
            logger.warning("Skipping NewsAPI entry without title or url")
            continue
        articles.append(article)
    return articles


def map_guardian_articles(data: dict[str, Any]) -> list[Article]:
    """Map a Guardian content search response to Articles."""
    articles = []
    for raw in (data.get("response") or {}).get("results") or []:
        fields = raw.get("fields") or {}
        article = _build_article(
            fields.get("headline") or raw.get("webTitle"),
            fields.get("trailText"),
            fields.get("shortUrl") or raw.get("webUrl"),
        )
        if article is None:
            logger.warning("Skipping Guardian entry without headline or url")
            continue
        articles.append(article)
    return articles


class NewsApiSource:
    """Top headlines from newsapi.org, filtered by keyword and category."""

    name = "newsapi"

    def __init__(
        self,
        api_key: str | None,
        country: str = "us",
        page_size: int = 20,
        base_url: str = "https://newsapi.org/v2/top-headlines",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.country = country
        self.page_size = page_size
        self.base_url = base_url
        self._transport = transport

    async def search(self, keyword: str, category: str = "") -> list[Article]:
        if not self.api_key:
            raise ValueError("NEWS_API_KEY is not configured")

        params: dict[str, Any] = {
            "country": self.country,
            "pageSize": self.page_size,
            "apiKey": self.api_key,
        }
        if keyword:
            params["q"] = keyword
        if category:
            params["category"] = category

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()

        if data.get("status") == "error":
            raise RuntimeError(f"NewsAPI error: {data.get('message')}")

        articles = map_newsapi_articles(data)
        logger.info("NewsAPI returned %d articles for keyword=%r category=%r", len(articles), keyword, category)
        return articles


class GuardianSource:
    """Full-text search against the Guardian content API."""

    name = "guardian"

    def __init__(
        self,
        api_key: str | None,
        page_size: int = 20,
        base_url: str = "https://content.guardianapis.com/search",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.page_size = page_size
        self.base_url = base_url
        self._transport = transport

    async def search(self, keyword: str, category: str = "") -> list[Article]:
        # The Guardian has no category filter matching NewsAPI's; keyword only.
        if not self.api_key:
            raise ValueError("GUARDIAN_API_KEY is not configured")

        params = {
            "q": keyword,
            "page-size": self.page_size,
            "show-fields": "headline,trailText,shortUrl",
            "api-key": self.api_key,
        }

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()

        articles = map_guardian_articles(data)
        logger.info("Guardian returned %d articles for keyword=%r", len(articles), keyword)
        return articles
