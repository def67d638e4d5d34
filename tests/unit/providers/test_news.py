"""Tests for providers.news module."""

import httpx
import pytest

from common.models import NO_DESCRIPTION_FETCHED
from providers.news import GuardianSource, NewsApiSource, map_guardian_articles, map_newsapi_articles

NEWSAPI_PAYLOAD = {
    "status": "ok",
    "totalResults": 2,
    "articles": [
        {"title": "Rates hold", "description": "The central bank held rates.", "url": "https://example.com/1"},
        {"title": "Jobs report", "description": None, "url": "https://example.com/2"},
        {"title": None, "description": "orphan", "url": "https://example.com/3"},
    ],
}

GUARDIAN_PAYLOAD = {
    "response": {
        "status": "ok",
        "results": [
            {
                "webTitle": "Web title",
                "webUrl": "https://theguardian.com/long",
                "fields": {"headline": "Headline", "trailText": "Trail text", "shortUrl": "https://gu.com/p/1"},
            },
            {"webTitle": "No fields", "webUrl": "https://theguardian.com/2"},
        ],
    }
}


class TestMapNewsapiArticles:
    def test_maps_fields_and_defaults_description(self) -> None:
        articles = map_newsapi_articles(NEWSAPI_PAYLOAD)
        assert [a.title for a in articles] == ["Rates hold", "Jobs report"]
        assert articles[1].description == NO_DESCRIPTION_FETCHED

    def test_missing_articles_key(self) -> None:
        assert map_newsapi_articles({"status": "ok"}) == []


class TestMapGuardianArticles:
    def test_maps_nested_fields(self) -> None:
        articles = map_guardian_articles(GUARDIAN_PAYLOAD)
        assert articles[0].title == "Headline"
        assert articles[0].description == "Trail text"
        assert articles[0].url == "https://gu.com/p/1"

    def test_falls_back_to_web_fields(self) -> None:
        articles = map_guardian_articles(GUARDIAN_PAYLOAD)
        assert articles[1].title == "No fields"
        assert articles[1].url == "https://theguardian.com/2"
        assert articles[1].description == NO_DESCRIPTION_FETCHED


class TestNewsApiSource:
    @pytest.mark.asyncio
    async def test_sends_keyword_category_and_country(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json=NEWSAPI_PAYLOAD)

        source = NewsApiSource(api_key="key", country="us", transport=httpx.MockTransport(handler))
        articles = await source.search("economy", "business")

        assert len(articles) == 2
        assert seen["q"] == "economy"
        assert seen["category"] == "business"
        assert seen["country"] == "us"
        assert seen["apiKey"] == "key"

    @pytest.mark.asyncio
    async def test_omits_empty_filters(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json={"status": "ok", "articles": []})

        source = NewsApiSource(api_key="key", transport=httpx.MockTransport(handler))
        assert await source.search("", "") == []
        assert "q" not in seen
        assert "category" not in seen

    @pytest.mark.asyncio
    async def test_http_error_raises(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(401, json={"status": "error", "message": "bad key"})
        )
        source = NewsApiSource(api_key="key", transport=transport)
        with pytest.raises(httpx.HTTPStatusError):
            await source.search("economy")

    @pytest.mark.asyncio
    async def test_missing_key_raises(self) -> None:
        with pytest.raises(ValueError):
            await NewsApiSource(api_key=None).search("economy")


class TestGuardianSource:
    @pytest.mark.asyncio
    async def test_requests_fields_and_maps(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json=GUARDIAN_PAYLOAD)

        source = GuardianSource(api_key="key", transport=httpx.MockTransport(handler))
        articles = await source.search("economy", "business")

        assert seen["q"] == "economy"
        assert seen["show-fields"] == "headline,trailText,shortUrl"
        assert seen["api-key"] == "key"
        assert len(articles) == 2

    @pytest.mark.asyncio
    async def test_missing_key_raises(self) -> None:
        with pytest.raises(ValueError):
            await GuardianSource(api_key="").search("economy")
