"""Shared fixtures: in-memory providers and a batch store under tmp_path."""

from __future__ import annotations

import asyncio

import pytest

from common.config import ProvidersConfig, Settings, StorageConfig
from common.models import Article
from common.state_store import BatchStore
from providers.registry import ProviderRegistry


class FakeNewsSource:
    def __init__(self, name: str, articles: list[Article] | None = None, error: Exception | None = None):
        self.name = name
        self.articles = articles or []
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def search(self, keyword: str, category: str = "") -> list[Article]:
        self.calls.append((keyword, category))
        if self.error:
            raise self.error
        return list(self.articles)


class FakeSummarizer:
    def __init__(self, name: str, summary: str = "A short summary.", error: Exception | None = None):
        self.name = name
        self.summary = summary
        self.error = error
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def summarize(self, text: str) -> str:
        self.calls.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if self.error:
                raise self.error
            return self.summary
        finally:
            self.in_flight -= 1


class FakeSpeech:
    def __init__(self, name: str, audio: bytes = b"ID3-fake-mp3", error: Exception | None = None):
        self.name = name
        self.audio = audio
        self.error = error
        self.calls: list[str] = []

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.audio


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry(
        news_primary=FakeNewsSource("newsapi"),
        news_fallback=FakeNewsSource("guardian"),
        summarizer_primary=FakeSummarizer("openai", summary="Primary summary."),
        summarizer_fallback=FakeSummarizer("gemini", summary="Fallback summary."),
        speech_primary=FakeSpeech("openai-tts", audio=b"primary-audio"),
        speech_fallback=FakeSpeech("google-tts", audio=b"fallback-audio"),
    )


@pytest.fixture
def store(tmp_path) -> BatchStore:
    return BatchStore(tmp_path / "data" / "news.json")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        providers=ProvidersConfig(timeout_seconds=5),
        storage=StorageConfig(
            state_path=str(tmp_path / "data" / "news.json"),
            narration_path=str(tmp_path / "data" / "summaries.json"),
            audio_dir=str(tmp_path / "audio"),
            audio_url_prefix="/audio",
        ),
    )
