"""Provider registry: one primary and one fallback adapter per capability.

Built once at process start (API lifespan or CLI main) and passed into the
stages. The adapters wrap stateless remote clients, so there is no teardown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from common.config import Settings
from common.models import Article
from providers.news import GuardianSource, NewsApiSource
from providers.speech import GoogleCloudSpeech, OpenAISpeech
from providers.summarizers import GeminiSummarizer, OpenAISummarizer

logger = logging.getLogger(__name__)


class NewsSource(Protocol):
    name: str

    async def search(self, keyword: str, category: str = "") -> list[Article]: ...


class Summarizer(Protocol):
    name: str

    async def summarize(self, text: str) -> str: ...


class SpeechSynthesizer(Protocol):
    name: str

    async def synthesize(self, text: str) -> bytes: ...


@dataclass
class ProviderRegistry:
    news_primary: NewsSource
    news_fallback: NewsSource
    summarizer_primary: Summarizer
    summarizer_fallback: Summarizer
    speech_primary: SpeechSynthesizer
    speech_fallback: SpeechSynthesizer

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRegistry":
        creds = settings.credentials
        for env_name, value in (
            ("NEWS_API_KEY", creds.news_api_key),
            ("GUARDIAN_API_KEY", creds.guardian_api_key),
            ("OPENAI_API_KEY", creds.openai_api_key),
            ("GEMINI_API_KEY", creds.gemini_api_key),
        ):
            if not value:
                logger.warning("%s is not set; that provider will fail and fall back", env_name)

        registry = cls(
            news_primary=NewsApiSource(
                api_key=creds.news_api_key,
                country=settings.news.country,
                page_size=settings.news.page_size,
                base_url=settings.news.newsapi_url,
            ),
            news_fallback=GuardianSource(
                api_key=creds.guardian_api_key,
                page_size=settings.news.page_size,
                base_url=settings.news.guardian_url,
            ),
            summarizer_primary=OpenAISummarizer(
                api_key=creds.openai_api_key,
                model=settings.summarize.openai_model,
                temperature=settings.summarize.temperature,
                instruction=settings.summarize.instruction,
            ),
            summarizer_fallback=GeminiSummarizer(
                api_key=creds.gemini_api_key,
                model=settings.summarize.gemini_model,
                instruction=settings.summarize.instruction,
            ),
            speech_primary=OpenAISpeech(
                api_key=creds.openai_api_key,
                model=settings.speech.openai_model,
                voice=settings.speech.openai_voice,
            ),
            speech_fallback=GoogleCloudSpeech(
                language_code=settings.speech.language_code,
                ssml_gender=settings.speech.ssml_gender,
                audio_encoding=settings.speech.audio_encoding,
            ),
        )
        logger.info(
            "Providers ready: news=%s/%s summarize=%s/%s speech=%s/%s",
            registry.news_primary.name,
            registry.news_fallback.name,
            registry.summarizer_primary.name,
            registry.summarizer_fallback.name,
            registry.speech_primary.name,
            registry.speech_fallback.name,
        )
        return registry
