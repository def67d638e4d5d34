"""Stage wiring shared by the API and the CLI."""

from __future__ import annotations

import logging

from common.config import Settings
from common.models import Article
from common.state_store import BatchStore
from fetch_news.fetch_news import fetch_news
from generate_audio.generate_audio import SynthesisResult, SynthesisStrategy, build_strategy, generate_audio
from providers.registry import ProviderRegistry
from summarize_news.summarize_news import summarize_news

logger = logging.getLogger(__name__)


class NewsAudioPipeline:
    """Runs each stage against one batch store, one stage at a time.

    Every stage holds the store lock for its whole read-modify-replace
    cycle, so concurrent triggers queue instead of racing on the batch.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        settings: Settings,
        store: BatchStore | None = None,
        strategy: SynthesisStrategy | None = None,
    ):
        self.registry = registry
        self.settings = settings
        self.store = store or BatchStore(settings.storage.state_path)
        self.strategy = strategy or build_strategy(settings.speech.strategy, settings.storage)
        self.timeout = settings.providers.timeout_seconds

    async def fetch(self, keyword: str = "", category: str = "") -> list[Article]:
        async with self.store.lock:
            return await fetch_news(self.registry, self.store, keyword, category, timeout=self.timeout)

    async def summarize(self) -> list[str]:
        async with self.store.lock:
            return await summarize_news(self.registry, self.store, timeout=self.timeout)

    async def synthesize(self) -> SynthesisResult:
        async with self.store.lock:
            return await generate_audio(self.registry, self.store, self.strategy, timeout=self.timeout)
