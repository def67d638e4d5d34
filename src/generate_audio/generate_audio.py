"""Convert stored summaries to speech.

Two strategies share one interface:

- ``per_article``: one audio file per article with a real summary, linked
  from the article's ``audioUrl``.
- ``combined``: one narration of every real summary joined with pauses,
  reported as a single path and not stored on the articles.

Articles whose summary is a sentinel never reach a speech provider.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from common.config import StorageConfig
from common.fallback import Attempt, FallbackResult, execute_with_fallback
from common.hashing import generate_audio_filename
from common.local_io import write_bytes_atomic
from common.models import Article, build_narration
from common.state_store import BatchStore, NarrationStore
from providers.registry import ProviderRegistry
from summarize_news.summarize_news import summarize_article

logger = logging.getLogger(__name__)

COMBINED_AUDIO_FILENAME = "combined_summaries.mp3"


@dataclass
class ArticleAudio:
    title: str
    audio_url: str


@dataclass
class SynthesisResult:
    strategy: str
    audio_url: Optional[str] = None
    article_audio: list[ArticleAudio] = field(default_factory=list)
    skipped: int = 0
    failed: int = 0


class SynthesisStrategy(Protocol):
    name: str

    async def synthesize(
        self,
        registry: ProviderRegistry,
        articles: list[Article],
        timeout: float | None = None,
    ) -> SynthesisResult: ...


async def synthesize_text(
    registry: ProviderRegistry,
    text: str,
    timeout: float | None = None,
    label: str = "synthesize",
) -> FallbackResult[Optional[bytes]]:
    """Synthesize text with the primary speech provider, falling back once."""
    primary = registry.speech_primary
    fallback = registry.speech_fallback
    return await execute_with_fallback(
        Attempt(primary.name, lambda: primary.synthesize(text)),
        Attempt(fallback.name, lambda: fallback.synthesize(text)),
        sentinel=None,
        timeout=timeout,
        accept=bool,
        label=label,
    )


class PerArticleAudio:
    """One audio file per article, named from the article title."""

    name = "per_article"

    def __init__(self, audio_dir: Path | str, audio_url_prefix: str = "/audio"):
        self.audio_dir = Path(audio_dir)
        self.audio_url_prefix = audio_url_prefix.rstrip("/")

    async def synthesize(
        self,
        registry: ProviderRegistry,
        articles: list[Article],
        timeout: float | None = None,
    ) -> SynthesisResult:
        result = SynthesisResult(strategy=self.name)

        for article in articles:
            if not article.has_real_summary:
                logger.warning("Skipping article %r - no valid summary found", article.title)
                article.audio_url = None
                result.skipped += 1
                continue

            audio = await synthesize_text(
                registry,
                article.summary,
                timeout=timeout,
                label=f"synthesize {article.title!r}",
            )
            if audio.degraded:
                article.audio_url = None
                result.failed += 1
                continue

            filename = generate_audio_filename(article.title, article.url)
            write_bytes_atomic(self.audio_dir / filename, audio.value)
            article.audio_url = f"{self.audio_url_prefix}/{filename}"
            result.article_audio.append(ArticleAudio(title=article.title, audio_url=article.audio_url))

        return result


class CombinedNarrationAudio:
    """A single narration of every real summary, separated by pauses."""

    name = "combined"

    def __init__(
        self,
        audio_dir: Path | str,
        narration_store: NarrationStore,
        audio_url_prefix: str = "/audio",
    ):
        self.audio_dir = Path(audio_dir)
        self.narration_store = narration_store
        self.audio_url_prefix = audio_url_prefix.rstrip("/")

    async def synthesize(
        self,
        registry: ProviderRegistry,
        articles: list[Article],
        timeout: float | None = None,
    ) -> SynthesisResult:
        result = SynthesisResult(strategy=self.name)

        for article in articles:
            if not article.summary:
                article.summary = await summarize_article(registry, article, timeout=timeout)
                article.audio_url = None

        narration = build_narration(articles)
        result.skipped = sum(1 for article in articles if not article.has_real_summary)
        self.narration_store.write(narration)

        if not narration:
            logger.warning("No summaries to narrate; no audio generated")
            return result

        audio = await synthesize_text(registry, narration, timeout=timeout, label="synthesize narration")
        if audio.degraded:
            result.failed = 1
            return result

        write_bytes_atomic(self.audio_dir / COMBINED_AUDIO_FILENAME, audio.value)
        result.audio_url = f"{self.audio_url_prefix}/{COMBINED_AUDIO_FILENAME}"
        return result


def build_strategy(name: str, storage: StorageConfig) -> SynthesisStrategy:
    """Create the synthesis strategy selected in config."""
    if name == PerArticleAudio.name:
        return PerArticleAudio(storage.audio_dir, storage.audio_url_prefix)
    if name == CombinedNarrationAudio.name:
        return CombinedNarrationAudio(
            storage.audio_dir,
            NarrationStore(storage.narration_path),
            storage.audio_url_prefix,
        )
    raise ValueError(f"Unknown synthesis strategy: {name}")


async def generate_audio(
    registry: ProviderRegistry,
    store: BatchStore,
    strategy: SynthesisStrategy,
    timeout: float | None = None,
) -> SynthesisResult:
    """
    Run a synthesis strategy over the stored batch and persist the batch.

    Speech failures for one article (or for the narration) degrade to
    "no audio" rather than failing the operation.
    """
    state = store.read()
    articles = state.articles

    logger.info("Generating audio for %d articles (strategy=%s)", len(articles), strategy.name)
    result = await strategy.synthesize(registry, articles, timeout=timeout)
    store.replace(articles, previous=state)

    logger.info(
        "Audio generated: %d files, %d skipped, %d failed",
        len(result.article_audio) + (1 if result.audio_url else 0),
        result.skipped,
        result.failed,
    )
    return result
