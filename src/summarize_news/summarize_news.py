"""Summarize every article in the stored batch."""

import logging

from common.fallback import Attempt, execute_with_fallback
from common.models import NO_DESCRIPTION_SUMMARY, NO_SUMMARY, Article
from common.state_store import BatchStore
from providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


async def summarize_article(
    registry: ProviderRegistry,
    article: Article,
    timeout: float | None = None,
) -> str:
    """Summarize one article, degrading to a sentinel instead of raising.

    Articles without a real description are not sent to any provider.
    """
    if not article.has_description:
        logger.warning("Skipping article %r - no description found", article.title)
        return NO_DESCRIPTION_SUMMARY

    description = article.description
    primary = registry.summarizer_primary
    fallback = registry.summarizer_fallback
    result = await execute_with_fallback(
        Attempt(primary.name, lambda: primary.summarize(description)),
        Attempt(fallback.name, lambda: fallback.summarize(description)),
        sentinel=NO_SUMMARY,
        timeout=timeout,
        label=f"summarize {article.title!r}",
    )

    summary = (result.value or "").strip()
    if not summary:
        logger.warning("No valid summary generated for %r", article.title)
        return NO_SUMMARY
    return summary


async def summarize_news(
    registry: ProviderRegistry,
    store: BatchStore,
    timeout: float | None = None,
) -> list[str]:
    """
    Summarize the stored batch article by article and persist the summaries.

    Articles are processed in batch order, one provider call at a time. The
    batch is written back once, after every article has a summary.

    Returns:
        The summaries in batch order
    """
    state = store.read()
    articles = state.articles

    for article in articles:
        logger.info("Processing article: %s", article.title)
        article.summary = await summarize_article(registry, article, timeout=timeout)
        # Audio rendered from a previous summary is stale.
        article.audio_url = None

    store.replace(articles, previous=state)

    degraded = sum(1 for article in articles if not article.has_real_summary)
    logger.info("%d articles summarized (%d without a summary)", len(articles), degraded)
    return [article.summary for article in articles]
