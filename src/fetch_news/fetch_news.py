"""Fetch a fresh batch of articles and persist it as the current batch."""

import logging

from common.fallback import Attempt, execute_or_raise
from common.models import Article
from common.state_store import BatchStore
from providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


async def fetch_news(
    registry: ProviderRegistry,
    store: BatchStore,
    keyword: str = "",
    category: str = "",
    timeout: float | None = None,
) -> list[Article]:
    """
    Fetch articles for a keyword and category, replacing the stored batch.

    An exception or an empty list from the primary source triggers the
    fallback source. If the fallback fails too, BatchFailure propagates and
    the stored batch is left as it was.

    Args:
        registry: Providers to search with
        store: Batch store to overwrite on success
        keyword: Search keyword (may be empty)
        category: Headline category for the primary source (may be empty)
        timeout: Per-provider-call timeout in seconds

    Returns:
        The freshly stored articles
    """
    logger.info("Fetching news for keyword=%r category=%r", keyword, category)

    primary = registry.news_primary
    fallback = registry.news_fallback
    result = await execute_or_raise(
        Attempt(primary.name, lambda: primary.search(keyword, category)),
        Attempt(fallback.name, lambda: fallback.search(keyword, category)),
        timeout=timeout,
        accept=bool,
        label="fetch news",
    )

    # Rebuild so no summary or audio from a previous batch leaks through.
    articles = [
        Article(title=article.title, url=article.url, description=article.description)
        for article in result.value
    ]
    store.replace(articles)

    logger.info("%d articles fetched from %s", len(articles), result.provider)
    return articles
