"""Data models shared by the fetch, summarize and synthesize stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

# Placeholder written by Fetch when a provider returns no description.
NO_DESCRIPTION_FETCHED = "No description available"
# Summary used when an article has nothing to summarize.
NO_DESCRIPTION_SUMMARY = "No description available."
# Summary used when both summarizers failed or returned nothing.
NO_SUMMARY = "No summary available."

SENTINEL_DESCRIPTIONS = frozenset({NO_DESCRIPTION_FETCHED, NO_DESCRIPTION_SUMMARY})
SENTINEL_SUMMARIES = frozenset({NO_SUMMARY, NO_DESCRIPTION_SUMMARY})

PAUSE_TOKEN = ". ... Pause ... "

STATE_SCHEMA_VERSION = 1


@dataclass
class Article:
    """A single news item moving through the pipeline."""
    title: str
    url: str
    description: str = NO_DESCRIPTION_FETCHED
    summary: Optional[str] = None
    audio_url: Optional[str] = None

    @property
    def has_description(self) -> bool:
        text = (self.description or "").strip()
        return bool(text) and text not in SENTINEL_DESCRIPTIONS

    @property
    def has_real_summary(self) -> bool:
        text = (self.summary or "").strip()
        return bool(text) and text not in SENTINEL_SUMMARIES

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted shape, omitting fields a stage has not set."""
        data: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "url": self.url,
        }
        if self.summary is not None:
            data["summary"] = self.summary
        if self.audio_url is not None:
            data["audioUrl"] = self.audio_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Article":
        if not isinstance(data, dict):
            raise ValueError(f"Article must be an object: {data!r}")
        title = data.get("title")
        url = data.get("url")
        if not isinstance(title, str) or not isinstance(url, str) or not title or not url:
            raise ValueError(f"Article requires string title and url: {data!r}")
        for key in ("description", "summary", "audioUrl"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ValueError(f"Article {key} must be a string: {data!r}")
        return cls(
            title=title,
            url=url,
            description=data.get("description") or NO_DESCRIPTION_FETCHED,
            summary=data.get("summary"),
            audio_url=data.get("audioUrl"),
        )


@dataclass
class BatchState:
    """The persisted batch together with its revision metadata."""
    articles: list[Article] = field(default_factory=list)
    revision: int = 0
    updated_at: Optional[datetime] = None

    def to_document(self) -> dict[str, Any]:
        return {
            "schema_version": STATE_SCHEMA_VERSION,
            "revision": self.revision,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "articles": [article.to_dict() for article in self.articles],
        }

    @classmethod
    def from_document(cls, document: Any) -> "BatchState":
        # Bare arrays are the layout written before the state was versioned.
        if isinstance(document, list):
            return cls(articles=[Article.from_dict(item) for item in document])

        if not isinstance(document, dict) or not isinstance(document.get("articles"), list):
            raise ValueError("State document must be a list or an object with 'articles'")

        version = document.get("schema_version", STATE_SCHEMA_VERSION)
        if version > STATE_SCHEMA_VERSION:
            raise ValueError(f"Unsupported state schema version: {version}")

        updated_at = document.get("updated_at")
        return cls(
            articles=[Article.from_dict(item) for item in document["articles"]],
            revision=int(document.get("revision", 0)),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )


def build_narration(articles: list[Article]) -> str:
    """Join every real summary in batch order with the pause token."""
    summaries = [article.summary.strip() for article in articles if article.has_real_summary]
    return PAUSE_TOKEN.join(summaries)
