"""Hashing utilities."""

import hashlib
import re

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_\-]")
_MAX_STEM_LENGTH = 80


def generate_article_id(title: str, url: str) -> str:
    """Generate a short stable ID from an article's title and URL."""
    return hashlib.sha256(f"{title}:{url}".encode()).hexdigest()[:8]


def generate_audio_filename(title: str, url: str, extension: str = "mp3") -> str:
    """Build a filesystem-safe audio filename derived from the article title.

    Whitespace becomes underscores and other unsafe characters are dropped.
    The short ID suffix keeps articles with equal titles from sharing a file.
    """
    stem = _UNSAFE_CHARS.sub("", re.sub(r"\s", "_", title))[:_MAX_STEM_LENGTH]
    article_id = generate_article_id(title, url)
    if not stem:
        return f"{article_id}.{extension}"
    return f"{stem}_{article_id}.{extension}"
