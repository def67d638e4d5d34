"""Tests for common.hashing module."""

from common.hashing import generate_article_id, generate_audio_filename


class TestGenerateArticleId:
    def test_deterministic_output(self) -> None:
        result1 = generate_article_id("Markets rally", "https://example.com/a")
        result2 = generate_article_id("Markets rally", "https://example.com/a")
        assert result1 == result2

    def test_returns_8_char_hex_string(self) -> None:
        result = generate_article_id("Markets rally", "https://example.com/a")
        assert len(result) == 8
        assert all(c in "0123456789abcdef" for c in result)

    def test_different_url_produces_different_id(self) -> None:
        result1 = generate_article_id("Markets rally", "https://example.com/a")
        result2 = generate_article_id("Markets rally", "https://example.com/b")
        assert result1 != result2


class TestGenerateAudioFilename:
    def test_whitespace_becomes_underscores(self) -> None:
        result = generate_audio_filename("Markets rally today", "https://example.com/a")
        assert result.startswith("Markets_rally_today_")
        assert result.endswith(".mp3")

    def test_unsafe_characters_dropped(self) -> None:
        result = generate_audio_filename("Q3: up 5%/down?", "https://example.com/a")
        assert "/" not in result
        assert ":" not in result
        assert result.startswith("Q3_up_5down_")

    def test_same_title_different_url_do_not_collide(self) -> None:
        result1 = generate_audio_filename("Breaking news", "https://example.com/a")
        result2 = generate_audio_filename("Breaking news", "https://example.com/b")
        assert result1 != result2

    def test_title_without_safe_characters_uses_id(self) -> None:
        result = generate_audio_filename("???", "https://example.com/a")
        assert result == f"{generate_article_id('???', 'https://example.com/a')}.mp3"

    def test_long_title_truncated(self) -> None:
        result = generate_audio_filename("word " * 100, "https://example.com/a")
        stem = result.rsplit("_", 1)[0]
        assert len(stem) <= 80
