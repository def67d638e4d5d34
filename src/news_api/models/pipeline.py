"""Response envelopes for the pipeline endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from common.models import Article


class ArticleResponse(BaseModel):
    """Article as stored in the current batch."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    url: str
    summary: str | None = None
    audio_url: str | None = Field(default=None, alias="audioUrl")

    @classmethod
    def from_article(cls, article: Article) -> "ArticleResponse":
        return cls(
            title=article.title,
            description=article.description,
            url=article.url,
            summary=article.summary,
            audio_url=article.audio_url,
        )


class ArticleAudioResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    audio_url: str = Field(alias="audioUrl")


class FetchResponse(BaseModel):
    success: bool = True
    message: str = "News fetched and stored!"
    articles: list[ArticleResponse]


class SummarizeResponse(BaseModel):
    success: bool = True
    message: str = "News summarized!"
    summaries: list[str]


class AudioResponse(BaseModel):
    """Audio result for either synthesis strategy.

    ``audio_url`` is set by the combined strategy, ``audio_urls`` by the
    per-article strategy.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Audio generated!"
    strategy: str
    audio_url: str | None = Field(default=None, alias="audioUrl")
    audio_urls: list[ArticleAudioResponse] = Field(default_factory=list, alias="audioUrls")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
