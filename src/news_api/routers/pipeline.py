"""Endpoints that trigger the fetch, summarize and synthesize stages."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from audio_pipeline.pipeline import NewsAudioPipeline
from news_api.models.pipeline import (
    ArticleAudioResponse,
    ArticleResponse,
    AudioResponse,
    ErrorResponse,
    FetchResponse,
    SummarizeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pipeline"])

ERROR_RESPONSES = {500: {"model": ErrorResponse}}


def get_pipeline(request: Request) -> NewsAudioPipeline:
    """Dependency to get the pipeline created at startup."""
    return request.app.state.pipeline


def _failure(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump())


@router.get(
    "/fetch-news",
    response_model=FetchResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def fetch_news(
    pipeline: Annotated[NewsAudioPipeline, Depends(get_pipeline)],
    keyword: Annotated[str, Query(description="Search keyword")] = "",
    category: Annotated[str, Query(description="Headline category, e.g. business")] = "",
):
    """Fetch a fresh batch of articles, replacing the stored batch."""
    try:
        articles = await pipeline.fetch(keyword, category)
    except Exception as e:
        logger.error("Error fetching news: %s", e)
        return _failure("Failed to fetch news")

    return FetchResponse(articles=[ArticleResponse.from_article(a) for a in articles])


@router.get("/summarize-news", response_model=SummarizeResponse, responses=ERROR_RESPONSES)
async def summarize_news(pipeline: Annotated[NewsAudioPipeline, Depends(get_pipeline)]):
    """Summarize every article in the stored batch.

    Articles that could not be summarized carry a placeholder summary; the
    request still succeeds.
    """
    try:
        summaries = await pipeline.summarize()
    except Exception as e:
        logger.error("Error summarizing news: %s", e)
        return _failure("Summarization failed")

    return SummarizeResponse(summaries=summaries)


@router.get("/generate-audio", response_model=AudioResponse, responses=ERROR_RESPONSES)
async def generate_audio(pipeline: Annotated[NewsAudioPipeline, Depends(get_pipeline)]):
    """Convert the stored summaries to speech."""
    try:
        result = await pipeline.synthesize()
    except Exception as e:
        logger.error("Error generating audio: %s", e)
        return _failure("TTS failed")

    return AudioResponse(
        strategy=result.strategy,
        audio_url=result.audio_url,
        audio_urls=[
            ArticleAudioResponse(title=item.title, audio_url=item.audio_url)
            for item in result.article_audio
        ],
    )
