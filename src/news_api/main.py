"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from audio_pipeline.pipeline import NewsAudioPipeline
from common.cli_helpers import setup_logging
from common.config import Settings, get_settings
from news_api.routers import health, pipeline
from providers.registry import ProviderRegistry


def create_app(settings: Settings | None = None, registry: ProviderRegistry | None = None) -> FastAPI:
    """Build the API app.

    Providers are created once at startup unless a registry is passed in.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        providers = registry or ProviderRegistry.from_settings(settings)
        app.state.pipeline = NewsAudioPipeline(providers, settings)
        yield

    app = FastAPI(
        title="News Audio API",
        description="Fetch news, summarize it and convert the summaries to speech",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(pipeline.router)

    # Generated audio is served from the same prefix written into audioUrl.
    audio_dir = Path(settings.storage.audio_dir)
    audio_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.storage.audio_url_prefix, StaticFiles(directory=audio_dir), name="audio")

    @app.get("/")
    async def root():
        """API root - returns basic info."""
        return {
            "name": "News Audio API",
            "version": "1.0.0",
            "docs": "/docs",
        }

    return app


def main():
    """Run the API server."""
    import uvicorn

    setup_logging()
    settings = get_settings()
    uvicorn.run(
        "news_api.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
    )


if __name__ == "__main__":
    main()
