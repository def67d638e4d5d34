"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    """Liveness check; also reports whether a batch has been fetched."""
    pipeline = request.app.state.pipeline
    return {"status": "ok", "batch_stored": pipeline.store.exists()}
