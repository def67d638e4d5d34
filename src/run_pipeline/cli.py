"""CLI for running the fetch, summarize and synthesize stages in order."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import replace
from typing import Any

from audio_pipeline.pipeline import NewsAudioPipeline
from common.cli_helpers import parse_stages, setup_logging
from common.config import SYNTHESIS_STRATEGIES, get_settings, load_settings, set_settings
from common.errors import PipelineError
from common.serialization import serialize_dataclass
from providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

STAGES = ("fetch", "summarize", "synthesize")


def parse_run_pipeline_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for run_pipeline."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--keyword", default="", help="Search keyword for the fetch stage")
    parser.add_argument("--category", default="", help="Headline category for the fetch stage")
    parser.add_argument(
        "--stages",
        type=lambda v: parse_stages(v, STAGES),
        default=list(STAGES),
        help=f"Comma-separated stages to run (default: all). Valid: {', '.join(STAGES)}",
    )
    parser.add_argument(
        "--strategy",
        choices=SYNTHESIS_STRATEGIES,
        default=None,
        help="Synthesis strategy (default: from config)",
    )
    parser.add_argument("--config", default=None, help="Config name under configs/ (default: prod)")
    return parser.parse_args(argv)


async def run_stages(pipeline: NewsAudioPipeline, stages: list[str], keyword: str, category: str) -> dict[str, Any]:
    """Run the requested stages in order and collect their output."""
    output: dict[str, Any] = {}

    if "fetch" in stages:
        articles = await pipeline.fetch(keyword, category)
        output["articles"] = [article.to_dict() for article in articles]

    if "summarize" in stages:
        output["summaries"] = await pipeline.summarize()

    if "synthesize" in stages:
        output["audio"] = serialize_dataclass(await pipeline.synthesize())

    return output


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = parse_run_pipeline_args(argv)

    if args.config:
        set_settings(load_settings(args.config))
    settings = get_settings()
    if args.strategy:
        settings = replace(settings, speech=replace(settings.speech, strategy=args.strategy))

    pipeline = NewsAudioPipeline(ProviderRegistry.from_settings(settings), settings)

    try:
        output = asyncio.run(run_stages(pipeline, args.stages, args.keyword, args.category))
    except PipelineError as e:
        logger.error("Pipeline failed: %s", e)
        print(json.dumps({"success": False, "error": str(e)}, indent=2))
        return 1

    print(json.dumps({"success": True, **output}, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
