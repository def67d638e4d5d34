"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging

QUIET_LOGGERS = ("httpx", "httpcore", "openai", "google_genai")


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools and the API server."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def parse_stages(value: str, valid: tuple[str, ...]) -> list[str]:
    """Parse a comma-separated stage list for argparse arguments.

    Args:
        value: Comma-separated stage names, or "all".
        valid: Stage names in execution order.

    Returns:
        Requested stages, ordered as in ``valid``.

    Raises:
        argparse.ArgumentTypeError: If a stage name is unknown.
    """
    if not value or value.strip().lower() == "all":
        return list(valid)

    requested = {part.strip() for part in value.split(",") if part.strip()}
    unknown = requested - set(valid)
    if unknown:
        raise argparse.ArgumentTypeError(
            f"Unknown stages: {', '.join(sorted(unknown))}. Valid stages: {', '.join(valid)}"
        )
    return [stage for stage in valid if stage in requested]
