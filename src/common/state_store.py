"""On-disk state for the current article batch.

The batch document is the hand-off point between stages. It is only ever
replaced wholesale, through a temp file and rename, so a reader sees either
the previous batch or the new one.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from common.errors import StateStoreError
from common.local_io import read_json, write_json_atomic
from common.models import STATE_SCHEMA_VERSION, Article, BatchState

logger = logging.getLogger(__name__)


class BatchStore:
    """Persisted batch of articles, guarded by a lock that serializes stages."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> BatchState:
        """Load the current batch.

        Raises:
            StateStoreError: If no batch has been fetched yet or the
                document is malformed.
        """
        if not self.path.exists():
            raise StateStoreError(f"No batch stored at {self.path}; fetch news first")

        try:
            state = BatchState.from_document(read_json(self.path))
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            raise StateStoreError(f"Malformed batch document at {self.path}: {e}") from e

        logger.info("Read %d articles from %s (revision %d)", len(state.articles), self.path, state.revision)
        return state

    def replace(self, articles: list[Article], previous: Optional[BatchState] = None) -> BatchState:
        """Atomically replace the stored batch, bumping its revision.

        Stages pass the state they read on entry as ``previous``. Without it
        (a fresh fetch) the revision is taken from the stored document.
        """
        revision = previous.revision if previous is not None else self._stored_revision()

        state = BatchState(
            articles=list(articles),
            revision=revision + 1,
            updated_at=datetime.now(timezone.utc),
        )
        write_json_atomic(self.path, state.to_document())
        logger.info("Saved %d articles to %s (revision %d)", len(state.articles), self.path, state.revision)
        return state

    def _stored_revision(self) -> int:
        if not self.path.exists():
            return 0
        try:
            document = read_json(self.path)
        except json.JSONDecodeError as e:
            logger.warning("Overwriting unreadable batch document %s: %s", self.path, e)
            return 0
        if not isinstance(document, dict):
            return 0

        version = document.get("schema_version", STATE_SCHEMA_VERSION)
        if isinstance(version, int) and version > STATE_SCHEMA_VERSION:
            raise StateStoreError(
                f"Refusing to overwrite {self.path}: schema version {version} is newer than {STATE_SCHEMA_VERSION}"
            )
        revision = document.get("revision", 0)
        return revision if isinstance(revision, int) else 0


class NarrationStore:
    """Last combined narration text, stored as ``{"summaries": "<text>"}``."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def write(self, text: str) -> None:
        write_json_atomic(self.path, {"summaries": text})
        logger.info("Saved combined narration (%d chars) to %s", len(text), self.path)
