"""Local file I/O utilities."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write bytes so readers see either the old file or the complete new one.

    The data goes to a temp file in the same directory, which is then
    renamed over the target.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        logger.debug("Wrote %d bytes to %s", len(data), path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_json_atomic(path: Path, document: Any) -> None:
    """Serialize a document as indented JSON and write it atomically."""
    body = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    write_bytes_atomic(path, body.encode("utf-8"))


def read_json(path: Path) -> Any:
    """Read a JSON document from disk."""
    with path.open(encoding="utf-8") as f:
        return json.load(f)
