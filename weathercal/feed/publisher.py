"""Atomic replacement of the published calendar file."""

import logging
import os
import tempfile
from pathlib import Path

from weathercal.models.errors import PublishError

logger = logging.getLogger(__name__)


def publish(text: str, path: str | Path) -> Path:
    """Write `text` to `path` so readers see either the old or the new file.

    The document is written to a temporary file in the target directory and
    moved over the target with os.replace. Line endings are written as-is.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
    except OSError as e:
        raise PublishError(f"Cannot create temporary file next to {path}: {e}") from e

    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        tmp_path.chmod(0o644)
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise PublishError(f"Cannot replace {path}: {e}") from e

    logger.info("Published %s (%d bytes)", path, len(text.encode("utf-8")))
    return path
