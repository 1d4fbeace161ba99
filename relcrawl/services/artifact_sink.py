from __future__ import annotations

import logging
import os
from typing import Protocol

from relcrawl.domain.crawl_result import ExportArtifact

logger = logging.getLogger(__name__)


class ArtifactSink(Protocol):
    """Save an exported file somewhere the user can pick it up."""

    def save(self, artifact: ExportArtifact) -> str: ...


class FileArtifactSink:
    """Writes artifacts into a local directory, creating it on demand."""

    def __init__(self, *, output_dir: str):
        self.output_dir = output_dir

    def _unique_path(self, filename: str) -> str:
        path = os.path.join(self.output_dir, filename)
        if not os.path.exists(path):
            return path
        stem, ext = os.path.splitext(filename)
        n = 1
        while os.path.exists(os.path.join(self.output_dir, f"{stem} ({n}){ext}")):
            n += 1
        return os.path.join(self.output_dir, f"{stem} ({n}){ext}")

    def save(self, artifact: ExportArtifact) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        path = self._unique_path(artifact.filename)
        with open(path, "wb") as f:
            f.write(artifact.content)
        logger.info("Saved %s (%s bytes)", path, len(artifact.content))
        return path
