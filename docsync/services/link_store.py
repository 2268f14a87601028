"""Persist bucket link lists as newline-delimited text files."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LinkStore:
    """Reads and writes ``<bucket>.txt`` link lists in a directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, bucket: str) -> Path:
        return self.directory / f"{bucket}.txt"

    def write(self, partitions: dict[str, list[str]]) -> None:
        """Overwrite every bucket file with its URLs, one per line."""
        self.directory.mkdir(parents=True, exist_ok=True)
        for bucket, urls in partitions.items():
            path = self.path_for(bucket)
            path.write_text("\n".join(urls), encoding="utf-8")
            logger.info(f"Wrote {len(urls)} URLs to {path.name}")

    def read(self, bucket: str) -> list[str]:
        path = self.path_for(bucket)
        if not path.exists():
            return []
        return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
