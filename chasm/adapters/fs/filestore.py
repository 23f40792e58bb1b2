import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """FileSystemPort backed by the local disk."""

    def create_all_dirs(self, path: Path) -> None:
        os.makedirs(path, exist_ok=True)

    def write_file(self, path: Path, data: bytes) -> None:
        with open(path, "wb") as f:
            f.write(data)
        logger.debug("Wrote %d bytes to %s", len(data), path)
