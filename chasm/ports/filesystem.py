from pathlib import Path
from typing import Protocol


class FileSystemPort(Protocol):
    def create_all_dirs(self, path: Path) -> None:
        """Create a directory and any missing parents. Raises OSError."""
        ...

    def write_file(self, path: Path, data: bytes) -> None:
        """Write bytes to path, replacing existing content. Raises OSError."""
        ...
