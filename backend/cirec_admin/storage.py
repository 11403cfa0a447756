"""File storage for published documents."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO

from .domain_errors import DomainError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024  # 1MB


class FileStorage:
    """Writes and removes files under a configured root directory."""

    def __init__(self, root: Path | str, *, max_size: int):
        self.root = Path(root)
        self.max_size = max_size

    def ensure_directory(self, directory: Path | None = None) -> Path:
        target = directory or self.root
        target.mkdir(parents=True, exist_ok=True)
        return target

    def path_for(self, filename: str) -> Path:
        name = Path(filename).name
        if not name or name != filename:
            raise DomainError(code="INVALID_FILENAME", http_status=400, message="Invalid filename")
        return self.root / name

    def write(self, filename: str, source: BinaryIO) -> int:
        """Stream ``source`` into ``filename`` with a hard size limit, replacing any previous file."""
        dest_path = self.path_for(filename)
        self.ensure_directory(dest_path.parent)
        tmp_path = dest_path.with_name(f".{dest_path.name}.part")
        size = 0
        try:
            with tmp_path.open("wb") as out:
                while True:
                    chunk = source.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_size:
                        raise DomainError(
                            code="FILE_TOO_LARGE",
                            http_status=400,
                            message=f"File too large. Max size: {self.max_size} bytes",
                        )
                    out.write(chunk)
            os.replace(tmp_path, dest_path)
        except DomainError:
            tmp_path.unlink(missing_ok=True)
            raise
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            logger.exception("Failed to save file %s", dest_path)
            raise DomainError(
                code="FILE_WRITE_FAILED",
                http_status=500,
                message="Failed to save file",
            ) from exc
        return size

    def delete(self, filename: str) -> bool:
        """Remove a stored file; failures are logged and reported as False."""
        try:
            path = self.path_for(filename)
            path.unlink()
        except FileNotFoundError:
            logger.warning("File %s already absent from %s", filename, self.root)
            return False
        except (OSError, DomainError) as exc:
            logger.warning("Failed to delete file %s: %s", filename, exc)
            return False
        return True

    def rename(self, filename: str, new_filename: str) -> bool:
        """Move a stored file to a new name, replacing any file already there."""
        try:
            os.replace(self.path_for(filename), self.path_for(new_filename))
        except FileNotFoundError:
            logger.warning("File %s absent from %s, nothing to rename", filename, self.root)
            return False
        except (OSError, DomainError) as exc:
            logger.warning("Failed to rename file %s to %s: %s", filename, new_filename, exc)
            return False
        return True

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).exists()
