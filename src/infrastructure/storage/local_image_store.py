"""Filesystem implementation of the image store."""

import asyncio
import os
from pathlib import Path
from typing import Optional
from uuid import uuid4

import structlog

from core.exceptions import ImageStorageError
from domain.entities.image import StagedImage

logger = structlog.get_logger()


class LocalImageStore:
    """Stores one ``<username>.jpg`` per user in a flat directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, username: str) -> Path:
        """Final path of the image for a username."""
        return self._directory / f"{username}.jpg"

    async def read(self, path: Path) -> bytes:
        """Read all bytes at path."""
        try:
            return await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            logger.error("image_read_failed", path=str(path), error=str(e))
            raise ImageStorageError("read") from e

    async def stage(self, username: str, data: bytes) -> StagedImage:
        """Write bytes to a uniquely named hidden file next to the target."""
        target = self.path_for(username)
        staging = self._directory / f".{username}.{uuid4().hex}.part"
        try:
            await asyncio.to_thread(self._write, staging, data)
        except OSError as e:
            logger.error("image_stage_failed", path=str(staging), error=str(e))
            await self._unlink(staging)
            raise ImageStorageError("write") from e
        return StagedImage(staging_path=staging, target_path=target)

    async def promote(self, staged: StagedImage) -> None:
        """Atomically replace the target with the staged file."""
        try:
            await asyncio.to_thread(os.replace, staged.staging_path, staged.target_path)
        except OSError as e:
            logger.error("image_promote_failed", path=str(staged.target_path), error=str(e))
            raise ImageStorageError("write") from e

    async def discard(self, staged: StagedImage) -> None:
        """Remove a staged file if it was never promoted."""
        await self._unlink(staged.staging_path)

    async def backup(self, path: Path) -> Optional[Path]:
        """Rename an existing file to a hidden ``.bak`` next to it."""
        path = Path(path)
        backup = path.parent / f".{path.stem}.{uuid4().hex}.bak"
        try:
            await asyncio.to_thread(os.replace, path, backup)
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("image_backup_failed", path=str(path), error=str(e))
            raise ImageStorageError("write") from e
        return backup

    async def restore(self, backup: Path, path: Path) -> None:
        """Move a backup over path, replacing whatever is there."""
        try:
            await asyncio.to_thread(os.replace, backup, path)
        except OSError as e:
            # Runs while unwinding a failed upload; the backup file is left in place.
            logger.error("image_restore_failed", path=str(path), backup=str(backup), error=str(e))

    async def delete(self, path: Path) -> None:
        """Remove a stored file if present."""
        await self._unlink(Path(path))

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def _unlink(self, path: Path) -> None:
        # Best effort; callers are usually already unwinding another error.
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            logger.warning("image_cleanup_failed", path=str(path), error=str(e))
