"""Image store protocol."""

from pathlib import Path
from typing import Optional, Protocol

from domain.entities.image import StagedImage


class IImageStore(Protocol):
    """Storage interface for per-user profile images.

    Writes are two-phase: ``stage`` puts the bytes somewhere private, then
    ``promote`` makes them visible at the final path or ``discard`` drops them.
    ``backup`` and ``restore`` keep the previous file recoverable until the
    record that points at the new one is committed.
    """

    def path_for(self, username: str) -> Path:
        """Final path of the image for a username."""
        ...

    async def read(self, path: Path) -> bytes:
        """Read all bytes at path."""
        ...

    async def stage(self, username: str, data: bytes) -> StagedImage:
        """Write bytes to a staging file for the username."""
        ...

    async def promote(self, staged: StagedImage) -> None:
        """Atomically move a staged file to its target path."""
        ...

    async def discard(self, staged: StagedImage) -> None:
        """Remove a staged file if it is still present."""
        ...

    async def backup(self, path: Path) -> Optional[Path]:
        """Move an existing file aside; return where it went, or None if absent."""
        ...

    async def restore(self, backup: Path, path: Path) -> None:
        """Put a backed-up file back at path."""
        ...

    async def delete(self, path: Path) -> None:
        """Remove a stored file if present."""
        ...
