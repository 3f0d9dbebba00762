"""Image storage value objects."""

from dataclasses import dataclass
from pathlib import Path

JPEG_CONTENT_TYPE = "image/jpeg"
ALLOWED_IMAGE_SUFFIXES = (".jpg", ".JPG")


@dataclass(frozen=True, slots=True)
class StagedImage:
    """Bytes written to a private staging file, not yet visible at ``target_path``."""

    staging_path: Path
    target_path: Path
