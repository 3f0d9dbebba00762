"""Profile domain entity and partial-update merge."""

from dataclasses import dataclass, field, replace
from typing import Optional
from uuid import UUID, uuid4

# Usernames double as image file names, so path separators are never allowed.
USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"

MERGEABLE_FIELDS = ("email", "first_name", "last_name")


@dataclass
class Profile:
    """Domain entity for a user profile."""

    username: str
    email: str
    first_name: str
    last_name: str
    id: UUID = field(default_factory=uuid4)
    image_file_name: Optional[str] = None
    image_file_content_type: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_file_name)


@dataclass(frozen=True, slots=True)
class ProfileChanges:
    """Incoming partial update; empty or missing fields are left alone."""

    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


def merge_profile(existing: Profile, changes: ProfileChanges) -> tuple[Profile, bool]:
    """Overlay non-empty, differing fields of ``changes`` onto a copy of ``existing``.

    Returns the merged profile and whether any field actually changed.
    ``existing`` is never mutated.
    """
    merged = replace(existing)
    changed = False
    for name in MERGEABLE_FIELDS:
        incoming = getattr(changes, name)
        if incoming and incoming != getattr(merged, name):
            setattr(merged, name, incoming)
            changed = True
    return merged, changed
