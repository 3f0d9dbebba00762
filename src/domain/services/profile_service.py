"""Profile service layer with business logic."""

from pathlib import Path
from typing import Callable, Optional

import structlog

from core.exceptions import InvalidImageUploadError, ProfileNotFoundError
from domain.entities.image import ALLOWED_IMAGE_SUFFIXES
from domain.entities.profile import Profile, ProfileChanges, merge_profile
from domain.repositories.image_store import IImageStore
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def validate_image_upload(data: bytes, filename: Optional[str]) -> None:
    """Reject empty uploads and anything that is not named like a JPG."""
    if not data:
        raise InvalidImageUploadError("Empty file - please select a file to upload", filename)
    if not filename or not filename.endswith(ALLOWED_IMAGE_SUFFIXES):
        raise InvalidImageUploadError("JPG files only - please select a file to upload", filename)


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        image_store: IImageStore,
        default_image_path: Path,
    ) -> None:
        self._uow_factory = uow_factory
        self._image_store = image_store
        self._default_image_path = default_image_path

    async def get(self, username: str) -> Profile:
        """Get a profile by username."""
        logger.debug("profile_read", username=username)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(username)
            if not profile:
                raise ProfileNotFoundError(username)
            return profile

    async def create(self, profile: Profile) -> Profile:
        """Persist a new profile.

        No existence check is made here; a duplicate username is rejected by
        the store's unique index.
        """
        async with self._uow_factory() as uow:
            created = await uow.profiles.save(profile)
            await uow.commit()
            logger.info("profile_created", username=created.username)
            return created

    async def update(self, changes: ProfileChanges) -> Profile:
        """Merge non-empty changed fields into the stored profile.

        Writes only when something changed. Concurrent updates to the same
        username are last-write-wins.
        """
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get_by_username(changes.username)
            if not existing:
                raise ProfileNotFoundError(changes.username)

            merged, changed = merge_profile(existing, changes)
            if not changed:
                logger.debug("profile_update_noop", username=changes.username)
                return merged

            updated = await uow.profiles.save(merged)
            await uow.commit()
            logger.info("profile_updated", username=changes.username)
            return updated

    async def get_image(self, username: str) -> bytes:
        """Get image bytes for a profile, falling back to the placeholder."""
        logger.debug("profile_image_read", username=username)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(username)

        if not profile or not profile.has_image:
            return await self._image_store.read(self._default_image_path)
        return await self._image_store.read(Path(profile.image_file_name))  # type: ignore[arg-type]

    async def upload_image(
        self,
        username: str,
        data: bytes,
        filename: Optional[str],
        content_type: Optional[str],
    ) -> Profile:
        """Store the upload as ``<username>.jpg`` and link it to the profile.

        Validation and the profile lookup happen before anything touches the
        filesystem. The bytes are staged, the record is saved, any previous
        image is moved aside, the file is promoted, then the transaction
        commits. A failure at any step discards the staged file, puts the
        previous image back and rolls back.
        """
        try:
            validate_image_upload(data, filename)
        except InvalidImageUploadError as e:
            logger.warning("profile_image_rejected", username=username, reason=e.message)
            raise

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(username)
            if not profile:
                raise ProfileNotFoundError(username)

            staged = await self._image_store.stage(username, data)
            backup: Optional[Path] = None
            promoted = False
            try:
                profile.image_file_name = str(staged.target_path)
                profile.image_file_content_type = content_type
                saved = await uow.profiles.save(profile)
                backup = await self._image_store.backup(staged.target_path)
                await self._image_store.promote(staged)
                promoted = True
                await uow.commit()
            except Exception:
                await self._image_store.discard(staged)
                if backup is not None:
                    await self._image_store.restore(backup, staged.target_path)
                elif promoted:
                    await self._image_store.delete(staged.target_path)
                raise

            if backup is not None:
                await self._image_store.delete(backup)

            logger.info(
                "profile_image_uploaded",
                username=username,
                path=str(staged.target_path),
                size=len(data),
            )
            return saved
