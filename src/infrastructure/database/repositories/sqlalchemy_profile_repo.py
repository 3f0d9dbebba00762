"""SQLAlchemy implementation of Profile repository."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateProfileError, PersistenceError
from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel

logger = structlog.get_logger()


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by its username."""
        stmt = select(ProfileModel).where(ProfileModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, profile: Profile) -> Profile:
        """Insert or update a profile, keyed by id."""
        model = await self._session.get(ProfileModel, profile.id)
        if model is None:
            model = self._to_model(profile)
            self._session.add(model)
        else:
            model.username = profile.username
            model.email = profile.email
            model.first_name = profile.first_name
            model.last_name = profile.last_name
            model.image_file_name = profile.image_file_name
            model.image_file_content_type = profile.image_file_content_type

        try:
            await self._session.flush()
        except IntegrityError as e:
            logger.warning("profile_save_conflict", username=profile.username, error=str(e.orig))
            raise DuplicateProfileError(profile.username) from e
        except SQLAlchemyError as e:
            logger.error("profile_save_failed", username=profile.username, error=str(e))
            raise PersistenceError("save") from e

        return self._to_entity(model)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            username=model.username,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            image_file_name=model.image_file_name,
            image_file_content_type=model.image_file_content_type,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            username=entity.username,
            email=entity.email,
            first_name=entity.first_name,
            last_name=entity.last_name,
            image_file_name=entity.image_file_name,
            image_file_content_type=entity.image_file_content_type,
        )
