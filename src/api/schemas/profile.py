"""Pydantic schemas for Profile API."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from domain.entities.profile import USERNAME_PATTERN, Profile, ProfileChanges


class ProfileSchema(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileCreate(ProfileSchema):
    """Schema for creating a Profile."""

    username: str = Field(..., min_length=1, max_length=50, pattern=USERNAME_PATTERN)
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    def to_entity(self) -> Profile:
        return Profile(
            username=self.username,
            email=str(self.email),
            first_name=self.first_name,
            last_name=self.last_name,
        )


class ProfileUpdate(ProfileSchema):
    """Schema for updating a Profile. Empty strings mean "leave unchanged"."""

    username: str = Field(..., min_length=1, max_length=50, pattern=USERNAME_PATTERN)
    email: EmailStr | Literal[""] | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)

    def to_changes(self) -> ProfileChanges:
        return ProfileChanges(
            username=self.username,
            email=str(self.email) if self.email else None,
            first_name=self.first_name,
            last_name=self.last_name,
        )


class ProfileResponse(ProfileSchema):
    """Schema for Profile response."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "jdoe",
                "email": "jdoe@example.com",
                "firstName": "John",
                "lastName": "Doe",
                "imageFileName": "/tmp/jdoe.jpg",
                "imageFileContentType": "image/jpeg",
            }
        },
    )

    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    image_file_name: str | None = None
    image_file_content_type: str | None = None
