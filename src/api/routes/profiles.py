"""Profile API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Path, Request, Response, UploadFile, status

from api.dependencies.services import get_profile_service
from api.schemas.common import ErrorResponse, ValidationErrorResponse
from api.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate
from core.rate_limit import limiter
from domain.entities.image import JPEG_CONTENT_TYPE
from domain.entities.profile import USERNAME_PATTERN
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profiles"])

# Upload paths become file names; reads only look the username up.
UploadUsername = Annotated[str, Path(min_length=1, max_length=50, pattern=USERNAME_PATTERN)]


@router.get(
    "/{username}",
    response_model=ProfileResponse,
    summary="Get a profile",
    responses={404: {"model": ErrorResponse, "description": "Profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get a profile by username."""
    profile = await service.get(username)
    return ProfileResponse.model_validate(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
    responses={
        201: {"description": "Profile created successfully"},
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        409: {"model": ErrorResponse, "description": "Username already taken"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create a new profile."""
    profile = await service.create(body.to_entity())
    return ProfileResponse.model_validate(profile)


@router.put(
    "",
    response_model=ProfileResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Merged profile"},
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    body: ProfileUpdate,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Update email, first name and last name of the profile named in the body.

    Empty or missing fields keep their stored value.
    """
    profile = await service.update(body.to_changes())
    return ProfileResponse.model_validate(profile)


@router.get(
    "/{username}/image",
    response_class=Response,
    summary="Get a profile image",
    responses={200: {"content": {JPEG_CONTENT_TYPE: {}}, "description": "JPEG bytes"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile_image(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> Response:
    """Get the profile's image, or the placeholder when none is set."""
    data = await service.get_image(username)
    return Response(content=data, media_type=JPEG_CONTENT_TYPE)


@router.post(
    "/{username}/image",
    response_model=ProfileResponse,
    summary="Upload a profile image",
    responses={
        200: {"description": "Image stored"},
        400: {"model": ErrorResponse, "description": "Empty file or not a JPG"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
        500: {"model": ErrorResponse, "description": "Image could not be stored"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upload_profile_image(
    request: Request,
    username: UploadUsername,
    file: UploadFile = File(...),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Upload a JPG; it replaces any previous image for this user."""
    data = await file.read()
    profile = await service.upload_image(
        username,
        data,
        filename=file.filename,
        content_type=file.content_type,
    )
    return ProfileResponse.model_validate(profile)
