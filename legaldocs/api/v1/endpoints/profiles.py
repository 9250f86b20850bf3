from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from legaldocs.dependencies import get_profile_store
from legaldocs.schemas.profiles import ProfileCreate, ProfileUpdate, SavedProfile
from legaldocs.schemas.response import ApiResponse
from legaldocs.services.profiles.profile_store import SavedProfileStore
from legaldocs.utils.logging import get_logger
from legaldocs.utils.responses import create_api_response, create_error_detail

LOGGER = get_logger(__name__)

router = APIRouter()

ProfileStoreDep = Annotated[SavedProfileStore, Depends(get_profile_store)]


def _not_found(request: Request, profile_id: str) -> HTTPException:
    error_detail = create_error_detail(
        title="Profile Not Found",
        status=status.HTTP_404_NOT_FOUND,
        detail=f"Profile with ID {profile_id} not found",
        request=request,
    )
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error_detail.model_dump(mode="json"))


def _blank_fields(request: Request) -> HTTPException:
    error_detail = create_error_detail(
        title="Invalid Profile",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Profile label and name are required",
        request=request,
    )
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=error_detail.model_dump(mode="json"),
    )


def _get_or_404(store: SavedProfileStore, request: Request, profile_id: str) -> SavedProfile:
    profile = store.get(profile_id)
    if profile is None:
        raise _not_found(request, profile_id)
    return profile


@router.get(
    "",
    response_model=ApiResponse,
    summary="List saved profiles",
    operation_id="list_profiles",
)
async def list_profiles(request: Request, store: ProfileStoreDep) -> ApiResponse:
    """List profiles, favorites and the default first."""
    return create_api_response(
        data={"items": store.list(), "synced": store.is_synced},
        message="Profiles retrieved successfully",
        request=request,
    )


@router.post(
    "",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a saved profile",
    operation_id="create_profile",
)
async def create_profile(request: Request, payload: ProfileCreate, store: ProfileStoreDep) -> ApiResponse:
    profile = store.create(payload)
    if profile is None:
        raise _blank_fields(request)
    return create_api_response(data=profile, message="Profile created successfully", request=request)


@router.get(
    "/{profile_id}",
    response_model=ApiResponse,
    summary="Get a saved profile",
    operation_id="get_profile",
)
async def get_profile(request: Request, profile_id: str, store: ProfileStoreDep) -> ApiResponse:
    profile = _get_or_404(store, request, profile_id)
    return create_api_response(data=profile, message="Profile retrieved successfully", request=request)


@router.patch(
    "/{profile_id}",
    response_model=ApiResponse,
    summary="Update a saved profile",
    operation_id="update_profile",
)
async def update_profile(
    request: Request,
    profile_id: str,
    payload: ProfileUpdate,
    store: ProfileStoreDep,
) -> ApiResponse:
    _get_or_404(store, request, profile_id)
    profile = store.update(profile_id, payload)
    if profile is None:
        raise _blank_fields(request)
    return create_api_response(data=profile, message="Profile updated successfully", request=request)


@router.delete(
    "/{profile_id}",
    response_model=ApiResponse,
    summary="Delete a saved profile",
    operation_id="delete_profile",
)
async def delete_profile(request: Request, profile_id: str, store: ProfileStoreDep) -> ApiResponse:
    if not store.delete(profile_id):
        raise _not_found(request, profile_id)
    return create_api_response(
        data={"id": profile_id, "default": store.get_default()},
        message="Profile deleted successfully",
        request=request,
    )


@router.post(
    "/{profile_id}/default",
    response_model=ApiResponse,
    summary="Make a profile the default",
    operation_id="set_default_profile",
)
async def set_default_profile(request: Request, profile_id: str, store: ProfileStoreDep) -> ApiResponse:
    profile = store.set_default(profile_id)
    if profile is None:
        raise _not_found(request, profile_id)
    return create_api_response(data=profile, message="Default profile updated", request=request)


@router.post(
    "/{profile_id}/favorite",
    response_model=ApiResponse,
    summary="Toggle a profile's favorite flag",
    operation_id="toggle_favorite_profile",
)
async def toggle_favorite_profile(request: Request, profile_id: str, store: ProfileStoreDep) -> ApiResponse:
    profile = store.toggle_favorite(profile_id)
    if profile is None:
        raise _not_found(request, profile_id)
    return create_api_response(data=profile, message="Favorite flag updated", request=request)
