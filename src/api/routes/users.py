"""User API routes.

Endpoints (mounted under /api/v1):
- GET /users: List users (search, sort_by, limit)
- GET /users/{id}: Show one user
- POST /users: Create a user with an avatar (multipart)
- PATCH|PUT /users/{id}: Partial update (multipart)
- DELETE /users/{id}: erase, trash or restore
- GET|PUT|DELETE /users/{id}/company: Employer lookup, employ, dismiss
- GET /users/{id}/colleagues: Users working at the same company

Handlers are plain functions; FastAPI runs them in its thread pool so store
and file I/O never block the event loop.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import (
    get_avatar_storage,
    get_company_repo,
    get_employment_repo,
    get_user_repo,
)
from api.errors import validation_error_from_pydantic
from api.models import (
    CompanyResponse,
    DeleteRequest,
    EmploymentRequest,
    EmploymentResponse,
    UserCreateForm,
    UserResponse,
    UserUpdateForm,
)
from domain.model.avatar import AvatarUpload
from port.avatar_storage import AvatarStorage
from port.company_repository import CompanyRepository
from port.employment_repository import EmploymentRepository
from port.user_repository import UserRepository
from services import employment_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _filename(upload: Optional[UploadFile]) -> Optional[str]:
    # browsers send an empty part when no file was picked
    if upload is None or not upload.filename:
        return None
    return upload.filename


def _to_avatar(upload: Optional[UploadFile]) -> Optional[AvatarUpload]:
    if _filename(upload) is None:
        return None
    return AvatarUpload(
        filename=upload.filename,
        stream=upload.file,
        content_type=upload.content_type,
        field_name='avatar',
    )


@router.get("", response_model=list[UserResponse])
def list_users(
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    limit: Optional[int] = None,
    repo: UserRepository = Depends(get_user_repo),
):
    """List users. Trashed users are included."""
    users = user_service.list_users(repo, search=search, sort_by=sort_by, limit=limit)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
def show_user(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    return UserResponse.model_validate(user_service.get_user(repo, user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def store_user(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    password_confirmation: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    repo: UserRepository = Depends(get_user_repo),
    storage: AvatarStorage = Depends(get_avatar_storage),
):
    """Create a user. password_confirmation is checked but never stored."""
    try:
        form = UserCreateForm(
            name=name,
            email=email,
            password=password,
            password_confirmation=password_confirmation,
            avatar=_filename(avatar),
        )
    except PydanticValidationError as e:
        raise validation_error_from_pydantic(e.errors()) from None

    user = user_service.create_user(
        repo,
        storage,
        name=form.name,
        email=str(form.email),
        password=form.password,
        avatar=_to_avatar(avatar),
    )
    return UserResponse.model_validate(user)


@router.api_route("/{user_id}", methods=["PATCH", "PUT"], response_model=UserResponse)
def update_user(
    user_id: str,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    password_confirmation: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    repo: UserRepository = Depends(get_user_repo),
    storage: AvatarStorage = Depends(get_avatar_storage),
):
    try:
        form = UserUpdateForm(
            name=name,
            email=email,
            password=password,
            password_confirmation=password_confirmation,
            avatar=_filename(avatar),
        )
    except PydanticValidationError as e:
        raise validation_error_from_pydantic(e.errors()) from None

    user = user_service.update_user(
        repo,
        storage,
        user_id,
        name=form.name,
        email=str(form.email) if form.email else None,
        password=form.password,
        avatar=_to_avatar(avatar),
    )
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    response_model=UserResponse,
    responses={204: {"description": "User erased"}},
)
def delete_user(
    user_id: str,
    request: DeleteRequest,
    repo: UserRepository = Depends(get_user_repo),
    storage: AvatarStorage = Depends(get_avatar_storage),
):
    """erase returns 204; trash and restore return the updated user."""
    user = user_service.delete_user(repo, storage, user_id, request.mode)
    if user is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/company", response_model=CompanyResponse)
def show_user_company(
    user_id: str,
    users: UserRepository = Depends(get_user_repo),
    employments: EmploymentRepository = Depends(get_employment_repo),
):
    company = employment_service.company_of(employments, users, user_id)
    return CompanyResponse.model_validate(company)


@router.put("/{user_id}/company", response_model=EmploymentResponse)
def employ_user(
    user_id: str,
    request: EmploymentRequest,
    users: UserRepository = Depends(get_user_repo),
    companies: CompanyRepository = Depends(get_company_repo),
    employments: EmploymentRepository = Depends(get_employment_repo),
):
    """Attach the user to a company, replacing any previous employer."""
    employment = employment_service.employ(
        employments,
        users,
        companies,
        user_id,
        request.company_id,
        position=request.position,
        since=request.since,
    )
    return EmploymentResponse.model_validate(employment)


@router.delete("/{user_id}/company", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_user(
    user_id: str,
    users: UserRepository = Depends(get_user_repo),
    employments: EmploymentRepository = Depends(get_employment_repo),
):
    employment_service.dismiss(employments, users, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# "collegues" is the historical spelling clients already call
@router.get("/{user_id}/collegues", response_model=list[UserResponse], include_in_schema=False)
@router.get("/{user_id}/colleagues", response_model=list[UserResponse])
def list_colleagues(
    user_id: str,
    users: UserRepository = Depends(get_user_repo),
    employments: EmploymentRepository = Depends(get_employment_repo),
):
    colleagues = employment_service.colleagues_of(employments, users, user_id)
    return [UserResponse.model_validate(u) for u in colleagues]
