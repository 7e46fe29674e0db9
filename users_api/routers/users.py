from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, Request, status

from users_api.schemas import ErrorResponse, UserCreateRequest, UserResponse, UserUpdateRequest
from users_api.services.user_service import UserService

router = APIRouter(tags=["users"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "No user with this id"}}


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


@router.get("/users/{limit}/{page}", response_model=List[UserResponse])
def list_users(
    limit: int,
    page: int,
    request: Request,
    page_override: Optional[int] = Query(default=None, alias="page"),
):
    """Return one page of users with their settings. At most 50 per page."""
    svc = _get_user_service(request)
    result = svc.list_users(limit, page_override if page_override is not None else page)
    return result.items


@router.get("/user/{user_id}", response_model=UserResponse, responses=_NOT_FOUND)
def get_user(user_id: int, request: Request):
    return _get_user_service(request).get_user(user_id)


@router.post("/user", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreateRequest, request: Request):
    """Create a user; `settings` may be a single {name, value} object or a list."""
    svc = _get_user_service(request)
    return svc.create_user(
        payload.name,
        payload.email,
        payload.active_status,
        [(item.name, item.value) for item in payload.settings],
    )


@router.put("/user/{user_id}", response_model=UserResponse, responses=_NOT_FOUND)
def update_user(user_id: int, payload: UserUpdateRequest, request: Request):
    svc = _get_user_service(request)
    return svc.update_user(user_id, payload.name, payload.email, payload.active_status)


@router.delete("/user/{user_id}", response_model=int, responses=_NOT_FOUND)
def delete_user(user_id: int, request: Request):
    return _get_user_service(request).delete_user(user_id)
