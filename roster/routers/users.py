from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from roster.domain.models import User
from roster.services.responses import ApiResponse
from roster.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


def _respond(result: ApiResponse) -> JSONResponse:
    return JSONResponse(result.to_payload(), status_code=result.status_code)


@router.get("")
def list_users(request: Request, search: Optional[str] = None):
    return _respond(_get_user_service(request).list_users(search))


@router.post("")
def create_user(user: User, request: Request):
    return _respond(_get_user_service(request).save_user(user))


@router.get("/{user_id}")
def get_user(user_id: str, request: Request):
    return _respond(_get_user_service(request).get_user(user_id))


@router.put("/{user_id}")
def update_user(user_id: str, user: User, request: Request):
    return _respond(_get_user_service(request).save_user(user.model_copy(update={"id": user_id})))


@router.delete("/{user_id}")
def delete_user(user_id: str, request: Request):
    return _respond(_get_user_service(request).delete_user(user_id))
