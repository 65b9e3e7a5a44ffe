from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request

from accounts.routers.schemas import UpdateUserRequest, UserDetailsResponse, UserRecordResponse
from accounts.services.session_service import require_user
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/users", tags=["admin"], dependencies=[Depends(require_user)])


def _user_service(request: Request) -> UserService:
    return request.app.state.user_service


@router.get("", response_model=list[UserDetailsResponse])
def list_users(request: Request):
    users = _user_service(request).list_users()
    logger.info("Returning %d users", len(users))
    return [UserDetailsResponse.from_profile(profile) for profile in users]


@router.get("/email", response_model=UserRecordResponse)
def get_user_by_email(request: Request, email: str = Query("")):
    user = _user_service(request).get_by_email(email)
    return UserRecordResponse.from_user(user)


@router.put("/update", response_model=UserDetailsResponse)
def update_user(body: UpdateUserRequest, request: Request, email: str = Query("")):
    profile = _user_service(request).update_user(email, body.to_patch())
    return UserDetailsResponse.from_profile(profile)
