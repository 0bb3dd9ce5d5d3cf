from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field

from sitecms.models.user import User
from sitecms.services.auth import require_admin
from sitecms.services.users import delete_user, get_user, list_users, toggle_user_status, update_user
from sitecms.utils.base import Role
from sitecms.utils.base.fields import Phone
from sitecms.utils.base.response import success_response


router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def list_all(
    role: Role | None = None,
    is_active: bool | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(0, ge=0),
) -> JSONResponse:
    """ADMIN: Users newest first; `limit=0` returns everyone on one page."""
    users, pagination = list_users(
        role=role.value if role else None,
        is_active=is_active,
        search=search,
        page=page,
        limit=limit,
    )
    return success_response(
        {"users": [u.to_output() for u in users], "pagination": pagination},
        "Users retrieved successfully",
    )


@router.get("/{id}")
def get_one(id: str) -> JSONResponse:
    """ADMIN: Single user by store id."""
    user = get_user(id)
    return success_response({"user": user.to_output()}, "User retrieved successfully")


class UpdateUserBody(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=100)
    email: EmailStr | None = None
    phone: Phone | None = None
    role: Role | None = None
    is_active: bool | None = None
    password: str | None = Field(None, min_length=6)

@router.put("/{id}")
def update(id: str, body: UpdateUserBody, current_user: User = Depends(require_admin)) -> JSONResponse:
    """ADMIN: Partial profile update; the login code cannot change."""
    user = get_user(id)
    fields = body.model_dump(exclude_unset=True)
    if body.role:
        fields["role"] = body.role.value
    user = update_user(current_user, user, fields)
    return success_response({"user": user.to_output()}, "User updated successfully")


@router.delete("/{id}")
def delete(id: str, current_user: User = Depends(require_admin)) -> JSONResponse:
    """ADMIN: Remove another account."""
    target = get_user(id)
    delete_user(current_user, target)
    return success_response(None, "User deleted successfully")


@router.patch("/{id}/toggle-status")
def toggle_status(id: str, current_user: User = Depends(require_admin)) -> JSONResponse:
    """ADMIN: Flip another account between active and inactive."""
    target = get_user(id)
    user = toggle_user_status(current_user, target)
    state = "activated" if user.is_active else "deactivated"
    return success_response({"user": user.to_output()}, f"User {state} successfully")
