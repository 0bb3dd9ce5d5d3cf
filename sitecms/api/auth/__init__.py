from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field

from sitecms.models.user import User
from sitecms.services.auth import (
    clear_token_cookie,
    issue_token,
    require_admin,
    resolve_session,
    set_token_cookie,
)
from sitecms.services.users import authenticate, register_user
from sitecms.utils.base import Role
from sitecms.utils.base.fields import Phone
from sitecms.utils.base.response import success_response


router = APIRouter()


class RegisterBody(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: Phone
    password: str = Field(min_length=6)
    role: Role | None = None

@router.post("/register")
def register(body: RegisterBody, _: User = Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create an account; the login code is generated."""
    user = register_user(
        name=body.name.strip(),
        email=body.email,
        phone=body.phone,
        password=body.password,
        role=body.role.value if body.role else None,
    )
    return success_response({"user": user.to_output()}, "User registered successfully", status_code=201)


class LoginBody(BaseModel):
    # Generated codes are USR + digits; bootstrap admins may use a configured code.
    user_id: str = Field(min_length=3, max_length=20)
    password: str = Field(min_length=1)

@router.post("/login")
def login(body: LoginBody) -> JSONResponse:
    """PUBLIC: Exchange login code + password for a session token (cookie and body)."""
    user = authenticate(body.user_id, body.password)
    token = issue_token({"user_id": user.user_id, "email": user.email})
    response = success_response({"user": user.to_output(), "token": token}, "Login successful")
    set_token_cookie(response, token)
    return response


@router.post("/logout")
def logout() -> JSONResponse:
    """PUBLIC: Clear the session cookie. Issued tokens stay valid until they expire."""
    response = success_response(None, "Logout successful")
    clear_token_cookie(response)
    return response


@router.get("/check-login")
def check_login(request: Request) -> JSONResponse:
    """PUBLIC: Report session status; never fails."""
    user = resolve_session(request)
    if not user:
        return success_response({"is_logged_in": False}, "Not logged in")
    return success_response(
        {
            "is_logged_in": True,
            "user": {
                "user_id": user.user_id,
                "name": user.name,
                "email": user.email,
                "role": user.role,
            },
        },
        "Session valid",
    )
