"""Credential store operations on top of the `User` document."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from mongoengine import Q

from sitecms.models.user import User
from sitecms.services.auth import hash_password, verify_password
from sitecms.services.identifiers import next_user_id
from sitecms.utils.base import Role
from sitecms.utils.base.errors import Conflict, Forbidden, InvalidOperation, NotFound, Unauthorized
from sitecms.utils.base.fields import parse_object_id
from sitecms.utils.base.pagination import paginate
from sitecms.utils.config import settings


logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("user_id", "id")


def _ensure_contact_available(email: str | None, phone: str | None, exclude: User | None = None) -> None:
    """Reject an email/phone already held by another account."""
    for field, value, message in (
        ("email", email, "Email already registered"),
        ("phone", phone, "Phone number already registered"),
    ):
        if not value:
            continue
        query = User.objects(**{field: value})
        if exclude is not None:
            query = query.filter(id__ne=exclude.id)
        if query.first():
            raise Conflict(message)


def register_user(name: str, email: str, phone: str, password: str, role: str | None = None) -> User:
    email = email.strip().lower()
    _ensure_contact_available(email, phone)

    user = User(
        user_id=next_user_id(),
        name=name,
        email=email,
        phone=phone,
        password=hash_password(password),
        role=role or Role.USER.value,
    )
    user.save()
    return user


def authenticate(user_id: str, password: str) -> User:
    """Check a login attempt and stamp the login time.

    Unknown user and wrong password are indistinguishable; an inactive account
    is only revealed once the password has been proven.
    """
    user: User | None = User.objects(user_id=user_id.strip().upper()).first()
    if not user or not verify_password(password, user.password):
        raise Unauthorized("Invalid credentials")
    if not user.is_active:
        raise Forbidden("Account is deactivated. Please contact support")

    user.last_login_time = datetime.now(timezone.utc)
    user.save()
    return user


def get_user(id: str) -> User:
    user: User | None = User.objects(id=parse_object_id(id, "user")).first()
    if not user:
        raise NotFound("User not found")
    return user


def update_user(actor: User, user: User, fields: dict[str, Any]) -> User:
    """Apply a partial profile update; identity fields are ignored.

    An admin editing their own account may not deactivate it or change its role.
    """
    fields = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS and v is not None}

    if actor.id == user.id:
        if fields.get("is_active") is False:
            raise InvalidOperation("You cannot deactivate your own account")
        if "role" in fields and fields["role"] != user.role:
            raise InvalidOperation("You cannot change your own role")

    if "email" in fields:
        fields["email"] = fields["email"].strip().lower()
    _ensure_contact_available(fields.get("email"), fields.get("phone"), exclude=user)

    if "password" in fields:
        fields["password"] = hash_password(fields["password"])

    for key, value in fields.items():
        setattr(user, key, value)
    user.save()
    return user


def toggle_user_status(actor: User, target: User) -> User:
    if actor.id == target.id:
        raise InvalidOperation("You cannot deactivate your own account")
    target.is_active = not target.is_active
    target.save()
    return target


def delete_user(actor: User, target: User) -> None:
    if actor.id == target.id:
        raise InvalidOperation("You cannot delete your own account")
    target.delete()


def list_users(
    role: str | None = None,
    is_active: bool | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int | None = None,
) -> tuple[list[User], dict[str, Any]]:
    query = User.objects
    if role:
        query = query.filter(role=role)
    if is_active is not None:
        query = query.filter(is_active=is_active)
    if search:
        term = search.strip()
        query = query.filter(
            Q(name__icontains=term) | Q(email__icontains=term) | Q(user_id__icontains=term)
        )
    return paginate(query, page=page, limit=limit)


def ensure_default_admin() -> User | None:
    """Bootstrap an admin account when the credential store is empty."""
    if User.objects.count() > 0:
        return None

    logger.info("No users found. Creating default admin user...")
    admin = User(
        user_id=settings.admin_default_user_id,
        name=settings.admin_default_name,
        email=settings.admin_default_email,
        phone=settings.admin_default_phone,
        password=hash_password(settings.admin_default_password),
        role=Role.ADMIN.value,
        is_active=True,
    )
    admin.save()
    logger.info("Default admin user created with user_id %s", admin.user_id)
    return admin
