from mongoengine import BooleanField, DateTimeField, EmailField, StringField

from sitecms.models.base import BaseDocument
from sitecms.utils.base import Role
from sitecms.utils.base.fields import PHONE_PATTERN


class User(BaseDocument):
    """Credential and profile record.

    Fields:
    - user_id (str, unique): Short uppercase login code, assigned once at creation
    - name (str)
    - email (str, unique): Stored lowercase
    - phone (str, unique): 10-digit mobile number
    - password (str, hashed): Bcrypt hash, never serialized
    - role (str): user/admin
    - is_active (bool): Inactive accounts cannot log in or use existing tokens
    - last_login_time (datetime|None)
    """
    user_id = StringField(required=True, null=False, unique=True)
    name = StringField(required=True, null=False, min_length=2, max_length=100)
    email = EmailField(required=True, null=False, unique=True)
    phone = StringField(required=True, null=False, unique=True, regex=PHONE_PATTERN)
    password = StringField(required=True, null=False)
    role = StringField(required=True, null=False, default=Role.USER.value, choices=Role.choices())
    is_active = BooleanField(required=True, null=False, default=True)
    last_login_time = DateTimeField(required=False, null=True, default=None)

    meta = {
        "collection": "users",
        "indexes": [
            {"fields": ["role"]},
            {"fields": ["-created_at"]},
        ],
    }

    def clean(self):
        if self.user_id:
            self.user_id = self.user_id.upper()
        if self.email:
            self.email = self.email.strip().lower()

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def to_output(self, fields=None, exclude=None):
        exclude = list(exclude or []) + ["password"]
        return super().to_output(fields=fields, exclude=exclude)
