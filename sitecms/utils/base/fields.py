import re
from typing import Annotated

from bson import ObjectId
from pydantic import AfterValidator, StringConstraints

from sitecms.utils.base.errors import InvalidInput


PHONE_PATTERN = r"^[6-9]\d{9}$"
PINCODE_PATTERN = r"^\d{6}$"
SLUG_PATTERN = r"^[a-z0-9-]+$"

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def is_object_id(value: str) -> bool:
    return bool(isinstance(value, str) and _OBJECT_ID_RE.match(value))


def _check_object_id(value: str) -> str:
    if not is_object_id(value):
        raise ValueError("must be a valid id")
    return value


ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]
Phone = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PHONE_PATTERN)]
Slug = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, pattern=SLUG_PATTERN)]


def parse_object_id(value: str, label: str = "resource") -> ObjectId:
    """Turn a path parameter into an ObjectId; malformed ids are a client error, not a miss."""
    if not is_object_id(value):
        raise InvalidInput(f"Invalid {label} ID")
    return ObjectId(value)
