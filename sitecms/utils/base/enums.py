from enum import Enum


class BaseEnum(Enum):
    @classmethod
    def choices(cls):
        return [(item.value, item.name) for item in cls]


class Role(BaseEnum):
    USER = "user"
    ADMIN = "admin"


class MergePolicy(BaseEnum):
    """How a top-level field of a settings document absorbs an update."""
    REPLACE = "replace"
    SHALLOW = "shallow"
    KEYED = "keyed"
