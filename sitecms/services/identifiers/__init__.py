"""Short human-facing codes and URL slugs.

Codes are `prefix + time component + random component`. They are not
guaranteed unique: a same-millisecond collision is improbable but possible,
and the unique index on the owning field is what finally rejects a clash.
"""
from __future__ import annotations

import random
import re
import time

from sitecms.models.user import User
from sitecms.utils.base.errors import Internal
from sitecms.utils.config import settings


USER_PREFIX = "USR"
BUSINESS_PREFIX = "BUS"
PROJECT_PREFIX = "PRJ"
TESTIMONIAL_PREFIX = "TST"
GALLERY_PREFIX = "GAL"

_rng = random.SystemRandom()


def generate_code(prefix: str) -> str:
    """Return `prefix` + last 6 digits of epoch milliseconds + 3 random digits."""
    timestamp = str(int(time.time() * 1000))[-6:]
    suffix = f"{_rng.randrange(1000):03d}"
    return f"{prefix}{timestamp}{suffix}"


def generate_user_id(digits: int | None = None) -> str:
    digits = digits or settings.user_id_digits
    return USER_PREFIX + "".join(_rng.choice("0123456789") for _ in range(digits))


def next_user_id() -> str:
    """Draw user codes until one is not taken in the credential store."""
    for _ in range(settings.user_id_max_attempts):
        candidate = generate_user_id()
        if not User.objects(user_id=candidate).first():
            return candidate
    raise Internal("Could not allocate a unique user ID")


def slugify(text: str) -> str:
    """Lowercase, drop anything outside [a-z0-9], whitespace and '-', hyphenate.

    Non-ASCII letters are stripped rather than transliterated:
    "Café México!" -> "caf-mxico".
    """
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()
