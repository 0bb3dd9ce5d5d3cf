import re
from types import SimpleNamespace

import pytest

from sitecms.services import identifiers
from sitecms.services.identifiers import generate_code, generate_user_id, next_user_id, slugify
from sitecms.utils.base.errors import Internal


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Café México!", "caf-mxico"),
        ("Green   Valley", "green-valley"),
        ("Sea -- View", "sea-view"),
        ("Phase 2 Towers", "phase-2-towers"),
        ("ALREADY-slugged", "already-slugged"),
    ],
)
def test_slugify_strips_rather_than_transliterates(text, expected):
    assert slugify(text) == expected


def test_generate_code_shape():
    assert re.fullmatch(r"PRJ\d{9}", generate_code("PRJ"))
    assert re.fullmatch(r"GAL\d{9}", generate_code("GAL"))


def test_generate_user_id_shape():
    assert re.fullmatch(r"USR\d{2}", generate_user_id())
    assert re.fullmatch(r"USR\d{4}", generate_user_id(digits=4))


def test_next_user_id_skips_codes_in_use(make_user, monkeypatch):
    make_user("USR11", "taken@acme.com", "9876500011")
    candidates = iter(["USR11", "USR11", "USR12"])
    monkeypatch.setattr(identifiers, "generate_user_id", lambda digits=None: next(candidates))

    assert next_user_id() == "USR12"


def test_next_user_id_gives_up_after_attempt_cap(make_user, monkeypatch):
    make_user("USR11", "taken@acme.com", "9876500011")
    monkeypatch.setattr(identifiers, "generate_user_id", lambda digits=None: "USR11")
    monkeypatch.setattr(identifiers, "settings", SimpleNamespace(user_id_max_attempts=3, user_id_digits=2))

    with pytest.raises(Internal):
        next_user_id()
