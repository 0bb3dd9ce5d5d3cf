import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import certifi
from fastapi import FastAPI
from mongoengine import connect, disconnect

from sitecms.utils.config import settings


logger = logging.getLogger(__name__)


def init_mongo(**kwargs) -> None:
    options = {"tz_aware": True, **kwargs}
    if settings.mongo_srv:
        options.setdefault("tlsCAFile", certifi.where())
    connect(host=settings.mongo_uri, alias="default", **options)


def close_mongo() -> None:
    disconnect(alias="default")


@asynccontextmanager
async def mongo_lifespan(app: FastAPI) -> AsyncIterator[None]:
    from sitecms.services.users import ensure_default_admin

    init_mongo()
    try:
        ensure_default_admin()
        yield
    finally:
        close_mongo()
