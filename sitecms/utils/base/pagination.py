import math
from typing import Any

from mongoengine.queryset import QuerySet


def paginate(queryset: QuerySet, page: int = 1, limit: int | None = None) -> tuple[list, dict[str, Any]]:
    """Slice a queryset newest-first and describe the page.

    A missing or zero limit returns every match on a single page.
    """
    limit = limit or 0
    total = queryset.count()

    queryset = queryset.order_by("-created_at")
    if limit > 0:
        queryset = queryset.skip((page - 1) * limit).limit(limit)
    else:
        page = 1

    pagination = {
        "total": total,
        "page": page,
        "limit": limit or total,
        "pages": math.ceil(total / limit) if limit > 0 else 1,
    }
    return list(queryset), pagination
