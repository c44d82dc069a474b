"""Standardized API response helpers.

Resource endpoints use one of two success shapes:
    {"message": <str>, "status": true, "data": <object or list>}
    {"data": [...], "pagination": {"page", "limit", "total", "total_pages"}}

Single-item endpoints that have no message return the object directly.
Errors are always {"error": <str>} (see dineops.main).
"""

import math
from typing import Any


def envelope(message: str, data: Any) -> dict:
    """Wrap a payload in the message/status/data envelope."""
    return {
        "message": message,
        "status": True,
        "data": data,
    }


def paginated_response(items: list, total: int, page: int, limit: int) -> dict:
    """Wrap one page of results with 1-indexed pagination metadata."""
    return {
        "data": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit) if limit else 0,
        },
    }
