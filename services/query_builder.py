"""
Query-parameter handling shared by the list endpoints.

Turns ``page``/``limit``/``search``/``status`` strings into a Mongo filter and
a pagination window. Everything here is pure so it can be unit tested without
a database.
"""
import math
import re
from typing import Any, Dict, Optional, Sequence, Tuple

from middleware.errors import InvalidParameter

INVALID_PAGINATION_MESSAGE = "Invalid page or limit parameters"


def _parse_positive_int(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    text = str(value).strip()
    # int() alone would also take "1_0" and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        raise InvalidParameter(INVALID_PAGINATION_MESSAGE)
    parsed = int(text)
    if parsed < 1:
        raise InvalidParameter(INVALID_PAGINATION_MESSAGE)
    return parsed


def parse_pagination(page: Optional[str], limit: Optional[str], default_limit: int = 6) -> Tuple[int, int]:
    """Return ``(page, limit)``; either one missing falls back to its default"""
    return _parse_positive_int(page, 1), _parse_positive_int(limit, default_limit)


def parse_status(value: Optional[str]) -> Optional[bool]:
    """
    ``None`` means "no status filter". Any value that is present, including
    ``"false"`` or an empty string, becomes ``value == "true"``.
    """
    if value is None:
        return None
    return value == "true"


def build_search_filter(search: Optional[str], fields: Sequence[str]) -> Dict[str, Any]:
    """Case-insensitive substring match on any one of ``fields``"""
    if not search:
        return {}
    pattern = re.escape(search)
    return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in fields]}


def build_filter(
    search: Optional[str],
    fields: Sequence[str],
    status: Optional[bool] = None,
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if status is not None:
        query["status"] = status
    query.update(build_search_filter(search, fields))
    return query


def skip_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total_count: int, limit: int) -> int:
    return math.ceil(total_count / limit)
