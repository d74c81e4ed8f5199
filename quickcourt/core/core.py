import math
from typing import Any, Dict

def paginate(query: Any, page: int, limit: int) -> Dict[str, Any]:
    """
    Run ``query`` for one page and wrap it in the list envelope used by the API.

    ``page`` is 1-based. ``total_pages`` is 0 when nothing matches.
    """
    total = query.count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return {
        "items": items,
        "total": total,
        "total_pages": math.ceil(total / limit) if total else 0,
        "current_page": page,
    }
