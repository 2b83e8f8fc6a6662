# routes.py
from typing import Mapping, Optional, Tuple
from urllib.parse import urlencode

LIST = "list"
ADD = "add"
EDIT = "edit"
DELETE = "delete"
CHECKIN = "checkin"

ROUTES = (LIST, ADD, EDIT, DELETE, CHECKIN)
NEEDS_ID = {EDIT, DELETE, CHECKIN}


def url_for(route: str, task_id: Optional[int] = None) -> str:
    if route not in ROUTES:
        raise KeyError(f"Unknown route: {route}")
    params = {"page": route}
    if route in NEEDS_ID:
        if task_id is None:
            raise ValueError(f"Route {route!r} needs a task id")
        params["id"] = int(task_id)
    return "?" + urlencode(params)


def _first(value):
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def resolve(query_params: Mapping) -> Tuple[str, Optional[int]]:
    """Map query parameters to (route, task_id); anything unusable is the list."""
    route = _first(query_params.get("page")) or LIST
    if route not in ROUTES:
        return LIST, None
    if route not in NEEDS_ID:
        return route, None
    try:
        return route, int(_first(query_params.get("id")))
    except (TypeError, ValueError):
        return LIST, None
