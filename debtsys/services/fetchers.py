import logging
from typing import Any, Callable, Mapping, Optional, TypeVar
from debtsys.api.client import HttpClient
from debtsys.api.errors import HttpStatusError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fetch_record(
    client: HttpClient,
    path: str,
    normalize: Callable[[dict], T],
    *,
    params: Optional[Mapping[str, Any]] = None,
) -> Optional[T]:
    """
    Fetch a single resource and normalize it.

    - client: HttpClient bound to the backend
    - path: resource path, e.g. "/jpa/debtAccount/ACC1"
    - normalize: one-per-resource function turning the raw JSON into an entity
    - params: optional query string

    Returns None only when the backend says 404. Any other status error,
    transport failure or decode failure propagates so callers can tell
    "missing" apart from "broken".
    """
    try:
        data = client.get(path, params=params)
    except HttpStatusError as e:
        if e.is_not_found:
            logger.info("%s not found", path)
            return None
        raise

    # Spring answers an empty search result with an empty body
    if not data:
        return None
    return normalize(data)
