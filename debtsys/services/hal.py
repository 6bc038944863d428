"""Helpers for the backend's Spring-Data-REST (HAL) response conventions."""

import re
from typing import Any
from urllib.parse import unquote

from debtsys.models.schemas.base import JPA_PREFIX, Relation, path_key


def unwrap_embedded(envelope: Any, resource_name: str) -> list[dict]:
    """
    Extract ``_embedded.<resource_name>`` from a collection response.

    An absent ``_embedded`` block, an absent key, or an empty/odd body all mean
    "no results" and give ``[]``. A bare JSON array is accepted as is.
    """
    if isinstance(envelope, list):
        return envelope
    if not isinstance(envelope, dict):
        return []
    embedded = envelope.get("_embedded") or {}
    items = embedded.get(resource_name) if isinstance(embedded, dict) else None
    return list(items) if isinstance(items, list) else []


def key_from_uri(uri: str, resource: str) -> str | None:
    match = re.search(rf"/{re.escape(resource)}/([^/?#]+)/?$", uri)
    if match:
        return unquote(match.group(1))
    if "/" not in uri:
        return uri or None
    return None


def self_href(data: dict) -> str | None:
    links = data.get("_links")
    if not isinstance(links, dict):
        return None
    self_link = links.get("self")
    if isinstance(self_link, dict):
        return self_link.get("href")
    return None


def decode_relation(value: Any, resource: str, key_field: str = "id") -> Relation | None:
    """
    Normalize whatever the server sent for a relation into a Relation or None.

    Accepted shapes: nested object (full or partial), HAL link object
    ``{"href": ...}``, URI string, bare key, or nothing.
    """
    if value is None or value == "" or value == {}:
        return None
    if isinstance(value, Relation):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Relation(resource=resource, key=str(value))
    if isinstance(value, str):
        key = key_from_uri(value, resource)
        return Relation(resource=resource, key=key) if key else None
    if isinstance(value, dict):
        name = value.get("name")
        if value.get(key_field) is not None:
            return Relation(resource=resource, key=str(value[key_field]), name=name)
        href = value.get("href") or self_href(value)
        if href:
            key = key_from_uri(href, resource)
            return Relation(resource=resource, key=key, name=name) if key else None
    return None


def encode_relation(value: Any, resource: str) -> str | None:
    """Write side of a relation: ``/jpa/<resource>/<key>`` or None."""
    if value is None:
        return None
    if isinstance(value, Relation):
        return value.uri
    if isinstance(value, str) and value.startswith("/"):
        return value
    return f"{JPA_PREFIX}/{resource}/{path_key(value)}"
