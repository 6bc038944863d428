import logging
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from debtsys.api.client import HttpClient, to_jsonable
from debtsys.models.schemas.base import JPA_PREFIX, path_key
from debtsys.models.schemas.user import Session
from debtsys.services.fetchers import fetch_record
from debtsys.services.hal import encode_relation, key_from_uri, self_href, unwrap_embedded

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

TIMESTAMP_FIELDS = {"created_at", "updated_at"}


def with_self_key(data: dict, resource: str, key_alias: str) -> dict:
    """Fill the identifier from ``_links.self`` when the body omits it."""
    if data.get(key_alias) is not None:
        return data
    href = self_href(data)
    key = key_from_uri(href, resource) if href else None
    if key is not None:
        data = {**data, key_alias: key}
    return data


class JpaRepository(Generic[T]):
    """
    CRUD over one ``/jpa/<resource_name>`` collection.

    Subclasses declare:
      - resource_name: path segment and ``_embedded`` key, e.g. "debtAccount"
      - key_field: identifier attribute ("code", "id", "email"), never changed by updates
      - relations: attribute -> related resource, written as URIs
      - user_scoped: writes carry ``debtSysUser`` from the caller's Session
      - normalize: raw JSON -> entity, the one place a wire shape is read
    """

    resource_name: ClassVar[str]
    key_field: ClassVar[str] = "id"
    relations: ClassVar[dict[str, str]] = {}
    user_scoped: ClassVar[bool] = False
    normalize: ClassVar[Callable[[dict], Any]]

    def __init__(self, client: HttpClient) -> None:
        self.client = client

    @property
    def collection_path(self) -> str:
        return f"{JPA_PREFIX}/{self.resource_name}"

    def item_path(self, key: Any) -> str:
        return f"{self.collection_path}/{path_key(key)}"

    def _normalize(self, data: dict) -> T:
        return type(self).normalize(data)

    # --- reads ---

    def find_all(self) -> list[T]:
        data = self.client.get(self.collection_path)
        return [self._normalize(item) for item in unwrap_embedded(data, self.resource_name)]

    def find_by_key(self, key: Any) -> Optional[T]:
        return fetch_record(self.client, self.item_path(key), self._normalize)

    # --- writes ---

    def to_payload(self, entity: T, session: Optional[Session] = None) -> dict:
        payload = entity.model_dump(
            by_alias=True,
            mode="json",
            exclude=TIMESTAMP_FIELDS | set(self.relations) | {"debt_sys_user"},
        )
        for field, resource in self.relations.items():
            payload[to_camel(field)] = encode_relation(getattr(entity, field), resource)
        if self.user_scoped:
            if session is None:
                raise ValueError(f"writing {self.resource_name} requires a Session")
            payload["debtSysUser"] = encode_relation(session.user_email, "user")
        return payload

    def create(self, entity: T, session: Optional[Session] = None) -> T:
        payload = self.to_payload(entity, session)
        key_alias = to_camel(self.key_field)
        if payload.get(key_alias) is None:
            payload.pop(key_alias, None)   # server assigns it
        data = self.client.post(self.collection_path, payload)
        created = self._normalize(data)
        logger.info("Created %s %s", self.resource_name, getattr(created, self.key_field, None))
        return created

    def update(self, key: Any, entity: T, session: Optional[Session] = None) -> T:
        payload = self.to_payload(entity, session)
        payload[to_camel(self.key_field)] = key
        data = self.client.put(self.item_path(key), payload)
        logger.info("Updated %s %s", self.resource_name, key)
        return self._normalize(data)

    def patch(self, key: Any, changes: dict, session: Optional[Session] = None) -> T:
        """Partial update; only the given attributes are sent."""
        payload: dict[str, Any] = {}
        for field, value in changes.items():
            if field == self.key_field:
                continue
            if field in self.relations:
                payload[to_camel(field)] = encode_relation(value, self.relations[field])
            else:
                payload[to_camel(field)] = to_jsonable(value)
        if self.user_scoped and session is not None:
            payload["debtSysUser"] = encode_relation(session.user_email, "user")
        data = self.client.patch(self.item_path(key), payload)
        logger.info("Patched %s %s: %s", self.resource_name, key, sorted(payload))
        return self._normalize(data)

    def delete(self, key: Any) -> None:
        self.client.delete(self.item_path(key))
        logger.info("Deleted %s %s", self.resource_name, key)
