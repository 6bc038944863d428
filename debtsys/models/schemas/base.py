from urllib.parse import quote
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

JPA_PREFIX = "/jpa"


def path_key(key) -> str:
    """Percent-encode an identifier for use as one path segment."""
    return quote(str(key), safe="@")


class WireModel(BaseModel):
    # Backend speaks camelCase; python side stays snake_case
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self, **kwargs) -> dict:
        return self.model_dump(by_alias=True, mode="json", **kwargs)


class Relation(BaseModel):
    """Reference to another backend resource, e.g. a debt's owning account.

    The backend expects relations as ``/jpa/<resource>/<key>`` strings on write
    and returns them as nested objects or HAL links on read. ``name`` is only
    known when the server embedded the related object.
    """

    resource: str
    key: str
    name: str | None = None

    @property
    def uri(self) -> str:
        return f"{JPA_PREFIX}/{self.resource}/{path_key(self.key)}"
