"""Base resource type shared by every Chef server collection.

A resource subclass declares a ``ResourceType`` describing where its
collection lives on the server and which attribute identifies an instance.
Instances hold their attributes in an ``AttributeMap`` and can persist
themselves through a ``ResourceClient`` bound to their connection.
"""

import functools
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ValidationError

from ..errors import HTTPConflict, InvalidResource
from .attributes import AttributeMap

if TYPE_CHECKING:
    from ..connection import Connection
    from .resource_client import ResourceClient

logger = logging.getLogger(__name__)


def pluralize(word: str) -> str:
    """Pluralize a resource type tag ("node" -> "nodes", "policy" -> "policies")."""
    if word.endswith("y") and word[-2:-1] not in ("a", "e", "i", "o", "u"):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    return word + "s"


@dataclass(frozen=True)
class ResourceType:
    """Immutable description of a resource collection.

    Attributes:
        chef_type: Type tag sent as the ``chef_type`` attribute.
        chef_id: Name of the attribute that identifies an instance.
        resource_path: Collection path; defaults to the pluralized type tag.
        json_class: Value sent as the ``json_class`` attribute, if any.
        schema: Pydantic model the attributes are validated against.
    """

    chef_type: str
    chef_id: str
    resource_path: str = ""
    json_class: str | None = None
    schema: type[BaseModel] | None = None

    def __post_init__(self) -> None:
        if not self.resource_path:
            object.__setattr__(self, "resource_path", pluralize(self.chef_type))

    def default_attributes(self) -> dict[str, Any]:
        defaults: dict[str, Any] = {}
        if self.schema is not None:
            for name, field in self.schema.model_fields.items():
                if not field.is_required():
                    defaults[field.alias or name] = field.get_default(
                        call_default_factory=True
                    )
        defaults["chef_type"] = self.chef_type
        if self.json_class:
            defaults["json_class"] = self.json_class
        return defaults


@functools.total_ordering
class Resource:
    """A typed local representation of one remote resource.

    Equality, ordering and hashing are based solely on the identity
    attribute value.
    """

    resource_type: ClassVar[ResourceType]

    def __init__(
        self,
        connection: "Connection",
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self._connection = connection
        self._attributes = AttributeMap(self.resource_type.default_attributes())
        if attributes:
            self._attributes.merge(attributes)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    @property
    def attributes(self) -> AttributeMap:
        return self._attributes

    @property
    def chef_id(self) -> Any:
        """Value of this resource's identity attribute."""
        return self._attributes.get(self.resource_type.chef_id)

    def __getitem__(self, key: str) -> Any:
        return self._attributes.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def has_attribute(self, key: str) -> bool:
        """Return True if the attribute is set to a non-empty value."""
        value = self._attributes.get(key)
        if value is None or value is False:
            return False
        if isinstance(value, (str, list, dict, tuple, set)):
            return len(value) > 0
        return True

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @property
    def errors(self) -> list[str]:
        """Validation errors for the current attributes."""
        schema = self.resource_type.schema
        if schema is None:
            return []
        try:
            schema.model_validate(self._attributes.to_dict())
        except ValidationError as e:
            return [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
        return []

    def valid(self) -> bool:
        return not self.errors

    def _raise_if_invalid(self) -> None:
        errors = self.errors
        if errors:
            raise InvalidResource(errors)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _client(self) -> "ResourceClient":
        from .resource_client import ResourceClient

        return ResourceClient(self._connection, type(self))

    def save(self) -> bool:
        """Create this resource on the server, or update it if it already exists.

        Raises:
            InvalidResource: If the resource does not pass validation.
        """
        self._raise_if_invalid()
        try:
            created = self._client().create(self)
        except HTTPConflict:
            logger.debug(
                f"{self.resource_type.chef_type} '{self.chef_id}' exists, updating"
            )
            return self.update()
        self._attributes.merge(created.to_hash())
        return True

    def update(self) -> bool:
        """Push local changes to the server and merge its response onto self.

        Raises:
            InvalidResource: If the resource does not pass validation.
        """
        self._raise_if_invalid()
        updated = self._client().update(self)
        self._attributes.merge(updated.to_hash())
        return True

    def reload(self) -> "Resource":
        """Replace local attributes with the server's current copy."""
        fresh = self._client().get(self)
        self._attributes.replace(fresh.to_hash())
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_hash(self) -> dict[str, Any]:
        return self._attributes.to_dict()

    to_dict = to_hash

    def to_json(self) -> str:
        return json.dumps(self._attributes.to_dict())

    def from_hash(self, attributes: Mapping[str, Any]) -> "Resource":
        self._attributes.merge(attributes)
        return self

    def from_json(self, text: str) -> "Resource":
        return self.from_hash(json.loads(text))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.chef_id == other.chef_id

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def _sort_key(self) -> tuple[bool, Any]:
        # Resources without an identity sort last.
        return (self.chef_id is None, "" if self.chef_id is None else self.chef_id)

    def __hash__(self) -> int:
        return hash(self.chef_id)

    def __str__(self) -> str:
        return str(self._attributes.to_dict())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.resource_type.chef_id}={self.chef_id!r}>"


Reference = str | Resource


def chef_id_of(ref: Reference) -> str:
    """Extract the identity from a resource or a raw identity string."""
    chef_id = ref.chef_id if isinstance(ref, Resource) else ref
    if chef_id is None or chef_id == "":
        raise ValueError("Resource reference has no identity")
    return str(chef_id)
