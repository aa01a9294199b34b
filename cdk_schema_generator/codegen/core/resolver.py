"""
Property type resolution.

Turns a property type from the specification database into the canonical
value type, collecting the type definitions it references on the way.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict

from .schema import (
    BOOLEAN,
    DATE_TIME,
    JSON,
    NUMBER,
    STRING,
    UNDEFINED,
    PropertyType,
    PropertyTypeKind,
    UnknownPropertyTypeError,
    ValueType,
)

if TYPE_CHECKING:
    from ...database import SpecDatabase

PRIMITIVE_TYPES = {
    PropertyTypeKind.STRING: STRING,
    PropertyTypeKind.BOOLEAN: BOOLEAN,
    PropertyTypeKind.NUMBER: NUMBER,
    PropertyTypeKind.INTEGER: NUMBER,
    PropertyTypeKind.DATE_TIME: DATE_TIME,
    PropertyTypeKind.JSON: JSON,
    PropertyTypeKind.NULL: UNDEFINED,
}


@dataclass
class Resolution:
    """A resolved value type plus the type definitions it references.

    ``referenced_ids`` maps type definition id to its short name.
    """

    value_type: ValueType
    referenced_ids: Dict[str, str] = field(default_factory=dict)


class TypeResolver:
    """Resolves property types against a specification database."""

    def __init__(self, db: "SpecDatabase", tag_type_name: str = "CfnTag"):
        self.db = db
        self.tag_type = ValueType.named(tag_type_name)

    def resolve(self, property_type: PropertyType, scope: str) -> Resolution:
        """
        Resolve a property type.

        Args:
            property_type: Descriptor to resolve
            scope: Qualified name that references are nested under,
                e.g. ``AWS::S3::Bucket``

        Returns:
            Resolution with the value type and referenced type definitions
        """
        referenced_ids: Dict[str, str] = {}
        value_type = self._resolve(property_type, scope, referenced_ids)
        return Resolution(value_type, referenced_ids)

    def _resolve(
        self, property_type: PropertyType, scope: str, referenced_ids: Dict[str, str]
    ) -> ValueType:
        kind = property_type.kind

        if kind in PRIMITIVE_TYPES:
            return PRIMITIVE_TYPES[kind]

        if kind == PropertyTypeKind.TAG:
            return self.tag_type

        if kind == PropertyTypeKind.REF:
            definition = self.db.get("typeDefinition", property_type.reference)
            referenced_ids[definition.id] = definition.name
            return ValueType.named(f"{scope}.{definition.name}")

        if kind == PropertyTypeKind.ARRAY:
            return ValueType.list_of(
                self._resolve(property_type.element, scope, referenced_ids)
            )

        if kind == PropertyTypeKind.MAP:
            return ValueType.map_of(
                self._resolve(property_type.element, scope, referenced_ids)
            )

        if kind == PropertyTypeKind.UNION:
            return ValueType.union_of(
                [self._resolve(t, scope, referenced_ids) for t in property_type.types]
            )

        raise UnknownPropertyTypeError(kind)
