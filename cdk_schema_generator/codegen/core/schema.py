"""
Core type representation for schema generation.

Defines the property-type union read from the specification database,
the canonical value-type union written to the output documents, and the
output records for resources and property types.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple
from enum import Enum


class SchemaGenerationError(Exception):
    """Base exception for schema generation errors."""

    pass


class UnknownPropertyTypeError(SchemaGenerationError):
    """Raised when a property type carries a tag the generator cannot map."""

    def __init__(self, tag: Any):
        super().__init__(f"Unknown property type tag: {tag!r}")
        self.tag = tag


class PropertyTypeKind(Enum):
    """Tags of the property types found in the specification database."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    INTEGER = "integer"
    DATE_TIME = "date-time"
    JSON = "json"
    TAG = "tag"
    NULL = "null"
    REF = "ref"
    ARRAY = "array"
    MAP = "map"
    UNION = "union"


@dataclass(frozen=True)
class PropertyType:
    """A property type descriptor.

    Only the attributes relevant to ``kind`` are set: ``reference`` for
    REF, ``element`` for ARRAY and MAP, ``types`` for UNION.
    """

    kind: PropertyTypeKind
    reference: Optional[str] = None
    element: Optional["PropertyType"] = None
    types: Tuple["PropertyType", ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertyType":
        """Parse a service-spec property type (``{"type": ..., ...}``)."""
        tag = data.get("type") if isinstance(data, dict) else None
        try:
            kind = PropertyTypeKind(tag)
        except ValueError:
            raise UnknownPropertyTypeError(tag) from None

        if kind == PropertyTypeKind.REF:
            return cls(kind, reference=data["reference"]["$ref"])
        if kind in (PropertyTypeKind.ARRAY, PropertyTypeKind.MAP):
            return cls(kind, element=cls.from_dict(data["element"]))
        if kind == PropertyTypeKind.UNION:
            return cls(kind, types=tuple(cls.from_dict(t) for t in data["types"]))
        return cls(kind)

    # Convenience constructors, mostly used when building snapshots in code

    @classmethod
    def ref(cls, type_id: str) -> "PropertyType":
        return cls(PropertyTypeKind.REF, reference=type_id)

    @classmethod
    def array(cls, element: "PropertyType") -> "PropertyType":
        return cls(PropertyTypeKind.ARRAY, element=element)

    @classmethod
    def map(cls, element: "PropertyType") -> "PropertyType":
        return cls(PropertyTypeKind.MAP, element=element)

    @classmethod
    def union(cls, *types: "PropertyType") -> "PropertyType":
        return cls(PropertyTypeKind.UNION, types=tuple(types))


class ValueKind(Enum):
    """Shapes of the canonical value type."""

    PRIMITIVE = "primitive"
    NAMED = "named"
    LIST_OF = "listOf"
    MAP_OF = "mapOf"
    UNION_OF = "unionOf"


@dataclass(frozen=True)
class ValueType:
    """Canonical, language-neutral value type written to the output."""

    kind: ValueKind
    name: Optional[str] = None  # primitive kind or qualified type name
    element: Optional["ValueType"] = None
    members: Tuple["ValueType", ...] = ()

    @classmethod
    def primitive(cls, name: str) -> "ValueType":
        return cls(ValueKind.PRIMITIVE, name=name)

    @classmethod
    def named(cls, name: str) -> "ValueType":
        return cls(ValueKind.NAMED, name=name)

    @classmethod
    def list_of(cls, element: "ValueType") -> "ValueType":
        return cls(ValueKind.LIST_OF, element=element)

    @classmethod
    def map_of(cls, element: "ValueType") -> "ValueType":
        return cls(ValueKind.MAP_OF, element=element)

    @classmethod
    def union_of(cls, members: List["ValueType"]) -> "ValueType":
        return cls(ValueKind.UNION_OF, members=tuple(members))

    def to_spec(self) -> Dict[str, Any]:
        """Convert to the JSON shape used in the output documents."""
        if self.kind in (ValueKind.PRIMITIVE, ValueKind.NAMED):
            return {self.kind.value: self.name}
        if self.kind in (ValueKind.LIST_OF, ValueKind.MAP_OF):
            return {self.kind.value: self.element.to_spec()}
        return {self.kind.value: [member.to_spec() for member in self.members]}


STRING = ValueType.primitive("string")
BOOLEAN = ValueType.primitive("boolean")
NUMBER = ValueType.primitive("number")
DATE_TIME = ValueType.primitive("date-time")
JSON = ValueType.primitive("json")
UNDEFINED = ValueType.primitive("undefined")


@dataclass
class FieldSpec:
    """A resolved attribute or property."""

    name: str
    value_type: ValueType
    required: Optional[bool] = None  # None for attributes

    def to_dict(self) -> Dict[str, Any]:
        result = {"name": self.name, "valueType": self.value_type.to_spec()}
        if self.required is not None:
            result["required"] = self.required
        return result


@dataclass
class ResourceSpec:
    """Output entry for one resource."""

    construct: Dict[str, Dict[str, str]]
    attributes: Dict[str, FieldSpec] = field(default_factory=dict)
    properties: Dict[str, FieldSpec] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "construct": self.construct,
            "attributes": {k: v.to_dict() for k, v in self.attributes.items()},
            "properties": {k: v.to_dict() for k, v in self.properties.items()},
        }


@dataclass
class PropertyTypeSpec:
    """Output entry for one nested property type."""

    name: Dict[str, Dict[str, str]]
    properties: Dict[str, FieldSpec] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "properties": {k: v.to_dict() for k, v in self.properties.items()},
        }


@dataclass
class Specification:
    """The complete generated schema.

    ``cdk_resources`` and ``cdk_types`` are the two output documents.
    ``property_type_keys`` maps type definition ids to their qualified
    property type name and ``modules`` maps service names to the resource
    types they contain.
    """

    cdk_resources: Dict[str, ResourceSpec] = field(default_factory=dict)
    cdk_types: Dict[str, PropertyTypeSpec] = field(default_factory=dict)
    property_type_keys: Dict[str, str] = field(default_factory=dict)
    modules: Dict[str, List[str]] = field(default_factory=dict)

    def resources_document(self) -> Dict[str, Any]:
        return {k: v.to_dict() for k, v in self.cdk_resources.items()}

    def types_document(self) -> Dict[str, Any]:
        return {k: v.to_dict() for k, v in self.cdk_types.items()}
