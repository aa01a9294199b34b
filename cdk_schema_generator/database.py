"""In-memory specification database.

Holds services, resources and type definitions from a service-spec
snapshot and answers the queries the schema generator needs:
``all``, ``lookup``, ``follow`` and ``get``. Every collection keeps the
order of the snapshot, which is the traversal order of the generator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .codegen.core.schema import PropertyType
from .logging_config import get_logger

logger = get_logger(__name__)

SERVICE = "service"
RESOURCE = "resource"
TYPE_DEFINITION = "typeDefinition"
KINDS = (SERVICE, RESOURCE, TYPE_DEFINITION)

HAS_RESOURCE = "hasResource"


class DatabaseError(Exception):
    """Base exception for specification database errors."""

    pass


class QueryError(DatabaseError, LookupError):
    """Raised for malformed queries or when ``only()`` does not match once."""

    pass


class RecordNotFoundError(DatabaseError, KeyError):
    """Raised when ``get`` is called with an unknown identifier."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass(frozen=True)
class PropertyRecord:
    """A resource attribute, resource property or type definition field."""

    type: PropertyType
    required: bool = False
    previous_types: tuple = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertyRecord":
        return cls(
            type=PropertyType.from_dict(data["type"]),
            required=bool(data.get("required", False)),
            previous_types=tuple(
                PropertyType.from_dict(t) for t in data.get("previousTypes") or ()
            ),
        )


@dataclass(frozen=True)
class ServiceRecord:
    id: str
    name: str
    cloudformation_namespace: str

    # field names used by lookup()
    FIELDS = {"name": "name", "cloudFormationNamespace": "cloudformation_namespace"}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceRecord":
        return cls(
            id=data["$id"],
            name=data["name"],
            cloudformation_namespace=data["cloudFormationNamespace"],
        )


@dataclass(frozen=True)
class ResourceRecord:
    id: str
    name: str
    cloudformation_type: str
    attributes: Dict[str, PropertyRecord] = field(default_factory=dict)
    properties: Dict[str, PropertyRecord] = field(default_factory=dict)

    FIELDS = {"name": "name", "cloudFormationType": "cloudformation_type"}

    @property
    def namespace(self) -> str:
        """CloudFormation namespace of the owning service, e.g. ``AWS::S3``."""
        return "::".join(self.cloudformation_type.split("::")[:2])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResourceRecord":
        return cls(
            id=data["$id"],
            name=data["name"],
            cloudformation_type=data["cloudFormationType"],
            attributes=_fields_from_dict(data.get("attributes")),
            properties=_fields_from_dict(data.get("properties")),
        )


@dataclass(frozen=True)
class TypeDefinitionRecord:
    id: str
    name: str
    properties: Dict[str, PropertyRecord] = field(default_factory=dict)

    FIELDS = {"name": "name"}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypeDefinitionRecord":
        return cls(
            id=data["$id"],
            name=data["name"],
            properties=_fields_from_dict(data.get("properties")),
        )


RECORD_CLASSES = {
    SERVICE: ServiceRecord,
    RESOURCE: ResourceRecord,
    TYPE_DEFINITION: TypeDefinitionRecord,
}


def _fields_from_dict(data: Optional[Dict[str, Any]]) -> Dict[str, PropertyRecord]:
    return {name: PropertyRecord.from_dict(value) for name, value in (data or {}).items()}


class QueryResult(list):
    """Ordered result set returned by ``SpecDatabase.lookup``."""

    def __init__(self, records: Iterable[Any], description: str = ""):
        super().__init__(records)
        self.description = description

    def only(self) -> Any:
        """Return the single matching record.

        Raises:
            QueryError: If zero or more than one record matched.
        """
        if len(self) != 1:
            raise QueryError(
                f"Expected exactly one match for {self.description}, found {len(self)}"
            )
        return self[0]


class SpecDatabase:
    """Read-only, ordered store of specification records."""

    def __init__(
        self,
        services: Iterable[ServiceRecord] = (),
        resources: Iterable[ResourceRecord] = (),
        type_definitions: Iterable[TypeDefinitionRecord] = (),
        relationships: Optional[Dict[str, List[tuple]]] = None,
    ):
        self._records: Dict[str, Dict[str, Any]] = {kind: {} for kind in KINDS}
        for kind, records in (
            (SERVICE, services),
            (RESOURCE, resources),
            (TYPE_DEFINITION, type_definitions),
        ):
            for record in records:
                self._records[kind][record.id] = record

        # relation name -> source id -> [target ids]
        self._relationships: Dict[str, Dict[str, List[str]]] = {}
        for relation, pairs in (relationships or {}).items():
            links = self._relationships.setdefault(relation, {})
            for source_id, target_id in pairs:
                links.setdefault(source_id, []).append(target_id)

        logger.debug(
            "Database created: %d services, %d resources, %d type definitions",
            len(self._records[SERVICE]),
            len(self._records[RESOURCE]),
            len(self._records[TYPE_DEFINITION]),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpecDatabase":
        """Build a database from a parsed JSON snapshot."""
        if not isinstance(data, dict):
            raise DatabaseError("Database snapshot must be a JSON object")

        try:
            relationships = {
                relation: [(link["from"], link["to"]) for link in links]
                for relation, links in (data.get("relationships") or {}).items()
            }
            return cls(
                services=[ServiceRecord.from_dict(r) for r in data.get(SERVICE, [])],
                resources=[ResourceRecord.from_dict(r) for r in data.get(RESOURCE, [])],
                type_definitions=[
                    TypeDefinitionRecord.from_dict(r)
                    for r in data.get(TYPE_DEFINITION, [])
                ],
                relationships=relationships,
            )
        except KeyError as e:
            raise DatabaseError(f"Malformed database snapshot: missing {e}") from e
        except (TypeError, AttributeError) as e:
            raise DatabaseError(f"Malformed database snapshot: {e}") from e

    def _collection(self, kind: str) -> Dict[str, Any]:
        if kind not in self._records:
            raise QueryError(f"Unknown record kind: {kind}")
        return self._records[kind]

    def all(self, kind: str) -> List[Any]:
        """All records of a kind, in snapshot order."""
        return list(self._collection(kind).values())

    def get(self, kind: str, identifier: str) -> Any:
        """Return a single record by identifier."""
        try:
            return self._collection(kind)[identifier]
        except KeyError:
            raise RecordNotFoundError(f"No {kind} with id {identifier!r}") from None

    def lookup(self, kind: str, field_name: str, operator: str, value: Any) -> QueryResult:
        """Return the records of ``kind`` whose ``field_name`` matches ``value``."""
        if operator != "equals":
            raise QueryError(f"Unsupported lookup operator: {operator}")

        record_class = RECORD_CLASSES.get(kind)
        if record_class is None or field_name not in record_class.FIELDS:
            raise QueryError(f"Cannot look up {kind} by {field_name}")

        attribute = record_class.FIELDS[field_name]
        matches = [
            record
            for record in self._collection(kind).values()
            if getattr(record, attribute) == value
        ]
        return QueryResult(matches, f"{kind}.{field_name} == {value!r}")

    def follow(self, relation: str, record: Any) -> List[Any]:
        """Return the records related to ``record`` through ``relation``."""
        if relation != HAS_RESOURCE:
            raise QueryError(f"Unknown relationship: {relation}")
        target_ids = self._relationships.get(relation, {}).get(record.id, [])
        return [self.get(RESOURCE, target_id) for target_id in target_ids]
