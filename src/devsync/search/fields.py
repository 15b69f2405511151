"""Field descriptors: the per-entity whitelist of searchable and sortable fields.

A descriptor names a wire field (``ownerName``) and the kind of predicate it
produces. Descriptors are grouped into one :class:`EntityRegistry` per entity
type. Registries are built once at import time and are read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy.orm import InstrumentedAttribute, RelationshipProperty

from devsync.models.base import Base
from devsync.search.errors import UnknownFieldError


class FieldKind(str, Enum):
    """How a term value is interpreted for a field."""

    TEXT_PARTIAL = "text_partial"
    EXACT = "exact"
    ENUM = "enum"
    BOOLEAN = "boolean"
    RELATION_ID = "relation_id"
    RELATION_NAME = "relation_name"

    @property
    def is_relation(self) -> bool:
        return self in (FieldKind.RELATION_ID, FieldKind.RELATION_NAME)


@dataclass(frozen=True)
class FieldDescriptor:
    """Metadata for one whitelisted field.

    Column kinds read ``attribute`` on the entity model. Relation kinds read
    ``target`` on the model reached through the ``relation`` relationship.
    """

    name: str
    kind: FieldKind
    attribute: Optional[str] = None
    relation: Optional[str] = None
    target: Optional[str] = None
    enum: Optional[Type[Enum]] = None
    # RELATION_NAME only: substring match instead of equality
    partial: bool = False
    # sort-only fields (timestamps) are not accepted as search terms
    filterable: bool = True

    def __post_init__(self):
        if self.kind.is_relation:
            if not self.relation or not self.target:
                raise ValueError(f"Relation field '{self.name}' needs relation and target")
        elif not self.attribute:
            raise ValueError(f"Field '{self.name}' needs an attribute")

        if self.kind == FieldKind.ENUM and self.enum is None:
            raise ValueError(f"Enum field '{self.name}' needs an enum type")

    @property
    def sortable(self) -> bool:
        return not self.kind.is_relation


def text(name: str, attribute: Optional[str] = None) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.TEXT_PARTIAL, attribute=attribute or name)


def exact(name: str, attribute: Optional[str] = None) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.EXACT, attribute=attribute or name)


def enum_field(name: str, enum: Type[Enum], attribute: Optional[str] = None) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.ENUM, attribute=attribute or name, enum=enum)


def boolean(name: str, attribute: str) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.BOOLEAN, attribute=attribute)


def relation_id(name: str, relation: str, target: str = "id") -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.RELATION_ID, relation=relation, target=target)


def relation_name(
    name: str, relation: str, target: str = "name", partial: bool = True
) -> FieldDescriptor:
    return FieldDescriptor(
        name, FieldKind.RELATION_NAME, relation=relation, target=target, partial=partial
    )


def sort_only(name: str, attribute: str) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.EXACT, attribute=attribute, filterable=False)


@dataclass(frozen=True)
class EntityRegistry:
    """Immutable field table for one entity type.

    Also carries what the store adapter needs to run a search for the entity:
    the ORM model, the pydantic schema rows are mapped through, the identifier
    field used as default sort and tie-breaker, and loader options applied to
    the fetch query.
    """

    entity_type: str
    model: Type[Base]
    schema: Type[BaseModel]
    fields: Mapping[str, FieldDescriptor]
    id_field: str = "id"
    load_options: Tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def build(
        cls,
        entity_type: str,
        model: Type[Base],
        schema: Type[BaseModel],
        descriptors: Iterable[FieldDescriptor],
        id_field: str = "id",
        load_options: Tuple[Any, ...] = (),
    ) -> "EntityRegistry":
        """Build a registry, checking every descriptor against the model."""
        table: dict[str, FieldDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in table:
                raise ValueError(f"Duplicate field '{descriptor.name}' for {entity_type}")
            _check_model_attribute(model, descriptor)
            table[descriptor.name] = descriptor

        if id_field not in table or table[id_field].kind.is_relation:
            raise ValueError(f"Identifier field '{id_field}' must be a column of {entity_type}")

        return cls(
            entity_type=entity_type,
            model=model,
            schema=schema,
            fields=MappingProxyType(table),
            id_field=id_field,
            load_options=tuple(load_options),
        )

    def lookup(self, name: str) -> FieldDescriptor:
        """Get the descriptor for a field name, failing on a miss."""
        descriptor = self.fields.get(name)
        if descriptor is None:
            raise UnknownFieldError(self.entity_type, name)
        return descriptor

    def lookup_filter(self, name: str) -> FieldDescriptor:
        """Get the descriptor for a search term field."""
        descriptor = self.lookup(name)
        if not descriptor.filterable:
            raise UnknownFieldError(self.entity_type, name, "sort only")
        return descriptor

    def lookup_sort(self, name: str) -> FieldDescriptor:
        """Get the descriptor for a sort field."""
        descriptor = self.lookup(name)
        if not descriptor.sortable:
            raise UnknownFieldError(self.entity_type, name, "not sortable")
        return descriptor

    def column(self, descriptor: FieldDescriptor) -> InstrumentedAttribute:
        """The model column behind a column-kind descriptor."""
        if descriptor.attribute is None:
            raise ValueError(f"Field '{descriptor.name}' is not backed by a column")
        return getattr(self.model, descriptor.attribute)

    @property
    def id_column(self) -> InstrumentedAttribute:
        return self.column(self.fields[self.id_field])


def _check_model_attribute(model: Type[Base], descriptor: FieldDescriptor) -> None:
    name = descriptor.relation if descriptor.kind.is_relation else descriptor.attribute
    if not isinstance(getattr(model, name or "", None), InstrumentedAttribute):
        raise ValueError(f"{model.__name__} has no mapped attribute '{name}'")

    if descriptor.kind.is_relation:
        prop = getattr(model, name).property
        if not isinstance(prop, RelationshipProperty):
            raise ValueError(f"{model.__name__}.{name} is not a relationship")
        related = prop.mapper.class_
        if not isinstance(getattr(related, descriptor.target or "", None), InstrumentedAttribute):
            raise ValueError(f"{related.__name__} has no mapped attribute '{descriptor.target}'")
