"""
Knowledge-source capability used to seed a fact store.

A source answers one question: given an entity id, what attributes does the
entity carry and which outgoing edges start at it. Backends (a graph service,
a file, a test double) implement ``lookup``; the engine holds no data itself.
"""
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Edge:
    """An outgoing edge of an entity; relation may be an alias."""
    relation: str
    target: str
    attributes: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class EntityRecord:
    entity_id: str
    attributes: dict[str, str] = field(default_factory=dict)
    edges: tuple[Edge, ...] = ()


@runtime_checkable
class KnowledgeSource(Protocol):
    def lookup(self, entity_id: str) -> Optional[EntityRecord]:
        """Return the record for entity_id, or None if the source does not know it."""
        ...
