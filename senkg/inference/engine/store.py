import logging
from typing import Iterable, Optional

import pandas as pd

from ..model.terms import Relation, Predicate, as_attributes
from .aliases import AliasResolver
from .source import KnowledgeSource

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["subject", "relation", "object", "attributes", "inferred"]


class FactStore:
    """
    Holds, for one inference session:
      - relations: every seeded or accepted Relation, in insertion order
      - predicates: every Predicate asserted on an entity
    Both only grow. Two indexes sit beside the lists: relations by canonical
    name for candidate scans, and structural keys for duplicate checks.
    """
    def __init__(self) -> None:
        self.relations: list[Relation] = []
        self.predicates: list[Predicate] = []
        self._by_name: dict[str, list[Relation]] = {}
        self._keys: set[tuple] = set()
        self._predicate_set: set[Predicate] = set()

    def add_relation(self, relation: Relation) -> None:
        self.relations.append(relation)
        self._by_name.setdefault(relation.relation_name, []).append(relation)
        self._keys.add(relation.structural_key())
        logger.debug(f"[STORE] Added relation {relation!r}")

    def extend(self, relations: Iterable[Relation]) -> None:
        for relation in relations:
            self.add_relation(relation)

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)
        self._predicate_set.add(predicate)
        logger.debug(f"[STORE] Added predicate {predicate!r}")

    def relations_named(self, relation_name: str) -> list[Relation]:
        """Relations with the given canonical name, in insertion order."""
        return list(self._by_name.get(relation_name, ()))

    def has_predicate(self, entity: str, key: str, value: str) -> bool:
        return Predicate(entity, key, value) in self._predicate_set

    def contains(self, relation: Relation) -> bool:
        return relation.structural_key() in self._keys

    def load_from_source(self, source: KnowledgeSource, entity_ids: Iterable[str],
                         resolver: Optional[AliasResolver] = None) -> tuple[int, int]:
        """Seed the store from a knowledge source.

        Args:
            source: object answering lookup(entity_id)
            entity_ids: ids to fetch
            resolver: alias resolver applied to edge relation names

        Returns:
            Tuple of (predicates added, relations added)
        """
        resolver = resolver or AliasResolver()
        n_predicates = 0
        n_relations = 0
        for entity_id in entity_ids:
            record = source.lookup(entity_id)
            if record is None:
                logger.warning(f"[STORE] Source has no entity '{entity_id}', skipping")
                continue
            for key, value in record.attributes.items():
                self.add_predicate(Predicate(record.entity_id, key, value))
                n_predicates += 1
            for edge in record.edges:
                self.add_relation(Relation(
                    subject=record.entity_id,
                    relation_name=resolver.resolve(edge.relation),
                    object=edge.target,
                    attributes=as_attributes(edge.attributes),
                ))
                n_relations += 1
        logger.info(f"[STORE] Loaded {n_predicates} predicates and {n_relations} relations from source")
        return n_predicates, n_relations

    def to_frame(self) -> pd.DataFrame:
        """Export relations as a DataFrame, one row per relation."""
        rows = [
            {
                "subject": r.subject,
                "relation": r.relation_name,
                "object": r.object,
                "attributes": r.attribute_dict(),
                "inferred": r.inferred,
            }
            for r in self.relations
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    def __len__(self) -> int:
        return len(self.relations)
