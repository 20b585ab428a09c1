from typing import Iterable

from ..model.terms import Relation
from .store import FactStore


def same_relation(a: Relation, b: Relation) -> bool:
    """Structural equality: endpoints, name, and attributes as an unordered collection."""
    return a.structural_key() == b.structural_key()


def is_duplicate(relation: Relation, round_relations: Iterable[Relation], store: FactStore) -> bool:
    if store.contains(relation):
        return True
    return any(same_relation(relation, other) for other in round_relations)


class DedupIndex:
    """
    The relations accepted in the current round, bucketed by structural key.
    accept() runs is_duplicate against the matching bucket only, which gives
    the same answer as a scan of the whole round.
    """
    def __init__(self, store: FactStore) -> None:
        self.store = store
        self._round: dict[tuple, list[Relation]] = {}

    def accept(self, relation: Relation) -> bool:
        """Record relation and return True unless it duplicates the round or the store."""
        key = relation.structural_key()
        bucket = self._round.setdefault(key, [])
        if is_duplicate(relation, bucket, self.store):
            return False
        bucket.append(relation)
        return True
