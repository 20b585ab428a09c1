import logging
from typing import Optional

from ..model.condition import Condition, RelationPattern, PredicatePattern
from ..model.terms import Relation
from .aliases import AliasResolver
from .store import FactStore

logger = logging.getLogger(__name__)

Bindings = dict[str, str]


def _bind(bindings: Bindings, var: str, value: str) -> Optional[Bindings]:
    """Bind var to value in a copy of bindings; None if var is bound to something else."""
    bound = bindings.get(var)
    if bound is not None:
        return bindings if bound == value else None
    extended = dict(bindings)
    extended[var] = value
    return extended


class ConditionMatcher:
    """
    Matches a single rule condition against the fact store.

    For one condition and one binding map, match() returns every consistent
    extension of that map. The input map is never modified; each solution is
    its own dict, so sibling branches of the search never share state.
    """
    def __init__(self, store: FactStore, resolver: AliasResolver) -> None:
        self.store = store
        self.resolver = resolver

    def match(self, condition: Condition, bindings: Bindings) -> list[Bindings]:
        if isinstance(condition, RelationPattern):
            return self._match_relation(condition, bindings)
        if isinstance(condition, PredicatePattern):
            return self._match_predicate(condition, bindings)
        raise TypeError(f"Unsupported condition type: {type(condition).__name__}")

    def _match_relation(self, pattern: RelationPattern, bindings: Bindings) -> list[Bindings]:
        relation_name = self.resolver.resolve(pattern.relation)
        candidates = self.store.relations_named(relation_name)
        logger.debug(f"[MATCH] {pattern!r}: {len(candidates)} candidates for '{relation_name}' under {bindings}")

        solutions: list[Bindings] = []
        for fact in candidates:
            extended = self._unify(pattern, fact, bindings)
            if extended is not None:
                solutions.append(extended)
        logger.debug(f"[MATCH] {pattern!r}: {len(solutions)} solutions")
        return solutions

    def _unify(self, pattern: RelationPattern, fact: Relation, bindings: Bindings) -> Optional[Bindings]:
        extended = _bind(bindings, pattern.var1, fact.subject)
        if extended is None:
            return None
        extended = _bind(extended, pattern.var2, fact.object)
        if extended is None:
            return None
        for attr in pattern.attributes:
            if not fact.has_attribute(attr.key, attr.value):
                return None
        if extended is bindings:
            # Both variables were already bound; hand back a fresh map all the same
            extended = dict(bindings)
        return extended

    def _match_predicate(self, pattern: PredicatePattern, bindings: Bindings) -> list[Bindings]:
        entity = bindings.get(pattern.var)
        if entity is None:
            logger.debug(f"[MATCH] {pattern!r}: variable {pattern.var} is unbound, no solutions")
            return []
        if self.store.has_predicate(entity, pattern.key, pattern.value):
            return [dict(bindings)]
        logger.debug(f"[MATCH] {pattern!r}: {entity} lacks {pattern.key}={pattern.value!r}")
        return []
