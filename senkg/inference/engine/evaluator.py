import logging
from typing import Optional

from ..model.rule import Rule, Conclusion
from ..model.terms import Relation
from .aliases import AliasResolver
from .matcher import ConditionMatcher, Bindings

logger = logging.getLogger(__name__)


class RuleEvaluator:
    """
    Evaluates one rule against the fact store as a left-to-right join:
      - the frontier starts as a single empty binding map
      - each condition replaces the frontier with every extension the
        matcher finds for every map in it
      - an empty frontier ends the rule early with no conclusions
    Each surviving map instantiates the conclusion once.
    """
    def __init__(self, matcher: ConditionMatcher, resolver: AliasResolver) -> None:
        self.matcher = matcher
        self.resolver = resolver

    def bindings(self, rule: Rule) -> list[Bindings]:
        """Return every binding map satisfying all conditions of the rule."""
        if not rule.conditions:
            logger.warning(f"[EVAL] Rule '{rule.name}' has no conditions; unconditional rules are rejected")
            return []

        frontier: list[Bindings] = [{}]
        for idx, condition in enumerate(rule.conditions):
            next_frontier: list[Bindings] = []
            for bindings in frontier:
                next_frontier.extend(self.matcher.match(condition, bindings))
            frontier = next_frontier
            logger.debug(f"[EVAL] Rule '{rule.name}' condition {idx} ({condition!r}): frontier={len(frontier)}")
            if not frontier:
                break
        return frontier

    def apply(self, rule: Rule) -> list[Relation]:
        results: list[Relation] = []
        for bindings in self.bindings(rule):
            relation = self.instantiate(rule.conclusion, bindings)
            if relation is None:
                logger.debug(f"[EVAL] Rule '{rule.name}': discarded conclusion with empty endpoint under {bindings}")
                continue
            results.append(relation)
        logger.debug(f"[EVAL] Rule '{rule.name}' produced {len(results)} conclusions")
        return results

    def instantiate(self, conclusion: Conclusion, bindings: Bindings) -> Optional[Relation]:
        # Unbound conclusion tokens are taken literally
        subject = bindings.get(conclusion.var1, conclusion.var1)
        obj = bindings.get(conclusion.var2, conclusion.var2)
        if not subject or not obj:
            return None
        return Relation(
            subject=subject,
            relation_name=self.resolver.resolve(conclusion.relation_name),
            object=obj,
            attributes=tuple(conclusion.attributes),
            inferred=True,
        )
