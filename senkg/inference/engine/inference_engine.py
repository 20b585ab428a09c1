import logging

import os
logger = logging.getLogger(__name__)
log_level_str = os.environ.get("SEN_DEBUG", "INFO").upper()
try:
    logger.setLevel(getattr(logging, log_level_str))
except AttributeError:
    logger.setLevel(logging.INFO)
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    formatter = logging.Formatter('[%(levelname)s] %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

from typing import Optional
import pandas as pd

from ..model.rule import RuleSet
from ..model.terms import Relation, Predicate, as_attributes
from .aliases import AliasResolver
from .chain import exceeds_depth, hop_count
from .config import config
from .context import matches_context, MATCH_ANY
from .dedup import DedupIndex
from .evaluator import RuleEvaluator
from .matcher import ConditionMatcher
from .source import KnowledgeSource
from .store import FactStore


class InferenceEngine:
    """
    A forward-chaining engine over typed binary relations and entity predicates.

    Rules come grouped in contexts from a RuleSet; infer() evaluates them in
    rounds. Facts derived in one round are staged and only become visible to
    matching in the next, so the rule order inside a round does not change
    the result. Evaluation stops at the first round that derives nothing new,
    or after max_iterations rounds.

    Not thread-safe: callers must serialize add_fact, add_predicate and infer
    on a given instance.
    """
    def __init__(self, rule_set: Optional[RuleSet] = None) -> None:
        self.store = FactStore()
        self._rule_set = RuleSet()
        self._resolver = AliasResolver()
        if rule_set is not None:
            self.load_rules(rule_set)

    @property
    def rule_set(self) -> RuleSet:
        return self._rule_set

    @property
    def aliases(self) -> AliasResolver:
        return self._resolver

    @property
    def relations(self) -> list[Relation]:
        return list(self.store.relations)

    @property
    def predicates(self) -> list[Predicate]:
        return list(self.store.predicates)

    def load_rules(self, rule_set: RuleSet) -> None:
        """Install a parsed rule set. Facts already in the store are kept as they are."""
        self._rule_set = rule_set
        self._resolver = AliasResolver(rule_set.aliases)
        logger.info(f"[RULES] Loaded {len(rule_set.contexts)} contexts, "
                    f"{len(rule_set.rules())} rules, {len(rule_set.aliases)} aliases")
        for ctx in rule_set.contexts:
            logger.debug(f"[RULES] Context '{ctx.pattern}': {[r.name for r in ctx.rules]}")

    def parse(self, text: str) -> RuleSet:
        """Parse rule-language text and install the result. Syntax errors propagate."""
        from ..parser.rule_parser import parse_rules
        rule_set = parse_rules(text)
        self.load_rules(rule_set)
        return rule_set

    def add_fact(self, subject: str, relation: str, obj: str, attributes=()) -> Relation:
        """Add a seeded relation. An alias is resolved to its canonical name on insertion."""
        fact = Relation(
            subject=subject,
            relation_name=self._resolver.resolve(relation),
            object=obj,
            attributes=as_attributes(attributes),
        )
        self.store.add_relation(fact)
        return fact

    def add_predicate(self, entity: str, key: str, value: str) -> Predicate:
        predicate = Predicate(entity, key, value)
        self.store.add_predicate(predicate)
        return predicate

    def load_from_source(self, source: KnowledgeSource, *entity_ids: str) -> tuple[int, int]:
        return self.store.load_from_source(source, entity_ids, self._resolver)

    def infer(self, context_filter: Optional[str] = None, max_depth: Optional[int] = None,
              max_iterations: Optional[int] = None) -> list[Relation]:
        """Run forward chaining and return the new relations in derivation order.

        Args:
            context_filter: pattern selecting contexts, e.g. "text/*"; None uses the configured filter, "*/*" selects all
            max_depth: chain-shaped rules with more relation hops are skipped
            max_iterations: upper bound on the number of rounds

        Returns:
            List of Relation derived by this call, without duplicates
        """
        if context_filter is None:
            context_filter = config.get_context_filter()
        if max_depth is None:
            max_depth = config.get_max_depth()
        if max_iterations is None:
            max_iterations = config.get_max_iterations()
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
        if context_filter == MATCH_ANY:
            context_filter = None

        contexts = [ctx for ctx in self._rule_set.contexts if matches_context(ctx.pattern, context_filter)]
        logger.debug(f"[INFER] filter={context_filter or MATCH_ANY} matched contexts: {[c.pattern for c in contexts]}")

        matcher = ConditionMatcher(self.store, self._resolver)
        evaluator = RuleEvaluator(matcher, self._resolver)

        accumulated: list[Relation] = []
        for iteration in range(1, max_iterations + 1):
            round_relations: list[Relation] = []
            dedup = DedupIndex(self.store)
            for ctx in contexts:
                for rule in ctx.rules:
                    if exceeds_depth(rule, max_depth):
                        logger.debug(f"[INFER][ITER {iteration}] Skipping chain rule '{rule.name}': "
                                     f"{hop_count(rule)} hops > max_depth={max_depth}")
                        continue
                    for relation in evaluator.apply(rule):
                        if dedup.accept(relation):
                            logger.debug(f"[INFER][ITER {iteration}] '{rule.name}' inferred {relation!r}")
                            round_relations.append(relation)

            if not round_relations:
                logger.debug(f"[INFER][ITER {iteration}] No new relations, fixpoint reached")
                break
            accumulated.extend(round_relations)
            # Staged: visible to matching from the next round on
            self.store.extend(round_relations)
            logger.debug(f"[INFER][ITER {iteration}] {len(round_relations)} new relations")

        logger.info(f"[INFER] Derived {len(accumulated)} new relations")
        return accumulated

    def relations_frame(self) -> pd.DataFrame:
        return self.store.to_frame()
