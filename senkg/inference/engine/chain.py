"""
Chain-depth guard.

A chain-shaped rule walks several relation hops, e.g.

    IF (A ~genealogy B AND B ~genealogy C) THEN RELATE(A, C, "genealogy")

Its depth is the number of relation conditions. Rules deeper than the
caller's max_depth are skipped as a whole.
"""
from ..model.rule import Rule


def hop_count(rule: Rule) -> int:
    return len(rule.relation_patterns())


def is_chain_shaped(rule: Rule) -> bool:
    patterns = rule.relation_patterns()
    if len(patterns) < 2:
        return False

    linked = False
    seen_objects: set[str] = set()
    for pattern in patterns:
        if pattern.var1 in seen_objects:
            linked = True
        seen_objects.add(pattern.var2)
    if not linked:
        return False

    conclusion = rule.conclusion
    return conclusion.var1 == patterns[0].var1 and conclusion.var2 == patterns[-1].var2


def exceeds_depth(rule: Rule, max_depth: int) -> bool:
    return is_chain_shaped(rule) and hop_count(rule) > max_depth
