import pytest

from senkg.inference.engine.aliases import AliasResolver
from senkg.inference.engine.evaluator import RuleEvaluator
from senkg.inference.engine.matcher import ConditionMatcher
from senkg.inference.engine.store import FactStore
from senkg.inference.model.condition import RelationPattern, PredicatePattern
from senkg.inference.model.rule import Conclusion, Rule
from senkg.inference.model.terms import Attribute, Relation, Predicate

GENEALOGY = "relation/family-link"
PARENT = (Attribute("role", "parent of"),)


@pytest.fixture
def store():
    store = FactStore()
    store.add_relation(Relation("John", GENEALOGY, "Mary", PARENT))
    store.add_relation(Relation("Mary", GENEALOGY, "Alice", PARENT))
    store.add_predicate(Predicate("John", "gender", "male"))
    return store


@pytest.fixture
def evaluator(store):
    resolver = AliasResolver({"genealogy": GENEALOGY})
    return RuleEvaluator(ConditionMatcher(store, resolver), resolver)


def test_father_of_binds_only_male_parent(evaluator, father_of_rule):
    assert evaluator.bindings(father_of_rule) == [{"A": "John", "B": "Mary"}]
    [relation] = evaluator.apply(father_of_rule)
    assert relation == Relation("John", GENEALOGY, "Mary", (Attribute("label", "father of"),))
    assert relation.inferred


def test_join_across_two_relation_conditions(evaluator, transitive_rule):
    assert evaluator.bindings(transitive_rule) == [{"A": "John", "B": "Mary", "C": "Alice"}]
    assert evaluator.apply(transitive_rule) == [
        Relation("John", GENEALOGY, "Alice", (Attribute("role", "grandparent"),)),
    ]


def test_rule_without_conditions_is_rejected(evaluator):
    rule = Rule("everything", (), Conclusion("A", "B", "genealogy"))
    assert evaluator.bindings(rule) == []
    assert evaluator.apply(rule) == []


def test_empty_frontier_stops_the_rule(evaluator):
    rule = Rule(
        "never",
        (PredicatePattern("A", "gender", "male"), RelationPattern("A", "genealogy", "B")),
        Conclusion("A", "B", "genealogy"),
    )
    assert evaluator.apply(rule) == []


def test_unbound_conclusion_token_is_used_literally(evaluator):
    rule = Rule(
        "tag_parent",
        (RelationPattern("A", "genealogy", "B", PARENT),),
        Conclusion("A", "family", "member_of"),
    )
    assert evaluator.apply(rule) == [
        Relation("John", "member_of", "family"),
        Relation("Mary", "member_of", "family"),
    ]


def test_conclusion_with_empty_endpoint_is_discarded(store, evaluator):
    store.add_relation(Relation("", "knows", "Mary"))
    rule = Rule("knows_back", (RelationPattern("A", "knows", "B"),), Conclusion("B", "A", "knows"))
    assert evaluator.apply(rule) == []


def test_conclusion_attributes_are_copied_verbatim(evaluator):
    rule = Rule(
        "labelled",
        (RelationPattern("A", "genealogy", "B", PARENT),),
        Conclusion("B", "A", "genealogy", (Attribute("label", "A"), Attribute("of", "B"))),
    )
    relations = evaluator.apply(rule)
    assert relations[0].attribute_dict() == {"label": "A", "of": "B"}
    assert relations[0].subject == "Mary" and relations[0].object == "John"
