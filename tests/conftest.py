import pytest

from senkg.inference.engine.config import config
from senkg.inference.model.terms import Attribute
from senkg.inference.model.condition import RelationPattern, PredicatePattern
from senkg.inference.model.rule import Conclusion, Rule, Context, RuleSet

GENEALOGY = "relation/family-link"


@pytest.fixture(autouse=True)
def reset_config():
    config.reset()
    yield
    config.reset()


@pytest.fixture
def father_of_rule():
    return Rule(
        name="father_of",
        conditions=(
            RelationPattern("A", "genealogy", "B", (Attribute("role", "parent of"),)),
            PredicatePattern("A", "gender", "male"),
        ),
        conclusion=Conclusion("A", "B", "genealogy", (Attribute("label", "father of"),)),
    )


@pytest.fixture
def transitive_rule():
    return Rule(
        name="transitive",
        conditions=(
            RelationPattern("A", "genealogy", "B", (Attribute("role", "parent of"),)),
            RelationPattern("B", "genealogy", "C", (Attribute("role", "parent of"),)),
        ),
        conclusion=Conclusion("A", "C", "genealogy", (Attribute("role", "grandparent"),)),
    )


@pytest.fixture
def family_rules(father_of_rule, transitive_rule):
    return RuleSet(
        contexts=(
            Context("application/person", (father_of_rule,)),
            Context("*/*", (transitive_rule,)),
        ),
        aliases={"genealogy": GENEALOGY},
    )
