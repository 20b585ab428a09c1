from senkg.inference.engine.dedup import DedupIndex, is_duplicate, same_relation
from senkg.inference.engine.store import FactStore
from senkg.inference.model.terms import Attribute, Relation

A = Attribute("role", "parent of")
B = Attribute("label", "father of")


def test_attribute_order_is_ignored():
    assert same_relation(Relation("x", "r", "y", (A, B)), Relation("x", "r", "y", (B, A)))


def test_any_field_difference_is_significant():
    base = Relation("x", "r", "y", (A,))
    assert not same_relation(base, Relation("y", "r", "x", (A,)))
    assert not same_relation(base, Relation("x", "s", "y", (A,)))
    assert not same_relation(base, Relation("x", "r", "y", (B,)))
    assert not same_relation(base, Relation("x", "r", "y"))


def test_inferred_flag_is_not_part_of_identity():
    assert same_relation(Relation("x", "r", "y", inferred=True), Relation("x", "r", "y"))


def test_duplicate_of_store_or_round():
    store = FactStore()
    store.add_relation(Relation("x", "r", "y", (A, B)))
    assert is_duplicate(Relation("x", "r", "y", (B, A)), [], store)
    assert not is_duplicate(Relation("x", "r", "z"), [], store)
    assert is_duplicate(Relation("x", "r", "z"), [Relation("x", "r", "z")], store)


def test_index_accepts_each_relation_once():
    store = FactStore()
    store.add_relation(Relation("x", "r", "y"))
    index = DedupIndex(store)
    assert not index.accept(Relation("x", "r", "y"))
    assert index.accept(Relation("x", "r", "z", (A, B)))
    assert not index.accept(Relation("x", "r", "z", (B, A)))


def test_index_agrees_with_is_duplicate():
    store = FactStore()
    store.add_relation(Relation("x", "r", "y", (A,)))
    index = DedupIndex(store)
    accepted = []
    for relation in [
        Relation("x", "r", "y", (A,), inferred=True),
        Relation("x", "r", "w", (A, B)),
        Relation("x", "r", "w", (B, A)),
        Relation("x", "r", "w", (A,)),
    ]:
        expected = not is_duplicate(relation, accepted, store)
        assert index.accept(relation) is expected
        if expected:
            accepted.append(relation)
    assert accepted == [Relation("x", "r", "w", (A, B)), Relation("x", "r", "w", (A,))]
