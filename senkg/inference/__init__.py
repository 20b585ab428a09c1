"""
Forward-chaining inference over typed relations and entity predicates.
"""
from .model.terms import Attribute, Relation, Predicate
from .model.condition import RelationPattern, PredicatePattern
from .model.rule import Conclusion, Rule, Context, RuleSet
from .engine.inference_engine import InferenceEngine
from .parser.rule_parser import RuleSyntaxError, parse_rules, parse_rules_file

__all__ = [
    'Attribute', 'Relation', 'Predicate',
    'RelationPattern', 'PredicatePattern',
    'Conclusion', 'Rule', 'Context', 'RuleSet',
    'InferenceEngine',
    'RuleSyntaxError', 'parse_rules', 'parse_rules_file',
]
