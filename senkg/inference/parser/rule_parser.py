import logging
logger = logging.getLogger("senkg.parser")
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))
    logger.addHandler(handler)
logger.setLevel(logging.WARNING)

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from ..model.terms import Attribute
from ..model.condition import RelationPattern, PredicatePattern
from ..model.rule import Conclusion, Rule, Context, RuleSet

rule_grammar = r"""
// -----------------------------
// Top-Level: alias declarations followed by rule contexts
// -----------------------------
start: use_clause* context*

// USE relation/family-link AS genealogy
use_clause: _USE MIME _AS NAME

// CONTEXT text/book { RULE ... }   (braces optional)
context: _CONTEXT MIME "{"? rule* "}"?

// RULE name { IF (...) THEN RELATE(...) }   (braces optional)
rule: _RULE NAME "{"? _IF conditions _THEN relate "}"?

// -----------------------------
// Conditions: ( condition AND condition ... )
// -----------------------------
conditions: "(" condition (_AND condition)* ")"
?condition: relation_cond
          | predicate_cond

// A ~genealogy B AND role="parent of"
relation_cond: VAR "~" relname VAR (_AND attribute)*

// A has gender="male"
predicate_cond: VAR _HAS NAME "=" STRING

// RELATE(A, B, "genealogy") WITH label="father of"
relate: _RELATE "(" VAR ","? VAR ","? relname ")" (_WITH attributes)?

attributes: attribute (","? attribute)*
attribute: NAME "=" STRING

relname: NAME | STRING

// Keywords (case-insensitive)
_USE: "use"i
_AS: "as"i
_CONTEXT: "context"i
_RULE: "rule"i
_IF: "if"i
_THEN: "then"i
_AND: "and"i
_HAS: "has"i
_RELATE: "relate"i
_WITH: "with"i

// Tokens
VAR: /[A-Z][A-Za-z0-9]*/
NAME: /[A-Za-z_][A-Za-z0-9_]*/
STRING: /"[^"\n]*"/
MIME: /(\*|[A-Za-z0-9\-]+)\/(\*|[A-Za-z0-9\-]+)/

COMMENT: /#[^\n]*/
%ignore COMMENT
%import common.WS
%ignore WS
"""


class RuleSyntaxError(Exception):
    """
    Raised when rule text cannot be parsed.
      - line / column: 1-based source position of the offending input
      - context: the offending source line with a caret under the position
    """
    def __init__(self, message: str, line: int = -1, column: int = -1, context: str = ""):
        self.line = line
        self.column = column
        self.context = context
        text = f"{message} (line {line}, column {column})"
        if context:
            text += "\n" + context
        super().__init__(text)


def _describe(e: UnexpectedInput) -> str:
    expected = getattr(e, "expected", None) or getattr(e, "allowed", None) or ()
    message = f"Invalid rule syntax ({type(e).__name__})"
    if expected:
        message += ", expected one of: " + ", ".join(sorted(str(t) for t in expected))
    return message


def _source_context(e: UnexpectedInput, text: str) -> str:
    pos = getattr(e, "pos_in_stream", None)
    if pos is None or pos < 0:
        return ""
    return e.get_context(text).rstrip()


def _unquote(s: str) -> str:
    if len(s) >= 2 and s[0] == '"' and s[-1] == '"':
        return s[1:-1]
    return s


class RuleTransformer(Transformer):
    """
    Transforms the Lark parse tree into model objects, ending with a RuleSet.
    """
    def start(self, items):
        aliases = {}
        contexts = []
        for item in items:
            if isinstance(item, Context):
                contexts.append(item)
            else:
                alias, canonical = item
                aliases[alias] = canonical
        logger.debug("start result: %d contexts, aliases=%s", len(contexts), aliases)
        return RuleSet(contexts=tuple(contexts), aliases=aliases)

    def use_clause(self, items):
        mime, name = items
        logger.debug("use_clause: %s -> %s", name, mime)
        return (str(name), str(mime))

    def context(self, items):
        pattern = str(items[0])
        rules = tuple(items[1:])
        logger.debug("context %s with %d rules", pattern, len(rules))
        return Context(pattern=pattern, rules=rules)

    def rule(self, items):
        name, conditions, conclusion = items
        result = Rule(name=str(name), conditions=conditions, conclusion=conclusion)
        logger.debug("rule result: %r", result)
        return result

    def conditions(self, items):
        return tuple(items)

    def relation_cond(self, items):
        var1, relation, var2 = items[:3]
        return RelationPattern(var1=str(var1), relation=relation, var2=str(var2), attributes=tuple(items[3:]))

    def predicate_cond(self, items):
        var, key, value = items
        return PredicatePattern(var=str(var), key=str(key), value=_unquote(str(value)))

    def relate(self, items):
        var1, var2, relation = items[:3]
        attributes = items[3] if len(items) > 3 else ()
        return Conclusion(var1=str(var1), var2=str(var2), relation_name=relation, attributes=attributes)

    def attributes(self, items):
        return tuple(items)

    def attribute(self, items):
        key, value = items
        return Attribute(str(key), _unquote(str(value)))

    def relname(self, items):
        return _unquote(str(items[0]))


class RuleParser:
    def __init__(self):
        self.parser = Lark(rule_grammar, parser="earley")
        self.transformer = RuleTransformer()

    def parse(self, text: str) -> RuleSet:
        logger.debug("Starting parse for text:\n%s", text)
        try:
            parse_tree = self.parser.parse(text)
        except UnexpectedInput as e:
            raise RuleSyntaxError(_describe(e), getattr(e, "line", -1), getattr(e, "column", -1),
                                  _source_context(e, text)) from e
        logger.debug("Parse tree:\n%s", parse_tree.pretty())
        try:
            rule_set = self.transformer.transform(parse_tree)
        except VisitError as e:
            raise e.orig_exc from e
        logger.debug("Final rule set: %r", rule_set)
        return rule_set


def parse_rules(text: str) -> RuleSet:
    return RuleParser().parse(text)


def parse_rules_file(filepath: str) -> RuleSet:
    with open(filepath, 'r') as f:
        return parse_rules(f.read())
