from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .terms import Attribute
from .condition import Condition, RelationPattern


@dataclass(frozen=True, slots=True)
class Conclusion:
    """
    The RELATE(...) template of a rule. var1/var2 are substituted by their
    bindings; a token that no condition binds is used literally. Attribute
    values are copied as written.
    """
    var1: str
    var2: str
    relation_name: str
    attributes: tuple[Attribute, ...] = ()

    def __repr__(self) -> str:
        text = f'RELATE({self.var1}, {self.var2}, "{self.relation_name}")'
        if self.attributes:
            text += " WITH " + ", ".join(repr(a) for a in self.attributes)
        return text


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A named rule: an ordered condition list and a conclusion template.

    Example:
        RULE father_of {
            IF (A ~genealogy B AND role="parent of" AND A has gender="male")
            THEN RELATE(A, B, "genealogy") WITH label="father of"
        }
    """
    name: str
    conditions: tuple[Condition, ...]
    conclusion: Conclusion

    def relation_patterns(self) -> list[RelationPattern]:
        return [c for c in self.conditions if isinstance(c, RelationPattern)]

    def variables(self) -> set[str]:
        found: set[str] = set()
        for cond in self.conditions:
            found.update(cond.variables())
        return found

    def __repr__(self) -> str:
        body = " AND ".join(repr(c) for c in self.conditions)
        return f"RULE {self.name} IF ({body}) THEN {self.conclusion!r}"


@dataclass(frozen=True, slots=True)
class Context:
    """A rule bucket tagged with a mime-like pattern such as text/book or */*."""
    pattern: str
    rules: tuple[Rule, ...] = ()

    def __repr__(self) -> str:
        return f"CONTEXT {self.pattern} ({len(self.rules)} rules)"


@dataclass(frozen=True, slots=True)
class RuleSet:
    """
    Ordered contexts plus the alias map (alias -> canonical relation type).
    Built once by the parser and read-only afterwards.
    """
    contexts: tuple[Context, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "contexts", tuple(self.contexts))
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))

    def rules(self) -> list[Rule]:
        return [rule for ctx in self.contexts for rule in ctx.rules]

    def __repr__(self) -> str:
        return f"RuleSet(contexts={list(self.contexts)}, aliases={dict(self.aliases)})"
