from dataclasses import dataclass
from typing import Union

from .terms import Attribute


@dataclass(frozen=True, slots=True)
class RelationPattern:
    """
    A relation condition in a rule body, e.g. A ~genealogy B AND role="parent of".
      - var1 / var2: subject and object variables
      - relation: relation name or alias, resolved at match time
      - attributes: every one must be present on a matching fact
    """
    var1: str
    relation: str
    var2: str
    attributes: tuple[Attribute, ...] = ()

    def variables(self) -> tuple[str, str]:
        return (self.var1, self.var2)

    def __repr__(self) -> str:
        text = f"{self.var1} ~{self.relation} {self.var2}"
        for attr in self.attributes:
            text += f" AND {attr!r}"
        return text


@dataclass(frozen=True, slots=True)
class PredicatePattern:
    """
    An entity attribute condition, e.g. A has gender="male".
    The variable must already be bound by an earlier relation condition.
    """
    var: str
    key: str
    value: str

    def variables(self) -> tuple[str]:
        return (self.var,)

    def __repr__(self) -> str:
        return f'{self.var} has {self.key}="{self.value}"'


Condition = Union[RelationPattern, PredicatePattern]
