from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, order=True)
class Attribute:
    """
    A key/value string pair carried by a relation, e.g. role="parent of".
    Ordering is by key, then value, which is what deduplication sorts on.
    """
    key: str
    value: str

    def __repr__(self) -> str:
        return f'{self.key}="{self.value}"'


@dataclass(frozen=True, slots=True)
class Relation:
    """
    A directed, typed, attributed edge between two entities (a fact).
      - subject / object: entity identifiers
      - relation_name: canonical relation type (aliases already resolved)
      - attributes: tuple of Attribute, order as given
      - inferred: True when produced by a rule rather than seeded
    """
    subject: str
    relation_name: str
    object: str
    attributes: tuple[Attribute, ...] = ()
    inferred: bool = field(default=False, compare=False)

    def structural_key(self) -> tuple:
        return (self.subject, self.relation_name, self.object, tuple(sorted(self.attributes)))

    def attribute_dict(self) -> dict[str, str]:
        return {a.key: a.value for a in self.attributes}

    def has_attribute(self, key: str, value: str) -> bool:
        for attr in self.attributes:
            if attr.key == key and attr.value == value:
                return True
        return False

    def __repr__(self) -> str:
        text = f"{self.relation_name}({self.subject}, {self.object})"
        if self.attributes:
            text += " {" + ", ".join(repr(a) for a in self.attributes) + "}"
        return text


@dataclass(frozen=True, slots=True)
class Predicate:
    """An attribute asserted directly on an entity, e.g. John has gender="male"."""
    entity: str
    key: str
    value: str

    def __repr__(self) -> str:
        return f'{self.entity} has {self.key}="{self.value}"'


def as_attributes(attributes) -> tuple[Attribute, ...]:
    """Normalize a mapping, (key, value) pairs or Attribute objects to a tuple of Attribute."""
    if not attributes:
        return ()
    if isinstance(attributes, dict):
        items = attributes.items()
    else:
        items = attributes
    result = []
    for item in items:
        if isinstance(item, Attribute):
            result.append(item)
        else:
            key, value = item
            result.append(Attribute(str(key), str(value)))
    return tuple(result)
