import logging
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


class AliasResolver:
    """
    Maps short relation names declared with USE ... AS ... to their canonical
    relation type. Unknown names resolve to themselves.
    """
    def __init__(self, aliases: Optional[Mapping[str, str]] = None) -> None:
        self._aliases: dict[str, str] = dict(aliases or {})

    def resolve(self, name: str) -> str:
        canonical = self._aliases.get(name)
        if canonical is None:
            return name
        logger.debug(f"[ALIAS] {name} -> {canonical}")
        return canonical

    def canonical_names(self) -> set[str]:
        return set(self._aliases.values())

    def __contains__(self, name: str) -> bool:
        return name in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"AliasResolver({self._aliases})"
