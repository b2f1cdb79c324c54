"""Start-up built lookup from payload type key to masking attributes."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, KeysView, List, Mapping, Tuple

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..config.models import MaskingAttribute, MaskingRule


class RuleIndex:
    """Read-only mapping of lowercased type key to its ordered attributes.

    Rules sharing a type key are concatenated in configuration order. The
    index is never modified after construction, so concurrent lookups need
    no locking.
    """

    def __init__(self, index: Mapping[str, Tuple["MaskingAttribute", ...]]):
        self._index = MappingProxyType(dict(index))

    @classmethod
    def from_rules(cls, rules: Iterable["MaskingRule"]) -> "RuleIndex":
        buckets: Dict[str, List["MaskingAttribute"]] = {}
        for rule in rules or []:
            if not rule.type or not rule.attributes:
                continue
            buckets.setdefault(rule.type.lower(), []).extend(rule.attributes)
        return cls({k: tuple(v) for k, v in buckets.items()})

    def get(self, type_key: str) -> Tuple["MaskingAttribute", ...]:
        """Attributes for ``type_key``; an unknown key yields ``()``."""
        if not type_key:
            return ()
        return self._index.get(type_key.lower(), ())

    def keys(self) -> KeysView[str]:
        return self._index.keys()

    def __contains__(self, type_key: object) -> bool:
        return isinstance(type_key, str) and type_key.lower() in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"RuleIndex({sorted(self._index)})"


__all__ = ["RuleIndex"]
