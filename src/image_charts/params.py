from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

ACCOUNT_ID_KEY = "icac"
SIGNATURE_KEY = "ichm"
ANIMATION_KEY = "chan"


class ChartParams:
    """
    Immutable set of chart query parameters.

    ``set`` never mutates the receiver; it returns a new instance holding
    the extra entry, so a partially configured chart can be branched into
    several variants without the branches seeing each other's values.
    Ordering is not kept here: the canonical order is applied when the
    query string is rendered.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        data: Dict[str, str] = {}
        for name, value in (values or {}).items():
            _check(name, value)
            data[name] = value
        self._values: Mapping[str, str] = MappingProxyType(data)

    def set(self, name: str, value: str) -> "ChartParams":
        _check(name, value)
        data = dict(self._values)
        data[name] = value
        clone = ChartParams.__new__(ChartParams)
        clone._values = MappingProxyType(data)
        return clone

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(name, default)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._values.items())

    def sorted_items(self) -> List[Tuple[str, str]]:
        """Pairs in canonical (code point) order of their names."""
        return sorted(self._values.items(), key=lambda kv: kv[0])

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChartParams):
            return NotImplemented
        return dict(self._values) == dict(other._values)

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"ChartParams({dict(self.sorted_items())!r})"


def _check(name: object, value: object) -> None:
    if not isinstance(name, str):
        raise TypeError(f"parameter name must be str, got {type(name).__name__}")
    if not isinstance(value, str):
        raise TypeError(f"value of {name!r} must be str, got {type(value).__name__}")
    if name == SIGNATURE_KEY:
        raise ValueError(f"{SIGNATURE_KEY!r} is computed from the secret and cannot be set")
