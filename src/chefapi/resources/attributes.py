"""Attribute storage for resources."""

import copy
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any


def deep_merge(base: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dict with ``incoming`` merged over ``base``.

    Nested mappings present on both sides are merged recursively; for any
    other conflict the incoming value wins.
    """
    merged = dict(base)
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class AttributeMap(MutableMapping):
    """Ordered mapping of attribute names to JSON-compatible values."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {}
        if initial:
            self.merge(initial)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[str(key)] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"AttributeMap({self._data!r})"

    def merge(self, incoming: Mapping[str, Any]) -> "AttributeMap":
        """Deep-merge ``incoming`` into this map; incoming values win."""
        incoming = {str(k): copy.deepcopy(v) for k, v in incoming.items()}
        self._data = deep_merge(self._data, incoming)
        return self

    def replace(self, incoming: Mapping[str, Any]) -> "AttributeMap":
        """Discard all current attributes and take those of ``incoming``."""
        self._data = {}
        return self.merge(incoming)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)
