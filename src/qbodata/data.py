"""
Read-only views over decoded QuickBooks JSON.

QuickBooks resources have no fixed schema from the client's point of
view (an Invoice and a Customer share almost nothing), so both wrappers
are generic key/value accessors rather than typed records.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional

# Keys of a QueryResponse node that describe paging rather than records
PAGINATION_KEYS = ("startPosition", "maxResults", "totalCount")


class Entity(Mapping):
    """One QuickBooks record (Invoice, Customer, Attachable, ...)."""

    __slots__ = ("_data",)

    def __new__(cls, data: Dict[str, Any]):
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")
        return super().__new__(cls)

    def __init__(self, data: Dict[str, Any]) -> None:
        self._data = data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Entity({self._data!r})"

    @property
    def id(self) -> Optional[str]:
        return self._data.get("Id")

    @property
    def sync_token(self) -> Optional[str]:
        """Optimistic-locking token that update/delete payloads must echo back."""
        return self._data.get("SyncToken")

    def to_dict(self) -> Dict[str, Any]:
        """Deep copy of the wrapped JSON, safe to mutate and send back as a payload."""
        return copy.deepcopy(self._data)


class QueryResponse(Mapping):
    """The ``QueryResponse`` node of a query call.

    Holds zero or more records of one entity type (under that type's
    name) plus optional paging fields. Absent paging fields are reported
    as ``None``, never as 0.
    """

    __slots__ = ("_data",)

    def __new__(cls, data: Dict[str, Any]):
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")
        return super().__new__(cls)

    def __init__(self, data: Dict[str, Any]) -> None:
        self._data = data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryResponse({self._data!r})"

    @property
    def entity_name(self) -> Optional[str]:
        """Name of the record list in this response, or None for empty results."""
        for key, value in self._data.items():
            if key not in PAGINATION_KEYS and isinstance(value, list):
                return key
        return None

    @property
    def entities(self) -> List[Entity]:
        name = self.entity_name
        if name is None:
            return []
        return [Entity(record) for record in self._data[name]]

    def get_entities(self, name: str) -> List[Entity]:
        return [Entity(record) for record in self._data.get(name, [])]

    @property
    def start_position(self) -> Optional[int]:
        return self._data.get("startPosition")

    @property
    def max_results(self) -> Optional[int]:
        return self._data.get("maxResults")

    @property
    def total_count(self) -> Optional[int]:
        return self._data.get("totalCount")

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)
