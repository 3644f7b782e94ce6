# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Attribute store contract, an in-memory store and dense record views over it."""

import math
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional, Protocol

from .errors import NotFoundError


class AttributeStore(Protocol):
    """Flat string-keyed store backing one component's animation attributes.

    The host owns the store and may change it at any time between our calls
    (undo, redo, other tools), so nothing read from it may be cached.
    """

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryAttributeStore:
    """Dictionary-backed ``AttributeStore``."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)


_NUMBER_RE = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def to_float(value: Any) -> float:
    """Read a stored scalar as a number.

    Values are typed by the user, so parsing is lenient: the longest numeric
    prefix is used and anything unparseable reads as ``0.0``.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    m = _NUMBER_RE.match(str(value))
    return float(m.group(0)) if m else 0.0


def is_number(value: Any) -> bool:
    """True if *value* reads as the same finite number ``to_float`` gives."""
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    text = str(value).strip()
    m = _NUMBER_RE.match(text)
    return m is not None and m.end() == len(text) and math.isfinite(float(text))


class DenseView(ABC):
    """Densely indexed records emulated on top of a flat ``AttributeStore``.

    Records occupy indices ``0..n-1`` with no gaps; the count is found by
    scanning for the first missing marker key. Mutations load the records
    into a list, edit the list and write the changed suffix back, deleting
    keys of any slot that fell off the end.
    """

    def __init__(self, store: AttributeStore):
        self._store = store

    @abstractmethod
    def _marker_key(self, index: int) -> str:
        ...

    @abstractmethod
    def _record_keys(self, index: int) -> tuple:
        ...

    @abstractmethod
    def _read(self, index: int):
        ...

    @abstractmethod
    def _write(self, index: int, record) -> None:
        ...

    def count(self) -> int:
        # Rescanned on every call; the store may have changed since last time.
        n = 0
        while self._store.get(self._marker_key(n)) is not None:
            n += 1
        return n

    def __len__(self) -> int:
        return self.count()

    def __iter__(self):
        return iter(self._load())

    def _load(self) -> list:
        return [self._read(i) for i in range(self.count())]

    def _flush(self, records: list, start: int, old_count: int) -> None:
        for i in range(len(records) - 1, start - 1, -1):
            self._write(i, records[i])
        for i in range(len(records), old_count):
            for key in self._record_keys(i):
                self._store.delete(key)

    def _check_index(self, index: int, count: int) -> None:
        if not 0 <= index < count:
            raise NotFoundError(f"{type(self).__name__}: index {index} outside 0..{count - 1}")

    def _insert(self, index: int, record) -> None:
        records = self._load()
        n = len(records)
        if not 0 <= index <= n:
            raise NotFoundError(f"{type(self).__name__}: cannot insert at {index} (count {n})")
        records.insert(index, record)
        self._flush(records, index, n)

    def delete_at(self, index: int) -> None:
        records = self._load()
        n = len(records)
        self._check_index(index, n)
        del records[index]
        self._flush(records, index, n)

    def clear(self) -> None:
        """Delete every record, including any stragglers one past the end."""
        for i in range(self.count() + 1):
            for key in self._record_keys(i):
                self._store.delete(key)
