# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Keyframe sequence of an animation channel."""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from . import keys
from . import matrix as mx
from .store import DenseView, to_float

DEFAULT_VALUE = "0.0"


@dataclass
class Keyframe:
    """One pose: the driver value and the stored (unit-scale, parent-relative) transform."""

    value: Any
    matrix: Optional[list]

    @property
    def driver_value(self) -> float:
        return to_float(self.value)

    @property
    def transform(self) -> np.ndarray:
        return mx.from_array(self.matrix)


class KeyframeStore(DenseView):
    """Ordered ``frame_<i>`` / ``matrix_<i>`` pairs on a component."""

    def _marker_key(self, index: int) -> str:
        return keys.frame(index)

    def _record_keys(self, index: int) -> tuple:
        return keys.frame(index), keys.matrix(index)

    def _read(self, index: int) -> Keyframe:
        return Keyframe(self._store.get(keys.frame(index)), self._store.get(keys.matrix(index)))

    def _write(self, index: int, record: Keyframe) -> None:
        self._store.set(keys.frame(index), record.value)
        if record.matrix is None:
            self._store.delete(keys.matrix(index))
        else:
            self._store.set(keys.matrix(index), list(record.matrix))

    def insert_at(self, index: int, transform: np.ndarray) -> None:
        """Insert a keyframe holding *transform* before position *index*.

        The new keyframe takes the driver value of the keyframe it displaces,
        or of the last keyframe when appending, so the sequence stays
        non-decreasing until the user edits it.
        """
        n = self.count()
        if index < n:
            value = self._store.get(keys.frame(index))
        elif index == n and n > 0:
            value = self._store.get(keys.frame(n - 1))
        else:
            value = DEFAULT_VALUE
        self._insert(index, Keyframe(value, mx.to_array(transform)))

    def get(self, index: int) -> Keyframe:
        self._check_index(index, self.count())
        return self._read(index)

    def set_transform(self, index: int, transform: np.ndarray) -> None:
        self._check_index(index, self.count())
        self._store.set(keys.matrix(index), mx.to_array(transform))

    def set_value(self, index: int, value: Any) -> None:
        self._check_index(index, self.count())
        self._store.set(keys.frame(index), value)

    def values(self) -> list[float]:
        return [k.driver_value for k in self._load()]
