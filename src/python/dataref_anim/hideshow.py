# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Hide/show visibility rules of an animation channel."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from . import keys
from .store import DenseView, to_float


class HideShowMode(str, Enum):
    HIDE = keys.HIDE
    SHOW = keys.SHOW


@dataclass
class HideShowRule:
    mode: str
    dataref: str = ""
    index: str = ""
    from_value: Any = "0.0"
    to_value: Any = "1.0"

    @property
    def range(self) -> tuple[float, float]:
        return to_float(self.from_value), to_float(self.to_value)


class HideShowStore(DenseView):
    """Ordered ``hs_<i>_*`` quintuples on a component. May be empty."""

    def _marker_key(self, index: int) -> str:
        return keys.hide_show(index, keys.HS_MODE)

    def _record_keys(self, index: int) -> tuple:
        return tuple(keys.hide_show(index, field) for field in keys.HS_FIELDS)

    def _read(self, index: int) -> HideShowRule:
        get = self._store.get
        return HideShowRule(
            mode=get(keys.hide_show(index, keys.HS_MODE)),
            dataref=get(keys.hide_show(index, keys.HS_DATAREF)),
            index=get(keys.hide_show(index, keys.HS_INDEX)),
            from_value=get(keys.hide_show(index, keys.HS_FROM)),
            to_value=get(keys.hide_show(index, keys.HS_TO)),
        )

    def _write(self, index: int, record: HideShowRule) -> None:
        mode = record.mode.value if isinstance(record.mode, HideShowMode) else record.mode
        self._store.set(keys.hide_show(index, keys.HS_MODE), mode)
        self._store.set(keys.hide_show(index, keys.HS_DATAREF), record.dataref)
        self._store.set(keys.hide_show(index, keys.HS_INDEX), record.index)
        self._store.set(keys.hide_show(index, keys.HS_FROM), record.from_value)
        self._store.set(keys.hide_show(index, keys.HS_TO), record.to_value)

    def insert_at(self, index: int, from_value: Any = "0.0", to_value: Any = "1.0") -> None:
        """Insert a blank rule at *index*: ``hide`` if it becomes the first rule, else ``show``."""
        mode = HideShowMode.HIDE if index == 0 else HideShowMode.SHOW
        self._insert(index, HideShowRule(mode.value, "", "", from_value, to_value))

    def get(self, index: int) -> HideShowRule:
        self._check_index(index, self.count())
        return self._read(index)

    def set_field(self, index: int, field: str, value: Any) -> None:
        if field not in keys.HS_FIELDS:
            raise ValueError(f"Unknown hide/show field: {field}")
        self._check_index(index, self.count())
        self._store.set(keys.hide_show(index, field), value)
