# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Animation channel: driver dataref, keyframes, hide/show rules and loop.

A channel is a view over a component's ``AttributeStore``; every property
re-reads the store so edits made behind our back (undo, redo, other tools)
are always seen.

Preview evaluation
------------------
The slider position *progress* (0 to 1) is mapped onto the driver range,
which is ``[0, loop]`` for a looping channel and ``[first, last]`` keyframe
values otherwise. The keyframe segment containing the value is located and
the two stored transforms are interpolated. Values outside the keyframes
extrapolate the first or last segment.
"""

import logging
from typing import Optional

import numpy as np

from . import keys
from . import matrix as mx
from .errors import PreconditionError
from .hideshow import HideShowStore
from .keyframes import KeyframeStore
from .store import AttributeStore, to_float

_log = logging.getLogger(__name__)


class AnimationChannel:
    def __init__(self, store: AttributeStore):
        self._store = store
        self.keyframes = KeyframeStore(store)
        self.hide_show = HideShowStore(store)

    @property
    def store(self) -> AttributeStore:
        return self._store

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, store: AttributeStore, transform: np.ndarray,
               first_value: str = "0.0", last_value: str = "1.0") -> "AnimationChannel":
        """Seed a minimal channel: no dataref, two keyframes at *transform*."""
        stored = mx.to_array(transform)
        store.set(keys.DATAREF, "")
        store.set(keys.INDEX, "")
        store.set(keys.frame(0), first_value)
        store.set(keys.matrix(0), list(stored))
        store.set(keys.frame(1), last_value)
        store.set(keys.matrix(1), list(stored))
        store.set(keys.LOOP, "")
        return cls(store)

    def exists(self) -> bool:
        """True while the ``dataref`` marker is present, even when empty."""
        return self._store.get(keys.DATAREF) is not None

    def erase(self) -> None:
        """Delete every channel and rule key. Unrelated attributes are left alone."""
        self.keyframes.clear()
        self.hide_show.clear()
        for key in (keys.DATAREF, keys.INDEX, keys.LOOP):
            self._store.delete(key)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def driver_id(self) -> str:
        return self._store.get(keys.DATAREF) or ""

    @property
    def driver_index(self) -> str:
        return self._store.get(keys.INDEX) or ""

    @property
    def loop(self) -> str:
        """Raw loop period as entered; ``""`` when not looping."""
        value = self._store.get(keys.LOOP)
        return "" if value is None else value

    @property
    def loop_period(self) -> Optional[float]:
        raw = self.loop
        if raw == "":
            return None
        return to_float(raw)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def can_preview(self) -> bool:
        """Whether the channel is in a state that can be previewed.

        Needs a dataref, a loop period that is empty or positive, and at
        least two keyframes in non-decreasing order. Only the prefix up to
        the first out-of-order value is scanned.
        """
        if self.driver_id == "":
            return False
        values = self.keyframes.values()
        frame = 1
        while frame < len(values) and values[frame] >= values[frame - 1]:
            frame += 1
        if frame > len(values):
            frame = len(values)
        loop = self.loop_period
        return frame >= 2 and (loop is None or loop > 0.0)

    def range(self) -> tuple[float, float]:
        loop = self.loop_period
        if loop is not None and loop > 0.0:
            return 0.0, loop
        values = self.keyframes.values()
        return values[0], values[-1]

    def segment(self, value: float) -> tuple[int, int, float]:
        """Keyframe segment ``(start, stop, t)`` used to reach driver *value*.

        *t* is the unclamped interpolation factor; it falls outside ``[0, 1]``
        when *value* lies before the first or after the last keyframe.
        """
        values = self.keyframes.values()
        if len(values) < 2:
            raise PreconditionError(f"need at least 2 keyframes to interpolate, have {len(values)}")
        stop = 0
        while stop < len(values) and values[stop] <= value:
            stop += 1
        if stop == len(values):
            stop = len(values) - 1
        if stop == 0:
            stop = 1
        start = stop - 1
        span = values[stop] - values[start]
        t = (value - values[start]) / span if span != 0.0 else 0.0
        return start, stop, t

    def evaluate(self, progress: float) -> tuple[float, np.ndarray]:
        """Driver value and stored-space transform at slider position *progress*."""
        if self.keyframes.count() < 2:
            raise PreconditionError("evaluate() needs at least 2 keyframes")
        range_start, range_stop = self.range()
        value = range_start + (range_stop - range_start) * progress
        start, stop, t = self.segment(value)
        _log.debug("evaluate(%s): value=%s segment=(%d, %d) t=%s", progress, value, start, stop, t)
        transform = mx.interpolate(
            self.keyframes.get(start).transform,
            self.keyframes.get(stop).transform,
            t,
        )
        return value, transform
