# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Conversion between live component transforms and stored keyframe transforms.

While a group or component is open for editing, the host rewrites the
transform of that context's direct children into the context's space. The
stored form is always parent-relative, so the host's edit transform is
undone before storing and redone before applying.

Stored transforms are also scale-free: only rotation and translation are
keyframed. The component's own scale is stripped on capture and its
*current* scale is reapplied on playback, so rescaling a component after
keyframing it survives preview.

Editing a component that is itself open (or that contains the open context)
would move it out of its edit bounds, so such components are not editable.
Components outside the open context are not editable either, matching the
host's dimmed display of them.
"""

from typing import Iterable, Optional

import numpy as np

from . import matrix as mx
from .host import Entity, EntityKind, HostContext


class CoordinateAdapter:
    def __init__(self, host: HostContext):
        self._host = host

    @staticmethod
    def to_stored(live: np.ndarray, correction: Optional[np.ndarray] = None) -> np.ndarray:
        live = np.asarray(live, dtype=float)
        unscale = mx.scaling(1.0 / mx.basis_scale(live))
        local = live if correction is None else np.linalg.inv(correction) @ live
        return local @ unscale

    @staticmethod
    def from_stored(stored: np.ndarray, correction: Optional[np.ndarray],
                    live_scale) -> np.ndarray:
        stored = np.asarray(stored, dtype=float)
        placed = stored if correction is None else np.asarray(correction, dtype=float) @ stored
        return placed @ mx.scaling(live_scale)

    def correction_for(self, component: Entity) -> Optional[np.ndarray]:
        """Host edit transform if *component* is a direct child of the open context."""
        if any(e is component for e in self._host.active_entities()):
            return np.asarray(self._host.edit_transform(), dtype=float)
        return None

    def is_editable(self, component: Entity) -> bool:
        if not self._host.is_editing():
            return True
        return _included(component, self._host.active_entities())

    def capture(self, component: Entity) -> np.ndarray:
        """Stored form of the component's current transform."""
        return self.to_stored(component.transform, self.correction_for(component))

    def apply(self, component: Entity, stored: np.ndarray) -> None:
        """Move the component to *stored*, keeping its current scale."""
        live_scale = mx.basis_scale(component.transform)
        component.transform = self.from_stored(stored, self.correction_for(component), live_scale)


def _included(component: Entity, entities: Iterable[Entity]) -> bool:
    # Is this component in entities, or nested inside groups/components among them
    entities = list(entities)
    if any(e is component for e in entities):
        return True
    for e in entities:
        if e.kind in (EntityKind.GROUP, EntityKind.COMPONENT) and _included(component, e.children()):
            return True
    return False
