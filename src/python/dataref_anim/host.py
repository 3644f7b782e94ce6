# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Contracts for the host modelling application.

The editor never talks to a scene graph directly. The host adapts its own
objects to these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Protocol

import numpy as np

from .store import AttributeStore


class EntityKind(Enum):
    COMPONENT = "component"
    GROUP = "group"
    OTHER = "other"


class Entity(Protocol):
    """A scene entity as seen by the editor.

    Accessing any member of a deleted entity raises ``StaleReferenceError``.
    """

    kind: EntityKind
    name: str
    #: Name of the component definition; empty for groups.
    definition_name: str
    attributes: AttributeStore
    #: Live 4x4 transform, in whatever space the host currently exposes.
    transform: np.ndarray

    def children(self) -> Iterable["Entity"]:
        """Entities inside this one (group contents or component definition contents)."""
        ...


@dataclass(frozen=True)
class EditScope:
    """Descriptor of one undoable edit.

    Consecutive scopes with the same non-empty *merge_key* collapse into one
    undo step.
    """

    op_name: str
    merge_key: Optional[str] = None


class HostContext(Protocol):
    def is_editing(self) -> bool:
        """True while some group or component is open for editing."""
        ...

    def active_entities(self) -> Iterable[Entity]:
        """Entities of the context currently open for editing (or the model root)."""
        ...

    def edit_transform(self) -> np.ndarray:
        """Transform the host applies to direct children of the open context."""
        ...

    def start_operation(self, scope: EditScope, merge: bool) -> None: ...

    def commit_operation(self) -> None: ...

    def abort_operation(self) -> None: ...
