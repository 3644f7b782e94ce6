# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Notifications the host delivers to open animation editors."""

from dataclasses import dataclass
from typing import Optional, Protocol, Union


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class FocusChanged:
    """The group or component open for editing changed."""


@dataclass(frozen=True)
class Erased:
    """The animated component was deleted."""


@dataclass(frozen=True)
class AttributeChanged:
    """The component changed. Sent once per committed operation, ours included."""

    key: Optional[str] = None


Event = Union[Undo, Redo, FocusChanged, Erased, AttributeChanged]


class EventHandler(Protocol):
    def handle(self, event: Event) -> None: ...
