# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Keyframe animation and hide/show authoring for dataref-driven components."""

from .channel import AnimationChannel
from .controller import AnimationController, ControllerState
from .coordinates import CoordinateAdapter
from .errors import (
    AnimationError,
    InvalidTargetError,
    NotFoundError,
    PreconditionError,
    StaleReferenceError,
)
from .events import AttributeChanged, Erased, Event, EventHandler, FocusChanged, Redo, Undo
from .hideshow import HideShowMode, HideShowRule, HideShowStore
from .host import EditScope, Entity, EntityKind, HostContext
from .keyframes import Keyframe, KeyframeStore
from .presentation import PresentationSink
from .registry import ControllerRegistry, animate
from .settings import AnimationSettings, configure_logging, load_settings
from .store import AttributeStore, MemoryAttributeStore
from .validator import validate_channel

__all__ = [
    "AnimationChannel",
    "AnimationController",
    "AnimationError",
    "AnimationSettings",
    "AttributeChanged",
    "AttributeStore",
    "ControllerRegistry",
    "ControllerState",
    "CoordinateAdapter",
    "EditScope",
    "Entity",
    "EntityKind",
    "Erased",
    "Event",
    "EventHandler",
    "FocusChanged",
    "HideShowMode",
    "HideShowRule",
    "HideShowStore",
    "HostContext",
    "InvalidTargetError",
    "Keyframe",
    "KeyframeStore",
    "MemoryAttributeStore",
    "NotFoundError",
    "PreconditionError",
    "PresentationSink",
    "Redo",
    "StaleReferenceError",
    "Undo",
    "animate",
    "configure_logging",
    "load_settings",
    "validate_channel",
]
