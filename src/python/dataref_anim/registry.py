# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Open editors keyed by component, and the command that opens them."""

import logging
from typing import Callable, Dict, Optional, Tuple

from .channel import AnimationChannel
from .controller import AnimationController
from .coordinates import CoordinateAdapter
from .errors import InvalidTargetError
from .host import EditScope, Entity, EntityKind, HostContext
from .presentation import PresentationSink
from .settings import AnimationSettings

_log = logging.getLogger(__name__)


class ControllerRegistry:
    """At most one open editor per component.

    Entities are keyed by identity since hosts are free to make them
    unhashable or to compare them by value.
    """

    def __init__(self):
        self._controllers: Dict[int, Tuple[Entity, AnimationController]] = {}

    def get(self, component: Entity) -> Optional[AnimationController]:
        entry = self._controllers.get(id(component))
        return entry[1] if entry else None

    def add(self, component: Entity, controller: AnimationController) -> None:
        existing = self.get(component)
        if existing is not None and existing is not controller:
            raise ValueError("An animation editor is already open for this component")
        self._controllers[id(component)] = (component, controller)

    def remove(self, component: Entity, controller: Optional[AnimationController] = None) -> None:
        """Forget *component*'s editor (only if it is *controller*, when given)."""
        entry = self._controllers.get(id(component))
        if entry is None:
            return
        if controller is not None and entry[1] is not controller:
            return
        del self._controllers[id(component)]

    def __contains__(self, component: Entity) -> bool:
        return id(component) in self._controllers

    def __len__(self) -> int:
        return len(self._controllers)

    def close_all(self) -> None:
        for _, controller in list(self._controllers.values()):
            controller.close()
        self._controllers.clear()


def animate(
    component: Entity,
    host: HostContext,
    sink_factory: Callable[[Entity], PresentationSink],
    registry: ControllerRegistry,
    settings: Optional[AnimationSettings] = None,
) -> AnimationController:
    """Open the animation editor for *component*, animating it first if needed.

    A component without animation attributes gets a minimal channel: no
    dataref and two keyframes at its current position. If an editor is
    already open for the component it is refreshed and returned.
    """
    settings = settings or AnimationSettings()
    if component.kind is not EntityKind.COMPONENT:
        raise InvalidTargetError(f"Only components can be animated, not {component.kind}")

    channel = AnimationChannel(component.attributes)
    if not channel.exists():
        host.start_operation(EditScope("Animate"), False)
        try:
            AnimationChannel.create(
                component.attributes,
                CoordinateAdapter(host).capture(component),
                settings.first_frame_value,
                settings.last_frame_value,
            )
        except BaseException:
            host.abort_operation()
            raise
        host.commit_operation()
        _log.info("Created animation on %s", component.name or component.definition_name)

    existing = registry.get(component)
    if existing is not None and not existing.is_closed:
        existing.refresh()
        return existing

    controller = AnimationController(component, host, sink_factory(component),
                                     settings=settings, registry=registry)
    controller.load()
    return controller
