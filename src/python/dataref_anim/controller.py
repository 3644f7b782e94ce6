# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Animation editor bound to one component.

The controller sits between the presentation layer and the component's
animation attributes. Every command runs inside an undoable edit scope;
repeating the same value edit (dragging a slider, retyping a field) merges
into the previous undo step as long as nothing else touched the component
in between.

Lifecycle::

    UNINITIALIZED -> BOUND -> EDITABLE <-> LOCKED -> CLOSED

The editable/locked split follows the host's editing context and is
re-evaluated on every refresh. ``CLOSED`` is terminal.
"""

import functools
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Optional

from . import keys
from .channel import AnimationChannel
from .coordinates import CoordinateAdapter
from .errors import InvalidTargetError, NotFoundError, StaleReferenceError
from .events import AttributeChanged, Erased, Event
from .host import EditScope, Entity, EntityKind, HostContext
from .presentation import PresentationSink
from .settings import AnimationSettings
from .validator import validate_channel

_log = logging.getLogger(__name__)


class ControllerState(Enum):
    UNINITIALIZED = "uninitialized"
    BOUND = "bound"
    EDITABLE = "editable"
    LOCKED = "locked"
    CLOSED = "closed"


def _command(mutating: bool = True):
    """Wrap a controller command with the closed/locked guards.

    Guarded commands return ``False`` instead of running. A component that
    vanished underneath us closes the editor quietly.
    """

    def decorate(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            if self._state is ControllerState.CLOSED:
                _log.debug("%s ignored: editor is closed", fn.__name__)
                return False
            try:
                if mutating:
                    if self._state is ControllerState.BOUND:
                        self._update_state()
                    if self._state is ControllerState.LOCKED:
                        _log.warning("%s refused: component is not editable in the current context", fn.__name__)
                        return False
                return fn(self, *args, **kwargs)
            except StaleReferenceError:
                _log.info("Animated component was deleted, closing editor")
                self.close()
                return False

        return wrapper

    return decorate


class AnimationController:
    """Editor for the animation channel of *component*."""

    def __init__(
        self,
        component: Entity,
        host: HostContext,
        sink: PresentationSink,
        *,
        settings: Optional[AnimationSettings] = None,
        registry=None,
    ):
        self._state = ControllerState.UNINITIALIZED
        try:
            kind = component.kind
        except StaleReferenceError as e:
            raise InvalidTargetError("Cannot animate a deleted entity") from e
        if kind is not EntityKind.COMPONENT:
            raise InvalidTargetError(f"Only components can be animated, not {kind}")

        self._component = component
        self._host = host
        self._sink = sink
        self._settings = settings or AnimationSettings()
        self._adapter = CoordinateAdapter(host)
        self._channel = AnimationChannel(component.attributes)
        self._registry = registry
        # Merge key of the last committed scope; None after any foreign change.
        self._last_merge_key: Optional[str] = None
        # Set by our own commits so the echoed AttributeChanged is not taken as foreign.
        self._own_change = False

        self._state = ControllerState.BOUND
        if registry is not None:
            registry.add(component, self)
        _log.info("Animation editor bound to %s", self.title)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def component(self) -> Entity:
        return self._component

    @property
    def channel(self) -> AnimationChannel:
        return self._channel

    @property
    def adapter(self) -> CoordinateAdapter:
        return self._adapter

    @property
    def is_closed(self) -> bool:
        return self._state is ControllerState.CLOSED

    @property
    def title(self) -> str:
        if self._component.name:
            return self._component.name
        if self._component.definition_name:
            return f"<{self._component.definition_name}>"
        return "Group"

    def _merge_key(self, suffix: str) -> str:
        return f"{id(self._component)}/{suffix}"

    def _update_state(self) -> bool:
        editable = self._adapter.is_editable(self._component)
        self._state = ControllerState.EDITABLE if editable else ControllerState.LOCKED
        return editable

    # ------------------------------------------------------------------
    # Edit scopes
    # ------------------------------------------------------------------

    @contextmanager
    def _scope(self, op_name: str, merge_key: Optional[str] = None):
        """Run the body as one undoable operation.

        A non-None *merge_key* equal to the previous scope's key continues that
        undo step. The scope is aborted if the body raises.
        """
        scope = EditScope(op_name, merge_key)
        merge = merge_key is not None and merge_key == self._last_merge_key
        if merge:
            _log.debug("Merging '%s' into previous operation (%s)", op_name, merge_key)
        self._host.start_operation(scope, merge)
        try:
            yield scope
        except BaseException:
            self._host.abort_operation()
            self._last_merge_key = None
            raise
        self._own_change = True
        self._last_merge_key = merge_key
        self._host.commit_operation()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle(self, event: Event) -> None:
        """Single entry point for host notifications."""
        if self._state is ControllerState.CLOSED:
            return
        if isinstance(event, Erased):
            self.close()
            return
        if isinstance(event, AttributeChanged) and self._own_change:
            self._own_change = False
            return
        # Undo, redo, focus change or someone else's edit: we can't tell what
        # changed, so redraw everything. This also stops scope merging.
        self.refresh()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @_command(mutating=False)
    def refresh(self) -> bool:
        """Push the complete display state to the sink."""
        channel = self._channel
        if not channel.exists():
            _log.info("Animation attributes of %s were removed, closing editor", self.title)
            self.close()
            return False

        sink = self._sink
        sink.reset(self.title, channel.driver_id, channel.driver_index)
        editable = self._update_state()

        frames = list(channel.keyframes)
        deletable = len(frames) > self._settings.min_deletable_frames
        for i, kf in enumerate(frames):
            sink.add_keyframe_row(i, kf.value, deletable)
        sink.add_loop(channel.loop)

        for i, rule in enumerate(channel.hide_show):
            sink.add_hide_show_row(i, rule.mode, rule.dataref, rule.index, rule.from_value, rule.to_value)

        sink.set_enabled(editable, editable and channel.can_preview())
        self._last_merge_key = None
        return True

    def load(self) -> bool:
        """Initial display once the presentation layer is ready."""
        if not self.refresh():
            return False
        for problem in validate_channel(self._channel.store):
            _log.warning("%s: %s", self.title, problem)
        return True

    def close(self) -> None:
        """Close the editor. Safe to call repeatedly."""
        if self._state is ControllerState.CLOSED:
            return
        self._state = ControllerState.CLOSED
        self._last_merge_key = None
        self._own_change = False
        if self._registry is not None:
            self._registry.remove(self._component, self)
        _log.info("Animation editor closed")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @_command()
    def set_var(self, key: str, value: Any) -> bool:
        """Store a user-entered value (dataref, index, loop, keyframe value or rule field)."""
        parsed = keys.parse(key)
        if parsed is None or not keys.is_user_editable(key):
            raise NotFoundError(f"Not an editable animation attribute: {key}")
        kind, index, _ = parsed
        if kind == "frame":
            self._channel.keyframes.get(index)
        elif kind == "hide_show":
            self._channel.hide_show.get(index)

        if isinstance(value, str):
            value = value.strip()
        with self._scope("Animation value", self._merge_key(key)):
            self._channel.store.set(key, value)

        editable = self._state is ControllerState.EDITABLE
        self._sink.set_enabled(editable, editable and self._channel.can_preview())
        # The previewed pose may no longer match the edited values
        self._sink.set_preview_value("")
        return True

    @_command()
    def set_transform(self, index: int) -> bool:
        """Record the component's current position as keyframe *index*."""
        self._channel.keyframes.get(index)
        with self._scope("Set Position", self._merge_key(keys.matrix(index))):
            self._channel.keyframes.set_transform(index, self._adapter.capture(self._component))
        return True

    @_command()
    def get_transform(self, index: int) -> bool:
        """Move the component to keyframe *index*."""
        kf = self._channel.keyframes.get(index)
        with self._scope("Preview Animation", self._merge_key("preview")):
            self._adapter.apply(self._component, kf.transform)
        self._sink.set_preview_value(self._settings.format_value(kf.driver_value))
        return True

    @_command()
    def insert_frame(self, index: int) -> bool:
        """Insert a keyframe at *index* holding the component's current position."""
        with self._scope("Keyframe"):
            self._channel.keyframes.insert_at(index, self._adapter.capture(self._component))
        self.refresh()
        return True

    @_command()
    def delete_frame(self, index: int) -> bool:
        count = self._channel.keyframes.count()
        if count <= self._settings.min_deletable_frames:
            _log.warning("Cannot delete keyframe %d: animation needs at least %d keyframes",
                         index, self._settings.min_deletable_frames)
            return False
        with self._scope("Erase Keyframe"):
            self._channel.keyframes.delete_at(index)
        self.refresh()
        return True

    @_command()
    def insert_hide_show(self, index: int) -> bool:
        with self._scope("Hide/Show"):
            self._channel.hide_show.insert_at(index, self._settings.hide_show_from, self._settings.hide_show_to)
        self.refresh()
        return True

    @_command()
    def delete_hide_show(self, index: int) -> bool:
        with self._scope("Erase Hide/Show"):
            self._channel.hide_show.delete_at(index)
        self.refresh()
        return True

    @_command()
    def preview(self, progress: float) -> bool:
        """Pose the component at slider position *progress* (0 to 1)."""
        if not self._channel.can_preview():
            return False
        with self._scope("Preview Animation", self._merge_key("preview")):
            value, stored = self._channel.evaluate(float(progress))
            self._adapter.apply(self._component, stored)
        self._sink.set_preview_value(self._settings.format_value(value))
        return True

    @_command()
    def erase(self) -> bool:
        """Remove the whole animation from the component and close."""
        with self._scope("Erase Animation"):
            self._channel.erase()
        _log.info("Animation erased from %s", self.title)
        self.close()
        return True
