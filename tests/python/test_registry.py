# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Tests for ControllerRegistry and the animate() entry command."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent))

from host_fakes import FakeEntity, FakeHost, RecordingSink  # noqa: E402

from dataref_anim import keys  # noqa: E402
from dataref_anim import matrix as mx  # noqa: E402
from dataref_anim.controller import AnimationController, ControllerState  # noqa: E402
from dataref_anim.errors import InvalidTargetError  # noqa: E402
from dataref_anim.host import EntityKind  # noqa: E402
from dataref_anim.registry import ControllerRegistry, animate  # noqa: E402
from dataref_anim.settings import AnimationSettings  # noqa: E402


@pytest.fixture
def registry():
    return ControllerRegistry()


class _SinkFactory:
    def __init__(self):
        self.sinks = []

    def __call__(self, component):
        sink = RecordingSink()
        self.sinks.append(sink)
        return sink


class TestControllerRegistry:
    def test_empty(self, registry):
        assert len(registry) == 0
        assert registry.get(FakeEntity()) is None

    def test_add_and_remove(self, registry):
        component = FakeEntity()
        ctl = AnimationController(component, FakeHost(), RecordingSink(), registry=registry)
        assert component in registry
        registry.remove(component, ctl)
        assert component not in registry

    def test_remove_ignores_other_controller(self, registry):
        component = FakeEntity()
        ctl = AnimationController(component, FakeHost(), RecordingSink(), registry=registry)
        registry.remove(component, object())
        assert registry.get(component) is ctl

    def test_second_editor_rejected(self, registry):
        component = FakeEntity()
        AnimationController(component, FakeHost(), RecordingSink(), registry=registry)
        with pytest.raises(ValueError, match="already open"):
            AnimationController(component, FakeHost(), RecordingSink(), registry=registry)

    def test_close_unregisters(self, registry):
        component = FakeEntity()
        ctl = AnimationController(component, FakeHost(), RecordingSink(), registry=registry)
        ctl.close()
        assert len(registry) == 0

    def test_close_all(self, registry):
        controllers = [AnimationController(FakeEntity(), FakeHost(), RecordingSink(), registry=registry)
                       for _ in range(3)]
        registry.close_all()
        assert len(registry) == 0
        assert all(c.is_closed for c in controllers)


class TestAnimate:
    def test_seeds_new_channel(self, registry):
        component = FakeEntity(transform=mx.translation(1, 2, 3) @ mx.scaling((2, 2, 2)))
        host = FakeHost([component])
        sinks = _SinkFactory()

        ctl = animate(component, host, sinks, registry)

        attrs = component.attributes
        assert attrs.get(keys.DATAREF) == ""
        assert attrs.get(keys.INDEX) == ""
        assert attrs.get(keys.LOOP) == ""
        assert (attrs.get(keys.frame(0)), attrs.get(keys.frame(1))) == ("0.0", "1.0")
        np.testing.assert_allclose(mx.from_array(attrs.get(keys.matrix(1))), mx.translation(1, 2, 3))
        assert host.operations == [("start", "Animate", None, False), ("commit", "Animate")]
        assert ctl.state is ControllerState.EDITABLE
        assert registry.get(component) is ctl
        assert sinks.sinks[0].of("reset") == [("reset", "<Component#1>", "", "")]

    def test_keeps_existing_channel(self, registry):
        component = FakeEntity()
        component.attributes.set(keys.DATAREF, "sim/a")
        component.attributes.set(keys.frame(0), "5")
        host = FakeHost([component])

        animate(component, host, _SinkFactory(), registry)

        assert component.attributes.get(keys.DATAREF) == "sim/a"
        assert component.attributes.get(keys.frame(1)) is None
        assert host.operations == []

    def test_reuses_open_editor(self, registry):
        component = FakeEntity()
        host = FakeHost([component])
        sinks = _SinkFactory()

        first = animate(component, host, sinks, registry)
        second = animate(component, host, sinks, registry)

        assert first is second
        assert len(sinks.sinks) == 1
        assert len(sinks.sinks[0].of("reset")) == 2

    def test_settings_seed_values(self, registry):
        component = FakeEntity()
        settings = AnimationSettings(first_frame_value="-1", last_frame_value="1")
        animate(component, FakeHost([component]), _SinkFactory(), registry, settings)
        assert component.attributes.get(keys.frame(0)) == "-1"
        assert component.attributes.get(keys.frame(1)) == "1"

    def test_rejects_groups(self, registry):
        group = FakeEntity(EntityKind.GROUP)
        with pytest.raises(InvalidTargetError):
            animate(group, FakeHost([group]), _SinkFactory(), registry)
        assert len(group.attributes) == 0
