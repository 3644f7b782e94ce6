# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Channel validation utilities."""

from . import keys
from . import matrix as mx
from .channel import AnimationChannel
from .hideshow import HideShowMode
from .store import AttributeStore, is_number


def validate_channel(store: AttributeStore) -> list[str]:
    """Validate the animation attributes in *store*. Returns list of errors (empty if valid)."""
    channel = AnimationChannel(store)
    if not channel.exists():
        return ["Missing dataref attribute: component is not animated"]

    errors = []
    frames = list(channel.keyframes)
    if len(frames) < 2:
        errors.append(f"Needs at least 2 keyframes, has {len(frames)}")

    for i, kf in enumerate(frames):
        if not is_number(kf.value):
            errors.append(f"{keys.frame(i)}: not a number: {kf.value!r}")
        if kf.matrix is None:
            errors.append(f"{keys.matrix(i)}: missing")
        else:
            try:
                mx.from_array(kf.matrix)
            except (TypeError, ValueError) as e:
                errors.append(f"{keys.matrix(i)}: {e}")

    values = [kf.driver_value for kf in frames]
    for i in range(1, len(values)):
        if values[i] < values[i - 1]:
            errors.append(f"{keys.frame(i)}: {values[i]} is less than {keys.frame(i - 1)} ({values[i - 1]})")

    loop = channel.loop
    if loop != "":
        if not is_number(loop):
            errors.append(f"loop: not a number: {loop!r}")
        elif float(loop) < 0.0:
            errors.append(f"loop: must not be negative, got {loop}")

    modes = {m.value for m in HideShowMode}
    for i, rule in enumerate(channel.hide_show):
        if rule.mode not in modes:
            errors.append(f"{keys.hide_show(i, keys.HS_MODE)}: unknown mode {rule.mode!r}")
        for field, value in ((keys.HS_FROM, rule.from_value), (keys.HS_TO, rule.to_value)):
            if not is_number(value):
                errors.append(f"{keys.hide_show(i, field)}: not a number: {value!r}")

    return errors
