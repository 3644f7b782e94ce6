# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Attribute key schema for animation channels.

A component carries at most one animation channel. Its attributes are:

- ``dataref`` - driver dataref, or ``""`` if not yet chosen
- ``index`` - array index into the dataref, or ``""`` for a scalar
- ``loop`` - loop period, or ``""`` for a non-looping animation
- ``frame_<i>`` / ``matrix_<i>`` - driver value and 16-element transform of keyframe *i*
- ``hs_<i>_mode`` / ``_dataref`` / ``_index`` / ``_from`` / ``_to`` - hide/show rule *i*
"""

import re

DATAREF = "dataref"
INDEX = "index"
LOOP = "loop"

FRAME_PREFIX = "frame_"
MATRIX_PREFIX = "matrix_"
HS_PREFIX = "hs_"

HS_MODE = "_mode"
HS_DATAREF = "_dataref"
HS_INDEX = "_index"
HS_FROM = "_from"
HS_TO = "_to"
HS_FIELDS = (HS_MODE, HS_DATAREF, HS_INDEX, HS_FROM, HS_TO)

HIDE = "hide"
SHOW = "show"

_FRAME_RE = re.compile(r"^frame_(\d+)$")
_MATRIX_RE = re.compile(r"^matrix_(\d+)$")
_HS_RE = re.compile(r"^hs_(\d+)(_mode|_dataref|_index|_from|_to)$")


def frame(index: int) -> str:
    return f"{FRAME_PREFIX}{index}"


def matrix(index: int) -> str:
    return f"{MATRIX_PREFIX}{index}"


def hide_show(index: int, field: str) -> str:
    return f"{HS_PREFIX}{index}{field}"


def parse(key: str):
    """Classify *key*.

    Returns ``(kind, index, field)`` where *kind* is one of ``"channel"``,
    ``"frame"``, ``"matrix"`` or ``"hide_show"``, or ``None`` for keys that do
    not belong to an animation channel.
    """
    if key in (DATAREF, INDEX, LOOP):
        return "channel", None, None
    m = _FRAME_RE.match(key)
    if m:
        return "frame", int(m.group(1)), None
    m = _MATRIX_RE.match(key)
    if m:
        return "matrix", int(m.group(1)), None
    m = _HS_RE.match(key)
    if m:
        return "hide_show", int(m.group(1)), m.group(2)
    return None


def is_user_editable(key: str) -> bool:
    """True for keys the editor lets the user type into directly."""
    parsed = parse(key)
    return parsed is not None and parsed[0] in ("channel", "frame", "hide_show")
