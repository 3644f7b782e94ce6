# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Exception types for the animation editor."""


class AnimationError(Exception):
    """Base class for animation editor errors."""


class InvalidTargetError(AnimationError):
    """Raised when binding an editor to something that is not a component."""


class NotFoundError(AnimationError, IndexError):
    """Raised when a keyframe, rule or attribute key is outside the current range."""


class StaleReferenceError(AnimationError):
    """Raised by host entities that have been deleted underneath us."""


class PreconditionError(AnimationError):
    """Raised when an operation is invoked without its guard being satisfied."""
