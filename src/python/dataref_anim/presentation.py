# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Display directives pushed from the editor to whatever draws it."""

from typing import Any, Protocol


class PresentationSink(Protocol):
    """Receives the editor's display state.

    A full refresh is ``reset`` followed by one ``add_keyframe_row`` per
    keyframe, ``add_loop``, one ``add_hide_show_row`` per rule and finally
    ``set_enabled``.
    """

    def reset(self, title: str, driver_id: str, driver_index: str) -> None: ...

    def add_keyframe_row(self, index: int, value: Any, deletable: bool) -> None: ...

    def add_loop(self, value: Any) -> None: ...

    def add_hide_show_row(self, index: int, mode: str, driver_id: str, driver_index: str,
                          from_value: Any, to_value: Any) -> None: ...

    def set_enabled(self, editable: bool, previewable: bool) -> None: ...

    def set_preview_value(self, text: str) -> None: ...
