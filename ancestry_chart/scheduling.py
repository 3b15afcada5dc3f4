"""
Deferred-callback schedulers.

The controller never sleeps; it hands continuations to a scheduler.
In the GUI the continuation runs on the next event-loop pass, after
pending show/resize events have been laid out.  Headless runs have no
layout to wait for, so the continuation runs immediately.
"""

from typing import Callable, Protocol


class Scheduler(Protocol):
    def defer(self, callback: Callable[[], None]) -> None:
        ...


class ImmediateScheduler:
    """Run every deferred callback synchronously."""

    def defer(self, callback: Callable[[], None]) -> None:
        callback()


class QtScheduler:
    """Run deferred callbacks once the Qt event loop is idle.

    ``QTimer.singleShot(0, ...)`` fires after already-queued events
    (including the show and resize of a just-expanded container).
    """

    def defer(self, callback: Callable[[], None]) -> None:
        from PySide6.QtCore import QTimer
        QTimer.singleShot(0, callback)
