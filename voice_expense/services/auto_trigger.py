# -*- coding: utf-8 -*-
"""
Auto-Trigger Coordinator

Decides when to start a capture session automatically (e.g. when the app
comes to the foreground) and emits a "begin capture" signal after a short
delay.

States:
    IDLE -> SCHEDULED -> TRIGGERING -> IDLE
    SCHEDULED / TRIGGERING -> IDLE via cancel()

At most one cycle runs at a time: calls to trigger_if_needed() while not IDLE
are no-ops. A threading.Lock guards every transition, and each cycle gets its
own cancel Event plus a cycle number, so a delay worker that wakes up after
cancel() finds a newer cycle and does nothing.

Lifecycle hooks (start_auto_capture, stop_auto_capture) and begin-capture
listeners are called with the lock released, so they may call back into
the coordinator.

TRIGGERING has no timeout. If the capture subsystem never calls
on_capture_completed(), no further auto-trigger happens until cancel().
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from voice_expense import config
from voice_expense.services.lifecycle import LifecycleSignals

logger = logging.getLogger(__name__)

BeginCaptureCallback = Callable[[], None]


class AutoTriggerState(Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    TRIGGERING = "triggering"


class AutoTriggerCoordinator:
    """Single-cycle, cancellable auto-capture trigger."""

    def __init__(self, lifecycle: LifecycleSignals, delay_seconds: Optional[float] = None):
        self.lifecycle = lifecycle
        self.delay_seconds = config.AUTO_TRIGGER_DELAY_SECONDS if delay_seconds is None else delay_seconds

        self._lock = threading.Lock()
        self._state = AutoTriggerState.IDLE
        self._cycle = 0
        self._cancel_event: Optional[threading.Event] = None
        self._worker: Optional[threading.Thread] = None
        self._should_begin_capture = False
        self._begin_capture_count = 0
        self._subscribers: list[BeginCaptureCallback] = []

    @property
    def state(self) -> AutoTriggerState:
        with self._lock:
            return self._state

    @property
    def should_begin_capture(self) -> bool:
        with self._lock:
            return self._should_begin_capture

    @property
    def begin_capture_count(self) -> int:
        """Number of begin-capture signals emitted so far."""
        with self._lock:
            return self._begin_capture_count

    def subscribe(self, callback: BeginCaptureCallback) -> Callable[[], None]:
        """
        Register a begin-capture listener.

        Callbacks run on the delay worker thread. Returns a function that
        removes the listener.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _blocked_reason(self, is_capture_active: bool) -> Optional[str]:
        if self.lifecycle.is_first_launch:
            return "first launch not completed"
        if not self.lifecycle.is_foreground:
            return "app not in foreground"
        if is_capture_active:
            return "capture already active"
        if not self.lifecycle.permissions_granted:
            return "permissions not granted"
        return None

    def trigger_if_needed(self, is_capture_active: bool = False) -> bool:
        """
        Schedule an auto-capture if the app is ready for one.

        Returns:
            True if a new cycle was scheduled, False if this call was a no-op
        """
        with self._lock:
            if self._state is not AutoTriggerState.IDLE:
                logger.info(f"Auto-trigger skipped: already {self._state.value}")
                return False

            reason = self._blocked_reason(is_capture_active)
            if reason:
                logger.info(f"Auto-trigger skipped: {reason}")
                return False

            self._state = AutoTriggerState.SCHEDULED
            self._cycle += 1
            cycle = self._cycle
            cancel_event = threading.Event()
            self._cancel_event = cancel_event
            worker = threading.Thread(
                target=self._delayed_trigger,
                args=(cycle, cancel_event),
                name=f"auto-trigger-{cycle}",
                daemon=True,
            )

        self.lifecycle.start_auto_capture()
        worker.start()
        with self._lock:
            if cycle == self._cycle:
                self._worker = worker

        logger.info(f"Auto-trigger scheduled in {self.delay_seconds}s")
        return True

    def _delayed_trigger(self, cycle: int, cancel_event: threading.Event) -> None:
        if cancel_event.wait(self.delay_seconds):
            logger.debug(f"Auto-trigger cycle {cycle} cancelled during delay")
            return

        with self._lock:
            if cycle != self._cycle or self._state is not AutoTriggerState.SCHEDULED:
                return

            left_foreground = not self.lifecycle.is_foreground
            if left_foreground:
                self._state = AutoTriggerState.IDLE
            else:
                self._state = AutoTriggerState.TRIGGERING
                self._should_begin_capture = True
                self._begin_capture_count += 1
                subscribers = list(self._subscribers)

        if left_foreground:
            self.lifecycle.stop_auto_capture()
            logger.info("Auto-trigger dropped: app left the foreground")
            return

        logger.info("Auto-trigger: begin capture")
        for callback in subscribers:
            try:
                callback()
            except Exception as e:
                logger.error(f"Begin-capture listener failed: {e}", exc_info=True)

    def on_capture_completed(self) -> bool:
        """
        Report that the triggered capture finished (success or failure).

        Returns:
            True if the coordinator went back to IDLE, False if it was not
            TRIGGERING
        """
        with self._lock:
            if self._state is not AutoTriggerState.TRIGGERING:
                logger.info(f"Capture completion ignored in state {self._state.value}")
                return False
            self._state = AutoTriggerState.IDLE
            self._should_begin_capture = False
        self.lifecycle.stop_auto_capture()
        return True

    def cancel(self) -> bool:
        """Abort the current cycle. Returns False if nothing was pending."""
        with self._lock:
            if self._state is AutoTriggerState.IDLE:
                return False
            previous = self._state
            self._cycle += 1
            if self._cancel_event is not None:
                self._cancel_event.set()
            self._state = AutoTriggerState.IDLE
            self._should_begin_capture = False
        self.lifecycle.stop_auto_capture()

        logger.info(f"Auto-trigger cancelled from {previous.value}")
        return True

    def wait_until_settled(self, timeout: Optional[float] = None) -> bool:
        """Join the current delay worker. Returns True if no worker is running."""
        worker = self._worker
        if worker is None or worker is threading.current_thread():
            return True
        worker.join(timeout)
        return not worker.is_alive()

    def shutdown(self, timeout: Optional[float] = None) -> None:
        self.cancel()
        self.wait_until_settled(timeout)
