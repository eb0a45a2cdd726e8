# -*- coding: utf-8 -*-
"""
App lifecycle signals consumed by the auto-trigger coordinator.

The host application owns the real lifecycle (foreground/background, first
launch onboarding, microphone permissions). The coordinator only reads these
signals and asks the host to start or stop an auto-capture session.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class AppState(Enum):
    """Application visibility"""

    FOREGROUND = "foreground"
    BACKGROUND = "background"
    INACTIVE = "inactive"


class LifecycleSignals(Protocol):
    """What the coordinator needs from the host application."""

    @property
    def is_first_launch(self) -> bool: ...

    @property
    def is_foreground(self) -> bool: ...

    @property
    def permissions_granted(self) -> bool: ...

    def start_auto_capture(self) -> None: ...

    def stop_auto_capture(self) -> None: ...


class AppLifecycle:
    """
    In-memory lifecycle state, safe to update from any thread.

    Starts as a first launch, in the background, without permissions.
    """

    def __init__(
        self,
        *,
        first_launch_completed: bool = False,
        state: AppState = AppState.BACKGROUND,
        permissions_granted: bool = False,
    ):
        self._lock = threading.Lock()
        self._first_launch_completed = first_launch_completed
        self._state = state
        self._permissions_granted = permissions_granted
        self._auto_capturing = False

    @property
    def is_first_launch(self) -> bool:
        with self._lock:
            return not self._first_launch_completed

    @property
    def is_foreground(self) -> bool:
        with self._lock:
            return self._state is AppState.FOREGROUND

    @property
    def app_state(self) -> AppState:
        with self._lock:
            return self._state

    @property
    def permissions_granted(self) -> bool:
        with self._lock:
            return self._permissions_granted

    @property
    def is_auto_capturing(self) -> bool:
        with self._lock:
            return self._auto_capturing

    def complete_first_launch(self) -> None:
        with self._lock:
            self._first_launch_completed = True
        logger.info("First launch completed")

    def update_app_state(self, state: AppState) -> None:
        with self._lock:
            previous, self._state = self._state, state
        if previous is not state:
            logger.debug(f"App state {previous.value} -> {state.value}")

    def set_permissions(self, granted: bool) -> None:
        with self._lock:
            self._permissions_granted = granted

    def start_auto_capture(self) -> None:
        with self._lock:
            self._auto_capturing = True
        logger.debug("Auto capture started")

    def stop_auto_capture(self) -> None:
        with self._lock:
            self._auto_capturing = False
        logger.debug("Auto capture stopped")
