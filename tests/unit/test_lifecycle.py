# -*- coding: utf-8 -*-

from voice_expense.services.lifecycle import AppLifecycle, AppState


def test_defaults():
    lifecycle = AppLifecycle()
    assert lifecycle.is_first_launch is True
    assert lifecycle.is_foreground is False
    assert lifecycle.permissions_granted is False
    assert lifecycle.is_auto_capturing is False


def test_complete_first_launch():
    lifecycle = AppLifecycle()
    lifecycle.complete_first_launch()
    assert lifecycle.is_first_launch is False


def test_update_app_state():
    lifecycle = AppLifecycle()
    lifecycle.update_app_state(AppState.FOREGROUND)
    assert lifecycle.is_foreground is True
    assert lifecycle.app_state == AppState.FOREGROUND

    lifecycle.update_app_state(AppState.INACTIVE)
    assert lifecycle.is_foreground is False


def test_permissions():
    lifecycle = AppLifecycle()
    lifecycle.set_permissions(True)
    assert lifecycle.permissions_granted is True


def test_auto_capture_flag():
    lifecycle = AppLifecycle()
    lifecycle.start_auto_capture()
    assert lifecycle.is_auto_capturing is True
    lifecycle.stop_auto_capture()
    assert lifecycle.is_auto_capturing is False
