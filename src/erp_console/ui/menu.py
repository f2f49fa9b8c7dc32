"""Hover/click dropdown state with a single cancellable auto-close timer."""

from __future__ import annotations

import asyncio
import logging

from erp_console.domain import MenuState

logger = logging.getLogger(__name__)

USER_MENU_HOVER_DELAY = 3.0
USER_MENU_PINNED_DELAY = 3.0
SIDEBAR_HOVER_DELAY = 0.0
SIDEBAR_PINNED_DELAY = 30.0


class DropdownMenu:
    """Menu opened by hovering (closes on leave) or by clicking (pinned).

    A pinned menu closes itself after ``pinned_close_delay`` seconds. A hovered
    menu closes ``hover_close_delay`` seconds after the pointer leaves, or at
    once when that delay is zero. Timers need a running event loop.
    """

    def __init__(self, *, hover_close_delay: float, pinned_close_delay: float) -> None:
        self._hover_close_delay = hover_close_delay
        self._pinned_close_delay = pinned_close_delay
        self._state = MenuState.CLOSED
        self._timer: asyncio.TimerHandle | None = None

    @classmethod
    def user_menu(cls) -> DropdownMenu:
        return cls(
            hover_close_delay=USER_MENU_HOVER_DELAY,
            pinned_close_delay=USER_MENU_PINNED_DELAY,
        )

    @classmethod
    def sidebar(cls) -> DropdownMenu:
        return cls(
            hover_close_delay=SIDEBAR_HOVER_DELAY,
            pinned_close_delay=SIDEBAR_PINNED_DELAY,
        )

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is not MenuState.CLOSED

    @property
    def timer_pending(self) -> bool:
        return self._timer is not None

    def hover_enter(self) -> None:
        self._cancel_timer()
        if self._state is MenuState.CLOSED:
            self._state = MenuState.HOVERED_OPEN

    def hover_leave(self) -> None:
        if self._state is not MenuState.HOVERED_OPEN:
            return
        if self._hover_close_delay <= 0:
            self.close()
            return
        self._schedule_close(self._hover_close_delay)

    def click(self) -> None:
        if self._state is MenuState.PINNED_OPEN:
            self.close()
            return
        self._state = MenuState.PINNED_OPEN
        self._schedule_close(self._pinned_close_delay)

    def close(self) -> None:
        self._cancel_timer()
        self._state = MenuState.CLOSED

    def dispose(self) -> None:
        self._cancel_timer()

    def _schedule_close(self, delay: float) -> None:
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self._expire)

    def _expire(self) -> None:
        self._timer = None
        logger.debug("Menu auto-closed from %s", self._state)
        self._state = MenuState.CLOSED

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


__all__ = ["DropdownMenu"]
