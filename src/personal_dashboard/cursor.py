"""List cursor model: which collection a screen shows and how the cursor moves."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from personal_dashboard.models import (
    DELIVERY_CHOICES,
    MENU_CHOICES,
    SCREEN_ACADEMICS,
    SCREEN_FOOD_CHECKOUT,
    SCREEN_FOOD_LIST,
    SCREEN_MENU,
    SCREEN_SUBSCRIPTIONS,
    Session,
)

CURSOR_UP = -1
CURSOR_DOWN = 1


def collection_for(session: Session, screen: str | None = None) -> Sequence[Any]:
    """Return the collection the cursor walks on ``screen`` (default: current).

    Screens without a list (forms, recipe, processing states) map to an empty
    sequence, which pins the cursor at 0.
    """
    screen = session.screen if screen is None else screen
    if screen == SCREEN_MENU:
        return MENU_CHOICES
    if screen == SCREEN_FOOD_LIST:
        return session.food
    if screen == SCREEN_FOOD_CHECKOUT:
        return DELIVERY_CHOICES
    if screen == SCREEN_SUBSCRIPTIONS:
        return session.subscriptions
    if screen == SCREEN_ACADEMICS:
        return session.study
    return ()


def clamp_cursor(length: int, cursor: int, direction: int = 0) -> int:
    """Move ``cursor`` by ``direction`` and clamp it to ``[0, max(length - 1, 0)]``."""
    upper = max(length - 1, 0)
    return max(0, min(cursor + direction, upper))


def move_cursor(session: Session, direction: int) -> Session:
    """Return a session with the cursor stepped within the active collection."""
    length = len(collection_for(session))
    cursor = clamp_cursor(length, session.cursor, direction)
    if cursor == session.cursor:
        return session
    return replace(session, cursor=cursor)


def reclamp(session: Session) -> Session:
    """Pull the cursor back inside the active collection after it changed size."""
    cursor = clamp_cursor(len(collection_for(session)), session.cursor)
    if cursor == session.cursor:
        return session
    return replace(session, cursor=cursor)


__all__ = [
    "CURSOR_DOWN",
    "CURSOR_UP",
    "clamp_cursor",
    "collection_for",
    "move_cursor",
    "reclamp",
]
