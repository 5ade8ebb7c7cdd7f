"""Shared test fixtures for personal dashboard tests."""

from __future__ import annotations

import logging

import pytest

from personal_dashboard.models import (
    SCREEN_MENU,
    FoodItem,
    Session,
    StudyItem,
    SubscriptionItem,
    UserConfig,
)
from personal_dashboard.services.interfaces import AppServices
from personal_dashboard.services.local_store import InMemoryRemoteStore

# ── Logging isolation ────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reenable_logging():
    """Undo logging.disable() from CLI tests so caplog keeps working."""
    yield
    logging.disable(logging.NOTSET)


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_food():
    """Factory fixture for creating FoodItem instances with sensible defaults."""

    def _make(
        name: str = "Milk",
        price: float = 1.50,
        amount: int = 2,
        renew_threshold: int = 0,
        cart_qty: int = 0,
    ) -> FoodItem:
        return FoodItem(
            name=name,
            price=price,
            amount=amount,
            renew_threshold=renew_threshold,
            cart_qty=cart_qty,
        )

    return _make


@pytest.fixture
def make_subscription():
    """Factory fixture for creating SubscriptionItem instances."""

    def _make(
        name: str = "Netflix",
        price: float = 12.99,
        due_date: str = "2026-11-01",
        cycle: str = "Monthly",
    ) -> SubscriptionItem:
        return SubscriptionItem(name=name, price=price, due_date=due_date, cycle=cycle)

    return _make


@pytest.fixture
def make_study():
    def _make(name: str = "Essay", due_date: str = "2026-11-20") -> StudyItem:
        return StudyItem(name=name, due_date=due_date)

    return _make


@pytest.fixture
def make_session():
    """Factory fixture for Session instances; collections default to empty."""

    def _make(
        screen: str = SCREEN_MENU,
        cursor: int = 0,
        token: str = "user1",
        status: str = "",
        food: list[FoodItem] | None = None,
        subscriptions: list[SubscriptionItem] | None = None,
        study: list[StudyItem] | None = None,
        category_ids: dict[str, str] | None = None,
    ) -> Session:
        return Session(
            token=token,
            screen=screen,
            cursor=cursor,
            status=status,
            food=list(food or []),
            subscriptions=list(subscriptions or []),
            study=list(study or []),
            category_ids=dict(category_ids or {}),
        )

    return _make


@pytest.fixture
def local_services():
    """Factory for AppServices backed by an in-memory store."""

    def _make(store: InMemoryRemoteStore | None = None) -> AppServices:
        return AppServices(remote_store=store or InMemoryRemoteStore(), local=True)

    return _make


@pytest.fixture
def fast_config() -> UserConfig:
    """Config with no checkout delay so async flows finish immediately."""
    return UserConfig(checkout_delay_seconds=0.0, request_timeout_seconds=5)
