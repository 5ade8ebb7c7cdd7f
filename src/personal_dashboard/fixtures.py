"""Built-in data sets used when the dashboard runs without a remote store."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from personal_dashboard.models import FoodItem, StudyItem, SubscriptionItem


@dataclass(slots=True)
class FixtureSet:
    """Starting collections for one token, plus what a local scrape returns."""

    food: list[FoodItem] = field(default_factory=list)
    subscriptions: list[SubscriptionItem] = field(default_factory=list)
    study: list[StudyItem] = field(default_factory=list)
    scraped: list[StudyItem] = field(default_factory=list)


DEFAULT_FIXTURES = FixtureSet(
    food=[
        FoodItem(name="Eggs", price=0.35, amount=6, renew_threshold=4),
        FoodItem(name="Rice", price=2.10, amount=2),
        FoodItem(name="Tomatoes", price=0.60, amount=5),
        FoodItem(name="Oat Milk", price=1.99, amount=1, renew_threshold=1),
    ],
    subscriptions=[
        SubscriptionItem(name="Spotify", price=10.99, due_date="2026-11-03"),
        SubscriptionItem(name="Gym", price=89.00, due_date="2026-12-01", cycle="Quarterly"),
        SubscriptionItem(name="Cloud Storage", price=29.99, cycle="Yearly"),
    ],
    scraped=[
        StudyItem(name="Linear Algebra - Problem Set 5", due_date="2026-10-24"),
        StudyItem(name="Databases - ER Diagram Draft", due_date="2026-10-28"),
        StudyItem(name="Operating Systems - Lab 3", due_date="2026-11-02"),
    ],
)

# Tokens with their own starting data. Anything else gets DEFAULT_FIXTURES.
FIXTURES_BY_TOKEN: dict[str, FixtureSet] = {
    "empty": FixtureSet(),
    "student": FixtureSet(
        food=[
            FoodItem(name="Instant Noodles", price=0.89, amount=12, renew_threshold=5),
            FoodItem(name="Coffee", price=7.49, amount=1, renew_threshold=1),
        ],
        subscriptions=[
            SubscriptionItem(name="Campus Wi-Fi", price=4.50, due_date="2026-11-15"),
        ],
        study=[StudyItem(name="Thesis Proposal", due_date="2026-12-10")],
        scraped=[
            StudyItem(name="Thesis Proposal", due_date="2026-12-10"),
            StudyItem(name="Statistics - Quiz 4", due_date="2026-10-30"),
        ],
    ),
}


def fixtures_for(token: str) -> FixtureSet:
    """Return a private copy of the fixture set for ``token``."""
    return copy.deepcopy(FIXTURES_BY_TOKEN.get(token, DEFAULT_FIXTURES))


__all__ = [
    "DEFAULT_FIXTURES",
    "FIXTURES_BY_TOKEN",
    "FixtureSet",
    "fixtures_for",
]
