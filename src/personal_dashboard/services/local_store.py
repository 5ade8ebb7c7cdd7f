"""In-memory remote store used in "running locally" mode and in tests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from personal_dashboard.codec import decode_category, encode_category, encode_items
from personal_dashboard.models import CATEGORY_ACADEMICS, Category, StudyItem
from personal_dashboard.services.remote_store import SYNC_FAILED_MESSAGE, RemoteStoreError

logger = logging.getLogger(__name__)


def build_local_recipe(ingredients: Sequence[str]) -> str:
    """Compose a simple recipe from the cart contents."""
    if not ingredients:
        return "Nothing in the cart yet. Add a few items and try again."
    listed = ", ".join(ingredients)
    steps = [f"Quick {ingredients[0]} bowl", "", f"Ingredients: {listed}", ""]
    steps.append("1. Prep every ingredient and season to taste.")
    steps.append(f"2. Cook the {ingredients[0]} first, then add the rest.")
    steps.append("3. Serve warm.")
    return "\n".join(steps)


class InMemoryRemoteStore:
    """Remote store backed by a dict of encoded category payloads.

    Payloads go through the same codec as the HTTP client so local mode
    exercises the wire format.
    """

    def __init__(
        self,
        *,
        scraped_items: Sequence[StudyItem] = (),
        categories: Sequence[Category] = (),
    ) -> None:
        self._payloads: dict[str, dict[str, Any]] = {}
        self._next_id = 1
        self._scraped = list(scraped_items)
        for category in categories:
            category_id = category.id or self._new_id()
            self._payloads[category_id] = encode_category(
                category.owner_token, category.name, category_id, category.items
            )

    def _new_id(self) -> str:
        category_id = f"local-{self._next_id}"
        self._next_id += 1
        return category_id

    def _find_id(self, token: str, name: str) -> str:
        for category_id, payload in self._payloads.items():
            if payload["user_id"] == token and payload["name"] == name:
                return category_id
        return ""

    @property
    def payloads(self) -> dict[str, dict[str, Any]]:
        return self._payloads

    async def fetch_categories(
        self, *, client: httpx.AsyncClient | None, token: str
    ) -> list[Category]:
        categories = []
        for payload in self._payloads.values():
            if payload["user_id"] != token:
                continue
            category = decode_category(payload)
            if category is not None:
                categories.append(category)
        return categories

    async def upsert_category(
        self,
        *,
        client: httpx.AsyncClient | None,
        token: str,
        name: str,
        category_id: str,
        items: Sequence[Any],
    ) -> None:
        if category_id and category_id not in self._payloads:
            logger.warning("Unknown local category id %s", category_id)
            raise RemoteStoreError(SYNC_FAILED_MESSAGE)
        if not category_id:
            category_id = self._new_id()
        self._payloads[category_id] = encode_category(token, name, category_id, items)
        logger.debug("Stored %d %s items locally as %s", len(items), name, category_id)

    async def generate_recipe(
        self, *, client: httpx.AsyncClient | None, ingredients: Sequence[str]
    ) -> str:
        return build_local_recipe(ingredients)

    async def scrape_academics(
        self, *, client: httpx.AsyncClient | None, token: str
    ) -> list[StudyItem]:
        # The scraper persists its result server-side; mirror that here.
        category_id = self._find_id(token, CATEGORY_ACADEMICS) or self._new_id()
        self._payloads[category_id] = {
            "id": category_id,
            "user_id": token,
            "name": CATEGORY_ACADEMICS,
            "content": {"items": encode_items(CATEGORY_ACADEMICS, self._scraped)},
        }
        return [StudyItem(name=item.name, due_date=item.due_date) for item in self._scraped]

    async def process_checkout(
        self,
        *,
        delay_seconds: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        await sleep(delay_seconds)


__all__ = [
    "InMemoryRemoteStore",
    "build_local_recipe",
]
