"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from personal_dashboard.fixtures import fixtures_for
from personal_dashboard.models import Category, StudyItem, UserConfig
from personal_dashboard.services import remote_store as _remote
from personal_dashboard.services.local_store import InMemoryRemoteStore


@runtime_checkable
class RemoteStoreService(Protocol):
    """Interface for the category store, recipe generator, and scraper."""

    async def fetch_categories(
        self, *, client: httpx.AsyncClient | None, token: str
    ) -> list[Category]:
        """Fetch every category owned by ``token``."""
        ...

    async def upsert_category(
        self,
        *,
        client: httpx.AsyncClient | None,
        token: str,
        name: str,
        category_id: str,
        items: Sequence[Any],
    ) -> None:
        """Create or replace one category; raises RemoteStoreError on failure."""
        ...

    async def generate_recipe(
        self, *, client: httpx.AsyncClient | None, ingredients: Sequence[str]
    ) -> str:
        """Generate recipe text from ingredient names."""
        ...

    async def scrape_academics(
        self, *, client: httpx.AsyncClient | None, token: str
    ) -> list[StudyItem]:
        """Run the academics scraper and return the assignments found."""
        ...

    async def process_checkout(
        self,
        *,
        delay_seconds: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Process a checkout payment."""
        ...


class DefaultRemoteStoreService:
    """Default adapter that delegates to the function-based HTTP store."""

    def __init__(self, *, base_url: str, timeout_seconds: float) -> None:
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

    async def fetch_categories(
        self, *, client: httpx.AsyncClient | None, token: str
    ) -> list[Category]:
        return await _remote.fetch_categories(
            client=client,
            base_url=self.base_url,
            token=token,
            timeout_seconds=self.timeout_seconds,
        )

    async def upsert_category(
        self,
        *,
        client: httpx.AsyncClient | None,
        token: str,
        name: str,
        category_id: str,
        items: Sequence[Any],
    ) -> None:
        await _remote.upsert_category(
            client=client,
            base_url=self.base_url,
            token=token,
            name=name,
            category_id=category_id,
            items=items,
            timeout_seconds=self.timeout_seconds,
        )

    async def generate_recipe(
        self, *, client: httpx.AsyncClient | None, ingredients: Sequence[str]
    ) -> str:
        return await _remote.generate_recipe(
            client=client,
            base_url=self.base_url,
            ingredients=ingredients,
            timeout_seconds=self.timeout_seconds,
        )

    async def scrape_academics(
        self, *, client: httpx.AsyncClient | None, token: str
    ) -> list[StudyItem]:
        return await _remote.scrape_academics(
            client=client,
            base_url=self.base_url,
            token=token,
            timeout_seconds=self.timeout_seconds,
        )

    async def process_checkout(
        self,
        *,
        delay_seconds: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        await _remote.process_checkout(delay_seconds=delay_seconds, sleep=sleep)


@dataclass(slots=True)
class AppServices:
    """Aggregated service interfaces consumed by the app layer."""

    remote_store: RemoteStoreService
    local: bool = False


def build_default_app_services(config: UserConfig | None = None) -> AppServices:
    """Build app services backed by the HTTP remote store."""
    config = config or UserConfig()
    return AppServices(
        remote_store=DefaultRemoteStoreService(
            base_url=config.base_url,
            timeout_seconds=config.request_timeout_seconds,
        )
    )


def build_local_app_services(token: str) -> AppServices:
    """Build app services backed by an in-memory store for ``token``."""
    fixtures = fixtures_for(token)
    return AppServices(
        remote_store=InMemoryRemoteStore(scraped_items=fixtures.scraped),
        local=True,
    )


__all__ = [
    "AppServices",
    "DefaultRemoteStoreService",
    "RemoteStoreService",
    "build_default_app_services",
    "build_local_app_services",
]
