"""Background task descriptors, their results, and the runner that connects them.

The reducer never performs I/O. It returns a task descriptor; the runtime
hands it to :func:`run_task` and posts the result back to the event loop.
Every result carries a ``kind`` tag so handlers can be looked up by tag.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx

from personal_dashboard.models import Category, StudyItem
from personal_dashboard.services.interfaces import RemoteStoreService
from personal_dashboard.services.remote_store import RemoteStoreError

logger = logging.getLogger(__name__)

TASK_FETCH = "fetch"
TASK_SYNC = "sync"
TASK_RECIPE = "recipe"
TASK_SCRAPE = "scrape"
TASK_CHECKOUT = "checkout"
RESULT_ERROR = "error"


# ── Tasks ───────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class FetchCategoriesTask:
    kind: ClassVar[str] = TASK_FETCH
    token: str


@dataclass(slots=True)
class SyncCategoryTask:
    """Upload the full collection for one category."""

    kind: ClassVar[str] = TASK_SYNC
    token: str
    category: str
    category_id: str  # "" = create
    items: list[Any] = field(default_factory=list)


@dataclass(slots=True)
class GenerateRecipeTask:
    kind: ClassVar[str] = TASK_RECIPE
    ingredients: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ScrapeAcademicsTask:
    kind: ClassVar[str] = TASK_SCRAPE
    token: str


@dataclass(slots=True)
class CheckoutTask:
    kind: ClassVar[str] = TASK_CHECKOUT


Task = (
    FetchCategoriesTask
    | SyncCategoryTask
    | GenerateRecipeTask
    | ScrapeAcademicsTask
    | CheckoutTask
)


# ── Results ─────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class FetchResult:
    kind: ClassVar[str] = TASK_FETCH
    categories: list[Category] = field(default_factory=list)


@dataclass(slots=True)
class SyncResult:
    kind: ClassVar[str] = TASK_SYNC
    category: str


@dataclass(slots=True)
class RecipeResult:
    kind: ClassVar[str] = TASK_RECIPE
    text: str


@dataclass(slots=True)
class ScrapeResult:
    kind: ClassVar[str] = TASK_SCRAPE
    items: list[StudyItem] = field(default_factory=list)


@dataclass(slots=True)
class CheckoutResult:
    kind: ClassVar[str] = TASK_CHECKOUT


@dataclass(slots=True)
class TaskFailed:
    """A background task failed; ``source`` is the failing task's kind."""

    kind: ClassVar[str] = RESULT_ERROR
    source: str
    error: str


TaskResult = (
    FetchResult | SyncResult | RecipeResult | ScrapeResult | CheckoutResult | TaskFailed
)


# ── Runner ──────────────────────────────────────────────────────────────────


async def _run_fetch(task, store, client, delay, sleep) -> TaskResult:
    return FetchResult(categories=await store.fetch_categories(client=client, token=task.token))


async def _run_sync(task, store, client, delay, sleep) -> TaskResult:
    await store.upsert_category(
        client=client,
        token=task.token,
        name=task.category,
        category_id=task.category_id,
        items=task.items,
    )
    return SyncResult(category=task.category)


async def _run_recipe(task, store, client, delay, sleep) -> TaskResult:
    text = await store.generate_recipe(client=client, ingredients=task.ingredients)
    return RecipeResult(text=text)


async def _run_scrape(task, store, client, delay, sleep) -> TaskResult:
    return ScrapeResult(items=await store.scrape_academics(client=client, token=task.token))


async def _run_checkout(task, store, client, delay, sleep) -> TaskResult:
    await store.process_checkout(delay_seconds=delay, sleep=sleep)
    return CheckoutResult()


_RUNNERS: dict[str, Callable[..., Awaitable[TaskResult]]] = {
    TASK_FETCH: _run_fetch,
    TASK_SYNC: _run_sync,
    TASK_RECIPE: _run_recipe,
    TASK_SCRAPE: _run_scrape,
    TASK_CHECKOUT: _run_checkout,
}


async def run_task(
    task: Task,
    *,
    store: RemoteStoreService,
    client: httpx.AsyncClient | None,
    checkout_delay_seconds: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> TaskResult:
    """Run one task against ``store`` and return its result.

    Remote failures come back as :class:`TaskFailed`; anything else propagates.
    """
    runner = _RUNNERS[task.kind]
    try:
        return await runner(task, store, client, checkout_delay_seconds, sleep)
    except RemoteStoreError as exc:
        logger.warning("%s task failed: %s", task.kind, exc)
        return TaskFailed(source=task.kind, error=str(exc))


__all__ = [
    "RESULT_ERROR",
    "TASK_CHECKOUT",
    "TASK_FETCH",
    "TASK_RECIPE",
    "TASK_SCRAPE",
    "TASK_SYNC",
    "CheckoutResult",
    "CheckoutTask",
    "FetchCategoriesTask",
    "FetchResult",
    "GenerateRecipeTask",
    "RecipeResult",
    "ScrapeAcademicsTask",
    "ScrapeResult",
    "SyncCategoryTask",
    "SyncResult",
    "Task",
    "TaskFailed",
    "TaskResult",
    "run_task",
]
