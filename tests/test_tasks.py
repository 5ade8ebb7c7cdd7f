"""Tests for the background task runner."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from personal_dashboard.models import Category, StudyItem
from personal_dashboard.services.local_store import InMemoryRemoteStore
from personal_dashboard.services.remote_store import RemoteStoreError
from personal_dashboard.tasks import (
    TASK_SYNC,
    CheckoutResult,
    CheckoutTask,
    FetchCategoriesTask,
    FetchResult,
    GenerateRecipeTask,
    RecipeResult,
    ScrapeAcademicsTask,
    ScrapeResult,
    SyncCategoryTask,
    SyncResult,
    TaskFailed,
    run_task,
)


def _fake_store(**methods):
    store = AsyncMock()
    for name, value in methods.items():
        setattr(store, name, value)
    return store


@pytest.mark.asyncio
async def test_fetch_task_returns_categories() -> None:
    categories = [Category(id="1", owner_token="u", name="Food")]
    store = _fake_store(fetch_categories=AsyncMock(return_value=categories))

    result = await run_task(
        FetchCategoriesTask(token="u"), store=store, client=None, checkout_delay_seconds=0
    )

    assert result == FetchResult(categories=categories)
    store.fetch_categories.assert_awaited_once_with(client=None, token="u")


@pytest.mark.asyncio
async def test_sync_task_upserts_full_collection(make_food) -> None:
    store = _fake_store(upsert_category=AsyncMock(return_value=None))
    task = SyncCategoryTask(token="u", category="Food", category_id="f1", items=[make_food()])

    result = await run_task(task, store=store, client=None, checkout_delay_seconds=0)

    assert result == SyncResult(category="Food")
    store.upsert_category.assert_awaited_once_with(
        client=None, token="u", name="Food", category_id="f1", items=[make_food()]
    )


@pytest.mark.asyncio
async def test_sync_failure_becomes_task_failed() -> None:
    store = _fake_store(upsert_category=AsyncMock(side_effect=RemoteStoreError("Sync failed")))
    task = SyncCategoryTask(token="u", category="Food", category_id="")

    result = await run_task(task, store=store, client=None, checkout_delay_seconds=0)

    assert result == TaskFailed(source=TASK_SYNC, error="Sync failed")


@pytest.mark.asyncio
async def test_unexpected_errors_propagate() -> None:
    store = _fake_store(generate_recipe=AsyncMock(side_effect=KeyError("bug")))
    with pytest.raises(KeyError):
        await run_task(
            GenerateRecipeTask(ingredients=["Eggs"]),
            store=store,
            client=None,
            checkout_delay_seconds=0,
        )


@pytest.mark.asyncio
async def test_checkout_task_waits_for_configured_delay() -> None:
    sleep = AsyncMock()
    store = InMemoryRemoteStore()

    result = await run_task(
        CheckoutTask(), store=store, client=None, checkout_delay_seconds=1.5, sleep=sleep
    )

    assert result == CheckoutResult()
    sleep.assert_awaited_once_with(1.5)


@pytest.mark.asyncio
async def test_recipe_and_scrape_against_local_store() -> None:
    store = InMemoryRemoteStore(scraped_items=[StudyItem(name="Quiz", due_date="Mon")])

    recipe = await run_task(
        GenerateRecipeTask(ingredients=["Eggs"]), store=store, client=None, checkout_delay_seconds=0
    )
    scrape = await run_task(
        ScrapeAcademicsTask(token="u"), store=store, client=None, checkout_delay_seconds=0
    )

    assert isinstance(recipe, RecipeResult)
    assert "Eggs" in recipe.text
    assert scrape == ScrapeResult(items=[StudyItem(name="Quiz", due_date="Mon")])


def test_result_kinds_are_distinct() -> None:
    kinds = {
        FetchResult.kind,
        SyncResult.kind,
        RecipeResult.kind,
        ScrapeResult.kind,
        CheckoutResult.kind,
        TaskFailed.kind,
    }
    assert len(kinds) == 6
