"""Tests for the in-memory store used in local mode."""

from __future__ import annotations

import pytest

from personal_dashboard.models import Category, FoodItem, StudyItem
from personal_dashboard.services.local_store import InMemoryRemoteStore, build_local_recipe
from personal_dashboard.services.remote_store import RemoteStoreError


@pytest.mark.asyncio
async def test_create_then_fetch_assigns_id(make_food) -> None:
    store = InMemoryRemoteStore()
    await store.upsert_category(
        client=None, token="u", name="Food", category_id="", items=[make_food("Milk", cart_qty=2)]
    )

    (category,) = await store.fetch_categories(client=None, token="u")

    assert category.id == "local-1"
    assert category.name == "Food"
    assert category.items == [FoodItem(name="Milk", price=1.5, amount=2)]


@pytest.mark.asyncio
async def test_update_replaces_items_in_place(make_food) -> None:
    store = InMemoryRemoteStore()
    await store.upsert_category(
        client=None, token="u", name="Food", category_id="", items=[make_food("A")]
    )
    await store.upsert_category(
        client=None, token="u", name="Food", category_id="local-1", items=[make_food("B")]
    )

    (category,) = await store.fetch_categories(client=None, token="u")
    assert [item.name for item in category.items] == ["B"]


@pytest.mark.asyncio
async def test_update_unknown_id_fails() -> None:
    store = InMemoryRemoteStore()
    with pytest.raises(RemoteStoreError, match="Sync failed"):
        await store.upsert_category(
            client=None, token="u", name="Food", category_id="missing", items=[]
        )


@pytest.mark.asyncio
async def test_fetch_only_returns_callers_categories() -> None:
    store = InMemoryRemoteStore(
        categories=[
            Category(id="a", owner_token="alice", name="Food", items=[FoodItem(name="Tea")]),
            Category(id="b", owner_token="bob", name="Food", items=[FoodItem(name="Jam")]),
        ]
    )
    categories = await store.fetch_categories(client=None, token="bob")
    assert [c.id for c in categories] == ["b"]


@pytest.mark.asyncio
async def test_scrape_stores_academics_category() -> None:
    scraped = [StudyItem(name="Essay", due_date="Tue")]
    store = InMemoryRemoteStore(scraped_items=scraped)

    items = await store.scrape_academics(client=None, token="u")
    again = await store.scrape_academics(client=None, token="u")
    categories = await store.fetch_categories(client=None, token="u")

    assert items == scraped
    assert again == scraped
    assert len(categories) == 1
    assert categories[0].name == "Academics"
    assert categories[0].items == scraped


def test_local_recipe_mentions_every_ingredient() -> None:
    text = build_local_recipe(["Eggs", "Rice"])
    assert "Eggs" in text
    assert "Rice" in text


def test_local_recipe_with_empty_cart() -> None:
    assert "Nothing in the cart" in build_local_recipe([])
