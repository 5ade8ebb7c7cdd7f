"""Internal HTTP remote store helpers for categories, recipes, and scraping."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from personal_dashboard.codec import decode_categories, decode_study_items, encode_category
from personal_dashboard.models import Category, StudyItem

logger = logging.getLogger(__name__)

SYNC_FAILED_MESSAGE = "Sync failed"


class RemoteStoreError(RuntimeError):
    """Raised when the remote store cannot complete a request."""


def _url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


async def _send(
    client: httpx.AsyncClient | None,
    method: str,
    url: str,
    *,
    timeout_seconds: float,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request, opening a temporary client when none is shared."""
    try:
        if client is not None:
            return await client.request(method, url, timeout=timeout_seconds, **kwargs)
        async with httpx.AsyncClient() as tmp_client:
            return await tmp_client.request(method, url, timeout=timeout_seconds, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise RemoteStoreError(str(exc) or type(exc).__name__) from exc


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise RemoteStoreError(f"Invalid JSON from {response.request.url}") from exc


def _raise_for_status(response: httpx.Response) -> None:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RemoteStoreError(
            f"HTTP {response.status_code} from {response.request.url}"
        ) from exc


async def fetch_categories(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    token: str,
    timeout_seconds: float,
) -> list[Category]:
    """Fetch every category owned by ``token``."""
    response = await _send(
        client, "GET", _url(base_url, f"categories/{token}"), timeout_seconds=timeout_seconds
    )
    _raise_for_status(response)
    categories = decode_categories(_json_body(response))
    logger.debug("Fetched %d categories", len(categories))
    return categories


async def upsert_category(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    token: str,
    name: str,
    category_id: str,
    items: Sequence[Any],
    timeout_seconds: float,
) -> None:
    """Create (empty ``category_id``) or replace a category's full item list."""
    body = encode_category(token, name, category_id, items)
    if category_id:
        method, url = "PUT", _url(base_url, f"categories/{category_id}")
    else:
        method, url = "POST", _url(base_url, "categories")
    response = await _send(client, method, url, json=body, timeout_seconds=timeout_seconds)
    if response.status_code >= 400:
        logger.warning("%s %s returned HTTP %d", method, url, response.status_code)
        raise RemoteStoreError(SYNC_FAILED_MESSAGE)


async def generate_recipe(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    ingredients: Sequence[str],
    timeout_seconds: float,
) -> str:
    """Ask the backend for a recipe using ``ingredients``."""
    response = await _send(
        client,
        "POST",
        _url(base_url, "recipes/generate"),
        json={"ingredients": list(ingredients)},
        timeout_seconds=timeout_seconds,
    )
    _raise_for_status(response)
    payload = _json_body(response)
    recipe = payload.get("recipe") if isinstance(payload, dict) else None
    if not isinstance(recipe, str):
        raise RemoteStoreError("Recipe response did not contain a recipe")
    return recipe


async def scrape_academics(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    token: str,
    timeout_seconds: float,
) -> list[StudyItem]:
    """Trigger the server-side Canvas scraper and return the assignments it found."""
    response = await _send(
        client,
        "POST",
        _url(base_url, "scrapers/canvas"),
        params={"user_id": token},
        timeout_seconds=timeout_seconds,
    )
    _raise_for_status(response)
    return decode_study_items(_json_body(response))


async def process_checkout(
    *,
    delay_seconds: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Simulate payment processing."""
    await sleep(delay_seconds)


__all__ = [
    "RemoteStoreError",
    "SYNC_FAILED_MESSAGE",
    "fetch_categories",
    "generate_recipe",
    "process_checkout",
    "scrape_academics",
    "upsert_category",
]
