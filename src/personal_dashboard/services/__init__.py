"""Internal service layer for remote store access."""

from personal_dashboard.services.local_store import InMemoryRemoteStore, build_local_recipe
from personal_dashboard.services.remote_store import (
    RemoteStoreError,
    fetch_categories,
    generate_recipe,
    process_checkout,
    scrape_academics,
    upsert_category,
)

__all__ = [
    "InMemoryRemoteStore",
    "RemoteStoreError",
    "build_local_recipe",
    "fetch_categories",
    "generate_recipe",
    "process_checkout",
    "scrape_academics",
    "upsert_category",
]
