"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from handyman.application.cart_service import CartService
from handyman.infrastructure.persistence.json_cart_storage import JsonCartStorage
from handyman.infrastructure.persistence.sample_catalog import (
    InMemoryProductRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
STORE_FILE_NAME = "local_storage.json"


def cart_storage(data_dir: Path = DEFAULT_DATA_DIR) -> JsonCartStorage:
    return JsonCartStorage(data_dir / STORE_FILE_NAME)


def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


def cart_service(data_dir: Path = DEFAULT_DATA_DIR) -> CartService:
    """A fresh, not yet loaded cart backed by the JSON store in ``data_dir``.

    Writes run on a single worker thread, in order, so commands return
    without waiting on the file. ``close()`` the service to flush them.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cart-store")
    return CartService(cart_storage(data_dir), executor=executor)
