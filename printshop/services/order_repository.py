"""In-memory order store persisted to a JSON snapshot."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from printshop.models.order import Order, OrderUpdate
from printshop.services.exceptions import OrderPersistenceError

logger = logging.getLogger(__name__)


class OrderRepository:
    """Append-mostly order collection backed by a whole-file JSON snapshot.

    One instance is created per application and injected where needed.
    Every write rewrites the full snapshot through a temporary file and an
    atomic rename, serialized by an asyncio lock. The file I/O runs in a
    worker thread so a slow disk does not block the event loop.
    """

    def __init__(self, orders_file: str | Path, start_id: int = 1000) -> None:
        """Initialize the repository.

        Args:
            orders_file: Path of the JSON snapshot.
            start_id: First id handed out when no orders exist.
        """
        self.orders_file = Path(orders_file)
        self._orders: list[Order] = []
        self._next_id = start_id
        self._lock = asyncio.Lock()

    def load(self) -> int:
        """Load orders from an existing snapshot.

        The id counter is moved past the highest stored id.

        Returns:
            int: Number of orders loaded.

        Raises:
            OrderPersistenceError: If the snapshot exists but cannot be parsed.
        """
        if not self.orders_file.exists():
            return 0

        try:
            data = json.loads(self.orders_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise OrderPersistenceError(f"Cannot read orders snapshot {self.orders_file}: {e}") from e

        if not isinstance(data, list):
            raise OrderPersistenceError(f"Orders snapshot {self.orders_file} is not a list")

        self._orders = data
        if self._orders:
            self._next_id = max(self._next_id, max(order["id"] for order in self._orders) + 1)

        logger.info("Loaded %d orders from %s", len(self._orders), self.orders_file)
        return len(self._orders)

    def next_id(self) -> int:
        """Hand out the next order id."""
        order_id = self._next_id
        self._next_id += 1
        return order_id

    def _write_snapshot(self) -> None:
        self.orders_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.orders_file.with_name(self.orders_file.name + ".tmp")
        tmp_path.write_text(json.dumps(self._orders, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.orders_file)

    async def append(self, order: Order) -> Order:
        """Add an order and persist the snapshot.

        Args:
            order: Fully built order record.

        Returns:
            Order: The stored order.

        Raises:
            OrderPersistenceError: If the snapshot write fails. The order is
                not kept in memory in that case.
        """
        async with self._lock:
            self._orders.append(order)
            try:
                await asyncio.to_thread(self._write_snapshot)
            except (OSError, TypeError, ValueError) as e:
                self._orders.pop()
                logger.error("Failed to persist order %s: %s", order["id"], str(e))
                raise OrderPersistenceError("Failed to save order") from e

        return order

    def list(self) -> list[Order]:
        """List all orders in insertion order."""
        return list(self._orders)

    def get(self, order_id: int) -> Order | None:
        for order in self._orders:
            if order["id"] == order_id:
                return order
        return None

    async def update(self, order_id: int, patch: OrderUpdate) -> Order | None:
        """Apply a partial update to an order and persist the snapshot.

        Args:
            order_id: Id of the order to update.
            patch: Fields to replace.

        Returns:
            Order | None: The updated order, or None if it does not exist.

        Raises:
            OrderPersistenceError: If the snapshot write fails. The in-memory
                order is restored in that case.
        """
        async with self._lock:
            order = self.get(order_id)
            if order is None:
                return None

            previous = dict(order)
            order.update(patch)
            try:
                await asyncio.to_thread(self._write_snapshot)
            except (OSError, TypeError, ValueError) as e:
                order.clear()
                order.update(previous)
                logger.error("Failed to persist update of order %s: %s", order_id, str(e))
                raise OrderPersistenceError("Failed to update order") from e

        return order

    def is_writable(self) -> bool:
        """Check that the snapshot directory exists and accepts writes."""
        directory = self.orders_file.parent
        return directory.is_dir() and os.access(directory, os.W_OK)
