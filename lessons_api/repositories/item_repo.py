"""
In-memory item repository.

Stores items in a process-local dict; contents are lost on restart.
All operations take a lock so handlers running in the threadpool and on
the event loop see consistent state.
"""

import threading
import structlog
from typing import Dict, List, Optional, Tuple

from lessons_api.exceptions import InsufficientStockError
from lessons_api.models.items import Category, Item, ItemCreate, ItemUpdate

logger = structlog.get_logger(__name__)


class ItemRepository:
    """Repository for item storage operations."""

    def __init__(self):
        self._items: Dict[int, Item] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def create_item(self, data: ItemCreate) -> Item:
        """
        Store a new item.

        Ids are never reused: the next id is one more than the highest id
        this repository has handed out, even if that item was deleted.

        Args:
            data: Item fields

        Returns:
            Created item
        """
        with self._lock:
            self._last_id += 1
            item = Item(id=self._last_id, **data.model_dump())
            self._items[item.id] = item

        logger.info("item_created", item_id=item.id, name=item.name)
        return item

    def list_items(
        self,
        category: Optional[Category] = None,
        offset: int = 0,
        limit: int = 100
    ) -> Tuple[List[Item], int]:
        """
        List items ordered by id.

        Args:
            category: Only return items in this category
            offset: Number of items to skip
            limit: Maximum number of items to return

        Returns:
            Tuple of (items page, total matching items)
        """
        with self._lock:
            items = [self._items[key] for key in sorted(self._items)]

        if category is not None:
            items = [item for item in items if item.category == category]

        return items[offset:offset + limit], len(items)

    def get_item(self, item_id: int) -> Optional[Item]:
        """
        Get item by ID.

        Returns:
            Item or None if not found
        """
        with self._lock:
            return self._items.get(item_id)

    def replace_item(self, item_id: int, data: ItemCreate) -> Optional[Item]:
        """
        Replace every field of an existing item.

        Returns:
            Updated item or None if not found
        """
        with self._lock:
            if item_id not in self._items:
                return None
            item = Item(id=item_id, **data.model_dump())
            self._items[item_id] = item

        logger.info("item_replaced", item_id=item_id)
        return item

    def update_item(self, item_id: int, changes: ItemUpdate) -> Optional[Item]:
        """
        Apply the fields explicitly set on ``changes``.

        Returns:
            Updated item or None if not found
        """
        fields = changes.model_dump(exclude_unset=True)

        with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return None
            item = current.model_copy(update=fields)
            self._items[item_id] = item

        logger.info("item_updated", item_id=item_id, fields=sorted(fields))
        return item

    def delete_item(self, item_id: int) -> bool:
        """
        Delete an item.

        Returns:
            True if the item existed
        """
        with self._lock:
            removed = self._items.pop(item_id, None)

        if removed is None:
            return False

        logger.info("item_deleted", item_id=item_id)
        return True

    def purchase_item(self, item_id: int, quantity: int) -> Optional[Item]:
        """
        Take ``quantity`` units out of stock.

        Returns:
            Updated item or None if not found

        Raises:
            InsufficientStockError: If fewer than ``quantity`` units are in stock
        """
        with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return None
            if quantity > current.quantity:
                logger.warning(
                    "item_purchase_rejected",
                    item_id=item_id,
                    requested=quantity,
                    available=current.quantity
                )
                raise InsufficientStockError(item_id, quantity, current.quantity)
            item = current.model_copy(update={"quantity": current.quantity - quantity})
            self._items[item_id] = item

        logger.info(
            "item_purchased",
            item_id=item_id,
            quantity=quantity,
            remaining=item.quantity
        )
        return item

    def count(self) -> int:
        """Number of stored items."""
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        """Remove every item and restart ids at 1."""
        with self._lock:
            self._items.clear()
            self._last_id = 0
