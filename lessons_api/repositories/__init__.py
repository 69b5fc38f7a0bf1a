"""Storage repositories.

Repositories hide how records are kept; the only implementation today is
an in-memory store.
"""

from lessons_api.repositories.item_repo import ItemRepository

__all__ = ["ItemRepository"]
