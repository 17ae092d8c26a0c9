from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

from .storage import StoragePort

logger = logging.getLogger(__name__)

INGREDIENTS_KEY = "pantrychef.ingredients"
RECIPE_KEY = "pantrychef.recipe"


class IngredientStore:
    """
    Ordered ingredient list plus the last generated recipe, mirrored to
    durable storage. Every mutation overwrites the full persisted list.
    """

    def __init__(self, storage: StoragePort):
        self._storage = storage
        self._items: List[str] = self._load_items()
        self._recipe: Optional[str] = storage.get(RECIPE_KEY) or None

    def _load_items(self) -> List[str]:
        raw = self._storage.get(INGREDIENTS_KEY)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            data = None
        if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
            logger.warning("Discarding unreadable ingredient list in %r", INGREDIENTS_KEY)
            return []
        return data

    def _persist(self) -> None:
        self._storage.set(INGREDIENTS_KEY, json.dumps(self._items, ensure_ascii=False))

    @property
    def items(self) -> Tuple[str, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, text: str) -> bool:
        """Append `text` trimmed; blank input is ignored. Returns whether it was added."""
        trimmed = (text or "").strip()
        if not trimmed:
            return False
        self._items.append(trimmed)
        self._persist()
        return True

    def remove(self, index: int) -> str:
        if not 0 <= index < len(self._items):
            raise IndexError(f"No ingredient at position {index}")
        removed = self._items.pop(index)
        self._persist()
        return removed

    def clear(self) -> None:
        """Start over: no ingredients, no recipe, nothing left in storage."""
        self._items = []
        self._recipe = None
        self._storage.remove(INGREDIENTS_KEY)
        self._storage.remove(RECIPE_KEY)

    @property
    def recipe(self) -> Optional[str]:
        return self._recipe

    @recipe.setter
    def recipe(self, text: Optional[str]) -> None:
        self._recipe = text or None
        if self._recipe is None:
            self._storage.remove(RECIPE_KEY)
        else:
            self._storage.set(RECIPE_KEY, self._recipe)
