"""Self-care checklist with a 12-hour rolling expiry.

The checked set is stored as ``{"items": [...], "timestamp": <ms>}`` under a
single key. Every toggle rewrites the timestamp, so the window is measured
from the last edit rather than from a fixed daily boundary.
"""

from __future__ import annotations

import enum
import json
import logging
import time
from dataclasses import dataclass
from typing import Callable

from mindhaven.selfcare.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "copingToolsCheckedItems"
EXPIRY_MS = 12 * 60 * 60 * 1000


@dataclass(frozen=True)
class ChecklistItem:
    id: int
    label: str


DEFAULT_ITEMS: tuple[ChecklistItem, ...] = (
    ChecklistItem(1, "Drink water"),
    ChecklistItem(2, "Take a break"),
    ChecklistItem(3, "Move your body"),
    ChecklistItem(4, "Connect with someone"),
    ChecklistItem(5, "Practice mindfulness"),
)


class ChecklistState(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


def _now_ms() -> float:
    return time.time() * 1000


class SelfCareChecklist:
    """Checked-item state persisted to a key-value store."""

    def __init__(
        self,
        storage: KeyValueStorage,
        items: tuple[ChecklistItem, ...] = DEFAULT_ITEMS,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        if not items:
            raise ValueError("Checklist needs at least one item")
        self.storage = storage
        self.items = items
        self.clock = clock
        self.checked: list[int] = []
        self.state = ChecklistState.EXPIRED
        self._timestamp: float | None = None

    @property
    def item_ids(self) -> set[int]:
        return {item.id for item in self.items}

    def load(self) -> ChecklistState:
        """Restore the stored set unless it is 12 hours old or more."""
        self.checked = []
        self._timestamp = None
        self.state = ChecklistState.EXPIRED

        raw = self.storage.get(STORAGE_KEY)
        if raw is None:
            return self.state
        try:
            blob = json.loads(raw)
            items = [int(i) for i in blob["items"]]
            timestamp = float(blob["timestamp"])
        except (ValueError, TypeError, KeyError) as exc:
            logger.warning("Discarding unreadable checklist state: %s", exc)
            self.storage.remove(STORAGE_KEY)
            return self.state

        if self.clock() - timestamp >= EXPIRY_MS:
            self.storage.remove(STORAGE_KEY)
            return self.state

        known = self.item_ids
        self.checked = [i for i in dict.fromkeys(items) if i in known]
        self._timestamp = timestamp
        self.state = ChecklistState.ACTIVE
        return self.state

    def toggle(self, item_id: int) -> bool:
        """Flip one item and persist the whole set. Returns the item's new checked state."""
        if item_id not in self.item_ids:
            raise ValueError(f"Unknown checklist item {item_id}")
        if item_id in self.checked:
            self.checked.remove(item_id)
            now_checked = False
        else:
            self.checked.append(item_id)
            now_checked = True
        self._save()
        return now_checked

    def reset(self) -> None:
        """Clear everything now, regardless of the timer."""
        self.checked = []
        self._timestamp = None
        self.state = ChecklistState.EXPIRED
        self.storage.remove(STORAGE_KEY)

    def _save(self) -> None:
        self._timestamp = self.clock()
        self.storage.set(STORAGE_KEY, json.dumps({"items": self.checked, "timestamp": self._timestamp}))
        self.state = ChecklistState.ACTIVE

    def is_checked(self, item_id: int) -> bool:
        return item_id in self.checked

    @property
    def progress(self) -> float:
        """Percentage of items checked, 0-100."""
        return len(self.checked) / len(self.items) * 100

    @property
    def is_complete(self) -> bool:
        return len(self.checked) == len(self.items)

    @property
    def celebration(self) -> str | None:
        if not self.is_complete:
            return None
        return "Amazing! You've completed all your self-care activities!"

    def time_remaining(self) -> str:
        """Time left before the stored state expires, as ``"{h}h {m}m"``."""
        if self._timestamp is None:
            return "0h 0m"
        remaining = EXPIRY_MS - (self.clock() - self._timestamp)
        if remaining <= 0:
            return "0h 0m"
        hours = int(remaining // (60 * 60 * 1000))
        minutes = int((remaining % (60 * 60 * 1000)) // (60 * 1000))
        return f"{hours}h {minutes}m"
