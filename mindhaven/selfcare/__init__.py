"""Client-local self-care checklist state."""

from mindhaven.selfcare.checklist import DEFAULT_ITEMS, ChecklistItem, ChecklistState, SelfCareChecklist
from mindhaven.selfcare.storage import JsonFileStorage, MemoryStorage

__all__ = [
    "ChecklistItem",
    "ChecklistState",
    "DEFAULT_ITEMS",
    "JsonFileStorage",
    "MemoryStorage",
    "SelfCareChecklist",
]
