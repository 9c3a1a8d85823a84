"""In-memory cart storage"""

from typing import Optional


class MemoryStorage:
    """In-memory key-value slots, lost when the process exits"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.slots: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        """Get the value stored under key"""
        return self.slots.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store value under key"""
        self.slots[key] = value

    def remove_item(self, key: str) -> None:
        """Remove key if present"""
        self.slots.pop(key, None)
