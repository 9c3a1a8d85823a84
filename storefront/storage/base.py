"""Key-value slot interface for cart persistence"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CartStorage(Protocol):
    """Durable string slots addressed by key, localStorage style"""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...
