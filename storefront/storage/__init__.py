# Cart storage backends

from .base import CartStorage
from .memory import MemoryStorage
from .files import FileStorage

__all__ = [
    "CartStorage",
    "MemoryStorage",
    "FileStorage",
]
