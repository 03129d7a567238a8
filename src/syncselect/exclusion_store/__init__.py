"""Persistence of exclusion lists."""

from .base_store import BaseExclusionStore
from .ini_store import IniExclusionStore
from .text_store import TextExclusionStore

__all__ = [
    "BaseExclusionStore",
    "IniExclusionStore",
    "TextExclusionStore",
]
