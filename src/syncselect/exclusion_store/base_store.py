from abc import ABC, abstractmethod
from typing import List, Sequence


class BaseExclusionStore(ABC):
    """
    Abstract base class defining the interface for exclusion list persistence.

    A store keeps the exclusion list of one synchronized folder. ``load`` provides the
    prior exclusions a selective sync session starts from, and ``save`` receives the
    list a session derives on commit. A store that was never written loads as an
    empty list.

    Example:
        >>> class MemoryExclusionStore(BaseExclusionStore):
        ...     def __init__(self):
        ...         self.paths = []
        ...     def load(self):
        ...         return list(self.paths)
        ...     def save(self, paths):
        ...         self.paths = list(paths)
        >>> store = MemoryExclusionStore()
        >>> store.save(["/Photos/2019"])
        >>> store.load()
        ['/Photos/2019']
    """

    @abstractmethod
    def load(self) -> List[str]:
        """
        Read the stored exclusion list.

        Returns:
            List[str]: The stored exclusion paths in stored order, or an empty list if
                nothing has been stored yet.

        Raises:
            ExclusionStoreError: If the store exists but cannot be read.
        """
        pass

    @abstractmethod
    def save(self, paths: Sequence[str]) -> None:
        """
        Replace the stored exclusion list.

        Args:
            paths (Sequence[str]): The exclusion paths to store, in order.

        Raises:
            ExclusionStoreError: If the store cannot be written.
        """
        pass
