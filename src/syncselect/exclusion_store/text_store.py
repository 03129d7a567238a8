"""Plain text exclusion list files."""

from pathlib import Path
from typing import List, Sequence

from syncselect.exceptions import ExclusionStoreError
from syncselect.exclusion_store.base_store import BaseExclusionStore
from syncselect.types import PathType


class TextExclusionStore(BaseExclusionStore):
    """Exclusion list stored as a text file with one path per line.

    Blank lines and lines starting with ``#`` are ignored when loading, and
    surrounding whitespace is stripped. A missing file loads as an empty list.

    Attributes:
        path (Path): The backing file.

    Example:
        >>> import os, tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     store = TextExclusionStore(os.path.join(tmpdir, "blacklist.txt"))
        ...     store.save(["/Photos/2019", "/Music"])
        ...     store.load()
        ['/Photos/2019', '/Music']
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)

    def load(self) -> List[str]:
        if not self.path.exists():
            return []
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ExclusionStoreError(str(self.path), str(e))
        return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]

    def save(self, paths: Sequence[str]) -> None:
        content = "".join(f"{path}\n" for path in paths)
        try:
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExclusionStoreError(str(self.path), str(e))
