"""Exclusion lists kept in a folder's section of an INI configuration file."""

import configparser
from pathlib import Path
from typing import List, Sequence

from syncselect.exceptions import ExclusionStoreError
from syncselect.exclusion_store.base_store import BaseExclusionStore
from syncselect.types import PathType

BLACKLIST_KEY = "blackList"


class IniExclusionStore(BaseExclusionStore):
    """Exclusion list stored under the ``blackList`` key of one INI section.

    Sync clients keep one section per configured folder, named after the folder's
    alias. Only the ``blackList`` key of that section is touched; other sections and
    keys are preserved when saving. The list is written as a multi-line value, one
    path per line.

    Attributes:
        config_file (Path): The INI file.
        section (str): The section holding this folder's settings.

    Example:
        >>> import os, tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     store = IniExclusionStore(os.path.join(tmpdir, "folders.cfg"), "Documents")
        ...     store.save(["/Documents/old", "/Documents/tmp"])
        ...     store.load()
        ['/Documents/old', '/Documents/tmp']
    """

    def __init__(self, config_file: PathType, section: str) -> None:
        """Initialize the store.

        Args:
            config_file: The INI file. It is created on the first save.
            section: The section of the folder whose exclusion list is stored.

        Raises:
            ValueError: If section is empty.
        """
        if not section:
            raise ValueError("An INI section name must be provided")
        self.config_file = Path(config_file)
        self.section = section

    def _read(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore
        if self.config_file.exists():
            try:
                with self.config_file.open("r", encoding="utf-8") as f:
                    parser.read_file(f)
            except (OSError, configparser.Error) as e:
                raise ExclusionStoreError(str(self.config_file), str(e))
        return parser

    def load(self) -> List[str]:
        parser = self._read()
        if not parser.has_option(self.section, BLACKLIST_KEY):
            return []
        value = parser.get(self.section, BLACKLIST_KEY)
        return [line.strip() for line in value.splitlines() if line.strip()]

    def save(self, paths: Sequence[str]) -> None:
        parser = self._read()
        if not parser.has_section(self.section):
            parser.add_section(self.section)
        parser.set(self.section, BLACKLIST_KEY, "".join(f"\n{path}" for path in paths))
        try:
            with self.config_file.open("w", encoding="utf-8") as f:
                parser.write(f)
        except OSError as e:
            raise ExclusionStoreError(str(self.config_file), str(e))
