import configparser

import pytest

from syncselect.exceptions import ExclusionStoreError
from syncselect.exclusion_store.ini_store import BLACKLIST_KEY, IniExclusionStore


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "folders.cfg"
    path.write_text(
        "[Documents]\nlocalPath = /home/user/Documents\ntargetPath = /Documents\n\n[Photos]\nblackList = /Photos/raw\n",
        encoding="utf-8",
    )
    return path


def test_empty_section_rejected(tmp_path):
    with pytest.raises(ValueError):
        IniExclusionStore(tmp_path / "folders.cfg", "")


def test_missing_file_or_key_loads_empty(tmp_path, config_file):
    assert IniExclusionStore(tmp_path / "absent.cfg", "Documents").load() == []
    assert IniExclusionStore(config_file, "Documents").load() == []
    assert IniExclusionStore(config_file, "Unknown").load() == []


def test_single_line_value(config_file):
    assert IniExclusionStore(config_file, "Photos").load() == ["/Photos/raw"]


def test_save_preserves_other_settings(config_file):
    store = IniExclusionStore(config_file, "Documents")
    store.save(["/Documents/old", "/Documents/tmp"])

    assert store.load() == ["/Documents/old", "/Documents/tmp"]

    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str
    parser.read(config_file, encoding="utf-8")
    assert parser.get("Documents", "localPath") == "/home/user/Documents"
    assert parser.get("Documents", "targetPath") == "/Documents"
    assert parser.has_option("Documents", BLACKLIST_KEY)
    assert parser.get("Photos", BLACKLIST_KEY) == "/Photos/raw"


def test_save_creates_file_and_section(tmp_path):
    path = tmp_path / "new.cfg"
    store = IniExclusionStore(path, "Music")
    store.save(["/Music/%live"])
    assert path.exists()
    assert store.load() == ["/Music/%live"]


def test_save_empty_list(config_file):
    store = IniExclusionStore(config_file, "Photos")
    store.save([])
    assert store.load() == []


def test_malformed_file_raises(tmp_path):
    path = tmp_path / "broken.cfg"
    path.write_text("blackList = /a\n", encoding="utf-8")
    with pytest.raises(ExclusionStoreError):
        IniExclusionStore(path, "Documents").load()
