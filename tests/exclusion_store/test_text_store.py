import pytest

from syncselect.exceptions import ExclusionStoreError
from syncselect.exclusion_store.text_store import TextExclusionStore


def test_missing_file_loads_empty(tmp_path):
    store = TextExclusionStore(tmp_path / "blacklist.txt")
    assert store.load() == []


def test_save_and_load(tmp_path):
    path = tmp_path / "blacklist.txt"
    store = TextExclusionStore(path)
    store.save(["/Photos/2019", "/Music"])

    assert path.read_text(encoding="utf-8") == "/Photos/2019\n/Music\n"
    assert store.load() == ["/Photos/2019", "/Music"]


def test_save_replaces_previous_content(tmp_path):
    store = TextExclusionStore(tmp_path / "blacklist.txt")
    store.save(["/a", "/b"])
    store.save([])
    assert store.load() == []


def test_comments_and_blank_lines_are_ignored(tmp_path):
    path = tmp_path / "blacklist.txt"
    path.write_text("# excluded folders\n\n  /Photos/2019  \n#/Music\n/Videos/\n", encoding="utf-8")
    assert TextExclusionStore(path).load() == ["/Photos/2019", "/Videos/"]


def test_unreadable_store_raises(tmp_path):
    store = TextExclusionStore(tmp_path)
    with pytest.raises(ExclusionStoreError) as excinfo:
        store.load()
    assert excinfo.value.location == str(tmp_path)


def test_unwritable_store_raises(tmp_path):
    store = TextExclusionStore(tmp_path / "missing" / "blacklist.txt")
    with pytest.raises(ExclusionStoreError):
        store.save(["/a"])
