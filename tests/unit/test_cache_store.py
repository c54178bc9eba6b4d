"""JsonCacheStoreのテスト"""

import json
from pathlib import Path

import pytest

from mileage.features.storage.repositories.cache_store import JsonCacheStore
from mileage.shared.exceptions.errors import StorageError


def test_load_missing_file_returns_empty(tmp_path: Path) -> None:
    """ファイルがなくても失敗しない"""
    store = JsonCacheStore(tmp_path / "missing.json")

    assert store.load() == {}
    assert len(store) == 0


def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "cache" / "routeCache.json"
    store = JsonCacheStore(path)
    store.set("HOME|LS", 1234.5)
    store.set("123 Fake St", {"lat": 39.78, "lon": -89.65})
    store.save()

    reloaded = JsonCacheStore(path)
    reloaded.load()

    assert reloaded.get("HOME|LS") == 1234.5
    assert reloaded.get("123 Fake St") == {"lat": 39.78, "lon": -89.65}
    assert "HOME|LS" in reloaded
    assert reloaded.get("nope") is None


def test_save_is_pretty_printed_and_overwrites(tmp_path: Path) -> None:
    """インデント2で書き出し、既存の内容は上書きされる"""
    path = tmp_path / "geoCache.json"
    path.write_text(json.dumps({"stale": 1}), encoding="utf-8")

    store = JsonCacheStore(path)
    store.data = {"A|B": 10}
    store.save()

    assert path.read_text(encoding="utf-8") == '{\n  "A|B": 10\n}'


def test_load_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonCacheStore(path).load()


def test_load_non_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonCacheStore(path).load()
