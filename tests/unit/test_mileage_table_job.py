"""マイレージ表生成ジョブのテスト"""

import json
from pathlib import Path

import pytest

from conftest import KNOWN_PLACES, FakeHTTPClient
from mileage.features.batch.orchestrator import BatchOrchestrator
from mileage.infrastructure.config.settings import PLACEHOLDER_ACCESS_TOKEN, Settings
from mileage.shared.exceptions.errors import ConfigError, NotFoundError, ServiceError

LOCATIONS = dict(zip(["HOME", "LS", "JACOBS", "OFFICE"], KNOWN_PLACES))


@pytest.fixture
def batch_settings(settings: Settings) -> Settings:
    settings.locations = dict(LOCATIONS)
    return settings


def _run(settings: Settings, http: FakeHTTPClient):
    return BatchOrchestrator(settings, http_client=http).run_mileage_table(show_progress=False)


def test_table_is_symmetric_and_complete(batch_settings: Settings, fake_http: FakeHTTPClient) -> None:
    result = _run(batch_settings, fake_http)
    table = result.table
    keys = list(LOCATIONS)

    assert len(table) == len(keys) * (len(keys) - 1)
    for a in keys:
        assert f"{a}|{a}" not in table
        for b in keys:
            if a != b:
                assert table[f"{a}|{b}"] == table[f"{b}|{a}"]

    assert result.pair_count == 6
    assert len(fake_http.geocode_calls) == 4
    assert len(fake_http.route_calls) == 6


def test_values_are_rounded_miles(batch_settings: Settings, fake_http: FakeHTTPClient) -> None:
    table = _run(batch_settings, fake_http).table

    assert all(round(v, 2) == v for v in table.values())


def test_caches_and_output_written(batch_settings: Settings, fake_http: FakeHTTPClient) -> None:
    result = _run(batch_settings, fake_http)

    geo_cache = json.loads(Path(batch_settings.geo_cache_file).read_text(encoding="utf-8"))
    route_cache = json.loads(Path(batch_settings.route_cache_file).read_text(encoding="utf-8"))

    assert set(geo_cache) == set(LOCATIONS.values())
    assert geo_cache[LOCATIONS["HOME"]] == {"lat": 39.780, "lon": -89.650}
    # 距離キャッシュは列挙順のペアキーのみ（メートル）
    assert set(route_cache) == {
        "HOME|LS", "HOME|JACOBS", "HOME|OFFICE", "LS|JACOBS", "LS|OFFICE", "JACOBS|OFFICE",
    }
    assert result.output_path == Path(batch_settings.output_file)
    assert "export default MILEAGE_TABLE;" in result.output_path.read_text(encoding="utf-8")


def test_warm_cache_makes_no_requests(batch_settings: Settings, fake_http: FakeHTTPClient) -> None:
    """キャッシュが揃っていれば2回目はAPIを呼ばず、同一の表を出力する"""
    first = _run(batch_settings, fake_http)
    first_output = first.output_path.read_text(encoding="utf-8")

    warm_http = FakeHTTPClient()
    second = _run(batch_settings, warm_http)

    assert warm_http.calls == []
    assert second.api_requests == 0
    assert second.table == first.table
    assert second.output_path.read_text(encoding="utf-8") == first_output


def test_failure_discards_lookups_from_this_run(batch_settings: Settings) -> None:
    """キャッシュは最後にしか保存しないため、途中の失敗で当該実行の結果は残らない"""
    http = FakeHTTPClient(fail_routes_after=2)

    with pytest.raises(ServiceError):
        _run(batch_settings, http)

    assert not Path(batch_settings.geo_cache_file).exists()
    assert not Path(batch_settings.route_cache_file).exists()
    assert not Path(batch_settings.output_file).exists()


def test_unknown_address_aborts(batch_settings: Settings, fake_http: FakeHTTPClient) -> None:
    batch_settings.locations = {**LOCATIONS, "CABIN": "1 Nowhere Rd"}

    with pytest.raises(NotFoundError):
        _run(batch_settings, fake_http)
    assert fake_http.route_calls == []


def test_placeholder_token_checked_before_network(batch_settings: Settings, fake_http: FakeHTTPClient) -> None:
    batch_settings.mapbox_access_token = PLACEHOLDER_ACCESS_TOKEN

    with pytest.raises(ConfigError):
        _run(batch_settings, fake_http)
    assert fake_http.calls == []


def test_unsupported_output_checked_before_network(batch_settings: Settings, fake_http: FakeHTTPClient, tmp_path: Path) -> None:
    batch_settings.output_file = str(tmp_path / "table.txt")

    with pytest.raises(ConfigError):
        _run(batch_settings, fake_http)
    assert fake_http.calls == []


def test_home_addr_override(batch_settings: Settings, fake_http: FakeHTTPClient) -> None:
    batch_settings.home_addr = "500 Corporate Dr, Springfield IL"
    batch_settings.locations = {"HOME": "ignored", "LS": LOCATIONS["LS"]}

    result = _run(batch_settings, fake_http)

    assert set(result.table) == {"HOME|LS", "LS|HOME"}
    assert fake_http.geocode_calls[0][0].endswith("500%20Corporate%20Dr%2C%20Springfield%20IL.json")
