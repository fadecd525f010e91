import json

import pytest

from snapshot_cache import (
    cache_exists, load_snapshots, save_snapshots, encode_snapshots, decode_snapshots, CacheError,
)

from conftest import make_snapshot


def sample():
    huge = 2 ** 200 + 12345
    return [
        make_snapshot("Cosmos Hub", huge, [("whale", huge - 7), ("shrimp", 7)], zone_id="cosmos", not_bonded=10 ** 30 + 1),
        make_snapshot("Partial", 1000, None, zone_id="partial"),
    ]


def test_round_trip_is_exact(tmp_path):
    path = str(tmp_path / "zonesdata.json")
    snaps = sample()

    assert not cache_exists(path)
    assert save_snapshots(path, snaps) is True
    assert cache_exists(path)
    assert load_snapshots(path) == snaps


def test_integers_are_written_as_decimal_strings(tmp_path):
    path = tmp_path / "zonesdata.json"
    save_snapshots(str(path), sample())

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc[0]["bonded_tokens"] == str(2 ** 200 + 12345)
    assert doc[0]["not_bonded_tokens"] == str(10 ** 30 + 1)
    assert doc[0]["validators"][1] == {"moniker": "shrimp", "tokens": "7"}
    assert "validators" not in doc[1]


def test_codec_does_not_mutate_input():
    snaps = sample()
    encoded = encode_snapshots(snaps)
    assert isinstance(snaps[0]["bonded_tokens"], int)
    assert decode_snapshots(encoded) == snaps


def test_save_failure_is_reported_not_raised(tmp_path):
    assert save_snapshots(str(tmp_path), sample()) is False
    assert save_snapshots(str(tmp_path / "x.json"), [{"zone": {}}]) is False


@pytest.mark.parametrize("content", [
    "not json",
    '{"zone": {}}',
    '[{"zone": {"id": "a", "name": "A"}, "total_validator_num": 1, "bonded_tokens": "1.5", "not_bonded_tokens": "0"}]',
    '[{"zone": {"id": "a", "name": "A"}}]',
    '[{"total_validator_num": 1, "bonded_tokens": "1", "not_bonded_tokens": "0", "validators": []}]',
    '[{"zone": {"id": "a"}, "total_validator_num": 1, "bonded_tokens": "1", "not_bonded_tokens": "0"}]',
    '[{"zone": {"id": "a", "name": "A"}, "total_validator_num": 1, "bonded_tokens": 1000.9, "not_bonded_tokens": "0"}]',
    '[{"zone": {"id": "a", "name": "A"}, "total_validator_num": 1, "bonded_tokens": "1_000", "not_bonded_tokens": "0"}]',
    '[{"zone": {"id": "a", "name": "A"}, "total_validator_num": 1, "bonded_tokens": " 12 ", "not_bonded_tokens": "0"}]',
    '[{"zone": {"id": "a", "name": "A"}, "total_validator_num": 1, "bonded_tokens": "10", "not_bonded_tokens": "0",'
    '  "validators": [{"moniker": "a", "tokens": "-5"}]}]',
    '[{"zone": {"id": "a", "name": "A"}, "total_validator_num": 1, "bonded_tokens": "10", "not_bonded_tokens": "0",'
    '  "validators": [{"moniker": null, "tokens": "5"}]}]',
    '[{"zone": {"id": "a", "name": "A"}, "total_validator_num": 1.5, "bonded_tokens": "10", "not_bonded_tokens": "0"}]',
])
def test_malformed_cache_raises(tmp_path, content):
    path = tmp_path / "zonesdata.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(CacheError):
        load_snapshots(str(path))


def test_unreadable_cache_raises(tmp_path):
    with pytest.raises(CacheError):
        load_snapshots(str(tmp_path / "missing.json"))
