import json
import sys
import types

import pytest

from best_times import BestTimes, parse_record


class FakeStorage:
    def __init__(self):
        self.items = {}

    def getItem(self, key):
        return self.items.get(key)

    def setItem(self, key, value):
        self.items[key] = value


def test_missing_file_means_no_data(tmp_path):
    store = BestTimes(path=str(tmp_path / "best.json"), web=False)
    assert store.load() == {}
    assert store.get(1) is None


def test_submit_persists_and_reloads(tmp_path):
    path = tmp_path / "best.json"
    store = BestTimes(path=str(path), web=False)
    assert store.submit(1, 42)
    assert store.submit(3, 90)

    assert json.loads(path.read_text(encoding="utf-8")) == {"1": 42, "3": 90}

    reloaded = BestTimes(path=str(path), web=False)
    assert reloaded.load() == {1: 42, 3: 90}


def test_only_faster_times_replace_the_record(tmp_path):
    store = BestTimes(path=str(tmp_path / "best.json"), web=False)
    assert store.submit(2, 30)
    assert not store.submit(2, 30)
    assert not store.submit(2, 45)
    assert store.get(2) == 30
    assert store.submit(2, 0)
    assert store.get(2) == 0


def test_negative_time_rejected(tmp_path):
    store = BestTimes(path=str(tmp_path / "best.json"), web=False)
    with pytest.raises(ValueError):
        store.submit(1, -1)


def test_corrupt_file_treated_as_empty(tmp_path, capsys):
    path = tmp_path / "best.json"
    path.write_text("{not json", encoding="utf-8")
    store = BestTimes(path=str(path), web=False)
    assert store.load() == {}
    assert "corrupt" in capsys.readouterr().out


@pytest.mark.parametrize("raw,expected", [
    ('{"1": 12, "2": 30}', {1: 12, 2: 30}),
    ('{"x": 12, "2": 30}', {2: 30}),
    ('{"1": -4, "2": "fast", "3": 1.5, "4": true, "0": 5}', {}),
    ('[1, 2, 3]', {}),
    ('null', {}),
])
def test_parse_record_skips_bad_entries(raw, expected):
    assert parse_record(raw) == expected


def test_reset_clears_saved_times(tmp_path):
    path = tmp_path / "best.json"
    store = BestTimes(path=str(path), web=False)
    store.submit(1, 10)
    store.reset()
    assert store.times == {}
    assert BestTimes(path=str(path), web=False).load() == {}


def test_write_failure_keeps_memory(tmp_path):
    # A directory can't be opened for writing
    store = BestTimes(path=str(tmp_path), web=False)
    assert store.submit(1, 15)
    assert store.get(1) == 15
    assert not store.save()


def test_web_mode_uses_local_storage(monkeypatch):
    storage = FakeStorage()
    monkeypatch.setitem(sys.modules, "js", types.SimpleNamespace(localStorage=storage))

    store = BestTimes(storage_key="maze_best_times", web=True)
    assert store.load() == {}
    store.submit(4, 77)
    assert json.loads(storage.items["maze_best_times"]) == {"4": 77}

    assert BestTimes(storage_key="maze_best_times", web=True).load() == {4: 77}


class JsException(Exception):
    """Stand-in for pyodide's JsException."""


class BrokenStorage:
    def getItem(self, key):
        raise JsException("SecurityError: access denied")

    def setItem(self, key, value):
        raise JsException("QuotaExceededError: storage full")


def test_web_read_failure_means_no_data(monkeypatch, capsys):
    monkeypatch.setitem(sys.modules, "js", types.SimpleNamespace(localStorage=BrokenStorage()))
    store = BestTimes(web=True)
    assert store.load() == {}
    assert "Could not read localStorage" in capsys.readouterr().out


def test_web_write_failure_keeps_memory(monkeypatch, capsys):
    monkeypatch.setitem(sys.modules, "js", types.SimpleNamespace(localStorage=BrokenStorage()))
    store = BestTimes(web=True)
    assert store.submit(1, 10)
    assert store.get(1) == 10
    assert not store.save()
    assert "Failed to save best times" in capsys.readouterr().out


def test_duplicate_level_keys_keep_fastest_time():
    assert parse_record('{"1": 20, "01": 12}') == {1: 12}
    assert parse_record('{"01": 12, "1": 20}') == {1: 12}
