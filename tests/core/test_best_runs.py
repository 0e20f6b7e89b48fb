"""
Tests for the best-runs leaderboard stores.
"""

import pytest

from dicetactician.core.best_runs import (
    InMemoryBestRunStore,
    JsonFileBestRunStore,
    RunSummary,
)


def summary(rounds: int, class_name: str = "Blade Dancer") -> RunSummary:
    return RunSummary(class_name=class_name, rounds=rounds, date="2024-01-01T00:00:00")


def test_record_run_sorts_by_rounds():
    store = InMemoryBestRunStore()
    store.record_run(summary(3))
    store.record_run(summary(7))
    runs = store.record_run(summary(5))
    assert [run.rounds for run in runs] == [7, 5, 3]
    assert store.load() == runs


def test_ties_keep_the_older_run_first():
    store = InMemoryBestRunStore()
    store.record_run(summary(4, "Geomancer"))
    store.record_run(summary(4, "Pyromantic"))
    assert [run.class_name for run in store.load()] == ["Geomancer", "Pyromantic"]


def test_leaderboard_is_truncated():
    """
    Test that only the best runs are kept once the limit is reached.
    """
    store = InMemoryBestRunStore()
    for rounds in range(15):
        store.record_run(summary(rounds))
    runs = store.load()
    assert len(runs) == 10
    assert runs[0].rounds == 14
    assert runs[-1].rounds == 5


def test_negative_rounds_rejected():
    with pytest.raises(ValueError):
        RunSummary(class_name="Blade Dancer", rounds=-1)


def test_json_store_round_trip(tmp_path):
    """
    Test that runs written to the JSON file are read back by a new store.
    """
    path = tmp_path / "scores" / "best_runs.json"
    JsonFileBestRunStore(path).record_run(summary(6))
    JsonFileBestRunStore(path).record_run(summary(2))
    runs = JsonFileBestRunStore(path).load()
    assert [run.rounds for run in runs] == [6, 2]
    assert runs[0].date == "2024-01-01T00:00:00"
    assert not list(path.parent.glob("*.tmp"))


def test_json_store_missing_file(tmp_path):
    assert JsonFileBestRunStore(tmp_path / "none.json").load() == []


def test_json_store_discards_corrupt_file(tmp_path):
    """
    Test that an unreadable file is treated as an empty leaderboard and replaced.
    """
    path = tmp_path / "best_runs.json"
    path.write_text("not json", encoding="utf-8")
    store = JsonFileBestRunStore(path)
    assert store.load() == []
    store.record_run(summary(1))
    assert [run.rounds for run in store.load()] == [1]


def test_json_store_failed_save_is_logged_and_cleaned_up(tmp_path, monkeypatch, caplog):
    """
    Test that a failing write is logged as an error, leaves no temporary
    file behind and propagates.
    """
    store = JsonFileBestRunStore(tmp_path / "runs.json")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("dicetactician.core.best_runs.os.replace", broken_replace)
    with caplog.at_level("ERROR", logger="dicetactician"):
        with pytest.raises(OSError):
            store.save([summary(3)])

    assert "Could not save the best runs" in caplog.text
    assert list(tmp_path.iterdir()) == []
