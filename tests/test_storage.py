"""
Tests for Preference and History Storage
========================================
Tests load/save contracts, corrupt-data handling and best-effort writes
in dishnamer/storage.py.
"""

from datetime import datetime

import pytest
from sqlalchemy import text

from dishnamer.models import Preference
from dishnamer.preferences import PreferenceRecord
from dishnamer.storage import HistoryEntry, HistoryStore, PreferenceStore, StorageError


class TestPreferenceStore:
    """Tests for PreferenceStore."""

    def test_load_without_row_is_empty(self, session_factory):
        """Test that first use gives an empty record."""
        record = PreferenceStore(session_factory).load()
        assert record == PreferenceRecord()

    def test_save_then_load(self, session_factory, learned_record):
        """Test that a saved record loads back unchanged."""
        store = PreferenceStore(session_factory)
        store.save(learned_record)
        assert store.load() == learned_record

    def test_save_overwrites_single_row(self, session_factory, learned_record):
        """Test that repeated saves update one row."""
        store = PreferenceStore(session_factory)
        store.save(PreferenceRecord(selected_names=["Soup"], keywords={"soup": 1}))
        store.save(learned_record)
        with session_factory() as session:
            assert session.query(Preference).count() == 1
        assert store.load() == learned_record

    def test_users_are_separate(self, session_factory, learned_record):
        """Test that user keys do not share records."""
        PreferenceStore(session_factory, user="alex").save(learned_record)
        assert PreferenceStore(session_factory, user="sam").load() == PreferenceRecord()

    @pytest.mark.parametrize("data", [
        {"selectedNames": "not a list"},
        {"selectedNames": [], "keywords": {"spicy": -2}},
        ["The Spicy Garden Feast"],
    ])
    def test_corrupt_row_loads_empty(self, session_factory, data):
        """Test that malformed stored JSON gives an empty record."""
        with session_factory() as session:
            session.add(Preference(user="household", data=data))
            session.commit()
        assert PreferenceStore(session_factory).load() == PreferenceRecord()

    def test_invalid_json_loads_empty(self, session_factory):
        """Test that text that is not JSON at all gives an empty record."""
        with session_factory() as session:
            session.execute(text(
                "INSERT INTO preferences (user, data, created_at, updated_at) "
                "VALUES ('household', '{not json', '2026-01-01 00:00:00', '2026-01-01 00:00:00')"
            ))
            session.commit()
        assert PreferenceStore(session_factory).load() == PreferenceRecord()

    def test_unreadable_database_loads_empty(self, broken_session_factory):
        """Test that a database error on read is absorbed."""
        assert PreferenceStore(broken_session_factory).load() == PreferenceRecord()

    def test_failed_save_is_swallowed(self, broken_session_factory, learned_record):
        """Test best-effort writes."""
        PreferenceStore(broken_session_factory).save(learned_record)

    def test_failed_save_raises_when_fail_loud(self, broken_session_factory, learned_record):
        """Test fail-loud writes."""
        with pytest.raises(StorageError):
            PreferenceStore(broken_session_factory, fail_loud=True).save(learned_record)

    def test_top_keywords(self, learned_record):
        """Test the ranking helper exposed on the store."""
        assert PreferenceStore.top_keywords(learned_record, 2) == ["Spicy", "Garden"]


class TestHistoryStore:
    """Tests for HistoryStore."""

    def test_empty_history(self, session_factory):
        """Test that a new database has no history."""
        assert HistoryStore(session_factory).load() == []

    def test_append_keeps_order(self, session_factory):
        """Test storage order and most-recent-first reads."""
        store = HistoryStore(session_factory)
        for name in ["First Dish", "Second Dish", "Third Dish"]:
            store.append(HistoryEntry(name=name, image="data:image/png;base64,AAAA"))

        assert [e.name for e in store.load()] == ["First Dish", "Second Dish", "Third Dish"]
        assert [e.name for e in store.recent()] == ["Third Dish", "Second Dish", "First Dish"]

    def test_entry_fields_round_trip(self, session_factory):
        """Test that every field is stored."""
        store = HistoryStore(session_factory)
        date = datetime(2026, 3, 14, 18, 30, 5)
        store.append(HistoryEntry(
            name="The Lazy Feast",
            image=None,
            date=date,
            suggestions=["The Golden Delight", "The Lazy Feast", "Smoky Zesty Soup"],
        ))
        entry = store.load()[0]
        assert entry.name == "The Lazy Feast"
        assert entry.image is None
        assert entry.date == date
        assert entry.suggestions[1] == "The Lazy Feast"
        assert entry.to_dict()["date"] == "2026-03-14T18:30:05+00:00"

    def test_unreadable_history_is_empty(self, broken_session_factory):
        """Test that read failures give an empty list."""
        assert HistoryStore(broken_session_factory).recent() == []

    def test_failed_append(self, broken_session_factory):
        """Test best-effort and fail-loud appends."""
        HistoryStore(broken_session_factory).append(HistoryEntry(name="Soup"))
        with pytest.raises(StorageError):
            HistoryStore(broken_session_factory, fail_loud=True).append(HistoryEntry(name="Soup"))
