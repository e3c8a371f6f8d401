"""
Tests for the journal store and its merge policy.
"""

from datetime import datetime, timezone

import pytest

from task_reminder.domain.errors import InvalidJournalText
from task_reminder.domain.models import JournalEntry
from task_reminder.infra.repository import JournalRepository
from task_reminder.services.journal_service import JournalService


def make_entry(entry_id: str, text: str = None) -> JournalEntry:
    return JournalEntry(
        id=entry_id,
        text=text or f"note {entry_id}",
        created_at=datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def repo(kv_store):
    return JournalRepository(kv_store)


@pytest.fixture
def journal(repo):
    return JournalService(repo)


def ids(journal: JournalService):
    return [entry.id for entry in journal.entries]


class TestLocalMutation:

    def test_add_prepends_and_persists(self, journal, repo):
        first = journal.add("first")
        second = journal.add("second")

        assert [e.text for e in journal.entries] == ["second", "first"]
        assert first.id != second.id
        assert [e.id for e in repo.load()] == [second.id, first.id]

    def test_add_announces_entry(self, journal):
        added = []
        journal.entry_added.connect(added.append)

        entry = journal.add("hello")

        assert added == [entry]

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_text_is_rejected(self, journal, text):
        with pytest.raises(InvalidJournalText):
            journal.add(text)
        assert journal.entries == ()

    def test_delete_removes_entry_without_reordering(self, journal):
        a = journal.add("a")
        b = journal.add("b")
        c = journal.add("c")

        assert journal.delete(b.id)

        assert ids(journal) == [c.id, a.id]

    def test_delete_unknown_id_is_noop(self, journal):
        journal.add("a")
        before = journal.entries

        assert not journal.delete("missing")
        assert not journal.delete("missing")

        assert journal.entries == before

    def test_load_restores_persisted_entries(self, repo):
        writer = JournalService(repo)
        writer.add("kept")

        reader = JournalService(repo)
        reader.load()

        assert [e.text for e in reader.entries] == ["kept"]


class TestMerge:

    def test_single_entry_is_prepended(self, journal):
        journal.merge([make_entry("A")])
        journal.merge([make_entry("B")])

        assert ids(journal) == ["B", "A"]

    def test_full_list_replaces(self, journal):
        journal.merge([make_entry("A")])
        journal.merge([make_entry("B"), make_entry("C")])

        assert ids(journal) == ["B", "C"]

    def test_empty_payload_changes_nothing(self, journal):
        journal.merge([make_entry("A")])
        journal.merge([])

        assert ids(journal) == ["A"]

    def test_local_add_then_single_remote_entry_keeps_both(self, journal):
        journal.add("hello")
        journal.merge([make_entry("remote")])

        assert len(journal.entries) == 2
        assert journal.entries[0].id == "remote"

    def test_merge_does_not_announce(self, journal):
        added = []
        journal.entry_added.connect(added.append)

        journal.merge([make_entry("A")])
        journal.merge([make_entry("B"), make_entry("C")])

        assert added == []

    def test_merge_persists(self, journal, repo):
        journal.merge([make_entry("B"), make_entry("C")])
        assert [e.id for e in repo.load()] == ["B", "C"]

    def test_echo_of_own_entry_is_prepended_again(self, journal):
        entry = journal.add("mine")
        journal.merge([entry])

        assert ids(journal) == [entry.id, entry.id]
