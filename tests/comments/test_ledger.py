"""Tests for the comment ledger."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from storefront.comments.ledger import Comment, CommentLedger, storage_key
from storefront.infrastructure.storage import InMemoryKeyValueStorage, SqliteKeyValueStorage

NOW = datetime(2024, 3, 14, 14, 5, 9, tzinfo=timezone.utc)


class FakeClock:
    """Clock returning queued instants, repeating the last one."""

    def __init__(self, *instants: datetime) -> None:
        self.instants = list(instants) or [NOW]

    def __call__(self) -> datetime:
        if len(self.instants) > 1:
            return self.instants.pop(0)
        return self.instants[0]


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    """Create empty in-memory storage."""
    return InMemoryKeyValueStorage()


@pytest.fixture
def ledger(storage: InMemoryKeyValueStorage) -> CommentLedger:
    """Create ledger with a fixed clock."""
    return CommentLedger(storage, clock=FakeClock())


class TestStorageKey:
    """Tests for storage key derivation."""

    def test_key_format(self) -> None:
        """Key is the slug prefixed with comments_."""
        assert storage_key("story-one") == "comments_story-one"


class TestLoad:
    """Tests for loading comment logs."""

    def test_unknown_slug_is_empty(self, ledger: CommentLedger) -> None:
        """Nothing stored yields an empty log."""
        assert ledger.load("story-one") == []

    def test_invalid_json_is_empty(self, storage: InMemoryKeyValueStorage) -> None:
        """Undecodable data is treated as an empty log."""
        storage.set("comments_story-one", "{not json")
        assert CommentLedger(storage).load("story-one") == []

    def test_non_list_is_empty(self, storage: InMemoryKeyValueStorage) -> None:
        """A JSON object instead of a list is treated as empty."""
        storage.set("comments_story-one", json.dumps({"author": "Ann"}))
        assert CommentLedger(storage).load("story-one") == []

    def test_malformed_entry_is_empty(self, storage: InMemoryKeyValueStorage) -> None:
        """Entries missing fields are treated as an empty log."""
        storage.set("comments_story-one", json.dumps([{"author": "Ann"}]))
        assert CommentLedger(storage).load("story-one") == []

    def test_legacy_entries(self, storage: InMemoryKeyValueStorage) -> None:
        """Entries using username and locale timestamps are readable."""
        storage.set(
            "comments_story-one",
            json.dumps([
                {"username": "Ann", "text": "Lovely", "timestamp": "3/14/2024, 2:05:09 PM"},
            ]),
        )

        comments = CommentLedger(storage).load("story-one")

        assert comments == [Comment(author="Ann", text="Lovely", created_at=NOW)]


class TestAppend:
    """Tests for appending comments."""

    def test_append_returns_full_log(self, ledger: CommentLedger) -> None:
        """Append returns every comment so far, oldest first."""
        ledger.append("story-one", "Ann", "First")
        comments = ledger.append("story-one", "Bob", "Second")

        assert [(c.author, c.text) for c in comments] == [("Ann", "First"), ("Bob", "Second")]

    def test_append_writes_through(self, storage: InMemoryKeyValueStorage, ledger: CommentLedger) -> None:
        """Comment is persisted before append returns."""
        ledger.append("story-one", "Ann", "Great story")

        stored = json.loads(storage.get("comments_story-one"))
        assert stored == [
            {"author": "Ann", "text": "Great story", "created_at": NOW.isoformat()},
        ]

    def test_survives_new_ledger(self, storage: InMemoryKeyValueStorage, ledger: CommentLedger) -> None:
        """A fresh ledger over the same storage sees earlier comments."""
        ledger.append("story-one", "Ann", "Great story")

        comments = CommentLedger(storage).load("story-one")

        assert comments == [Comment(author="Ann", text="Great story", created_at=NOW)]

    def test_strips_whitespace(self, ledger: CommentLedger) -> None:
        """Author and text are trimmed."""
        comments = ledger.append("story-one", "  Ann ", " Nice \n")
        assert comments[0].author == "Ann"
        assert comments[0].text == "Nice"

    @pytest.mark.parametrize(
        "author,text",
        [
            ("", "Nice"),
            ("Ann", ""),
            ("   ", "Nice"),
            ("Ann", "  \t"),
            ("", ""),
        ],
    )
    def test_empty_fields_rejected(
        self,
        storage: InMemoryKeyValueStorage,
        ledger: CommentLedger,
        author: str,
        text: str,
    ) -> None:
        """Empty author or text leaves the log and storage untouched."""
        ledger.append("story-one", "Ann", "First")
        before = storage.get("comments_story-one")

        comments = ledger.append("story-one", author, text)

        assert [c.text for c in comments] == ["First"]
        assert storage.get("comments_story-one") == before

    def test_rejected_first_comment_writes_nothing(
        self,
        storage: InMemoryKeyValueStorage,
        ledger: CommentLedger,
    ) -> None:
        """Rejected submission on an empty log stores nothing."""
        assert ledger.append("story-one", "", "Nice") == []
        assert storage.get("comments_story-one") is None

    def test_slugs_are_isolated(self, storage: InMemoryKeyValueStorage, ledger: CommentLedger) -> None:
        """Comments on one slug never appear under another."""
        ledger.append("story-one", "Ann", "About one")
        ledger.append("story-two", "Bob", "About two")

        assert [c.text for c in ledger.load("story-one")] == ["About one"]
        assert [c.text for c in ledger.load("story-two")] == ["About two"]
        assert sorted(storage.keys()) == ["comments_story-one", "comments_story-two"]

    def test_timestamps_never_decrease(self, storage: InMemoryKeyValueStorage) -> None:
        """A clock that steps backwards does not reorder timestamps."""
        ledger = CommentLedger(storage, clock=FakeClock(NOW, NOW - timedelta(hours=1)))

        ledger.append("story-one", "Ann", "First")
        comments = ledger.append("story-one", "Bob", "Second")

        assert comments[0].created_at == NOW
        assert comments[1].created_at == NOW

    def test_append_over_corrupt_data(self, storage: InMemoryKeyValueStorage) -> None:
        """Corrupt data is replaced by a fresh log."""
        storage.set("comments_story-one", "garbage")
        ledger = CommentLedger(storage, clock=FakeClock())

        comments = ledger.append("story-one", "Ann", "Hello")

        assert len(comments) == 1
        assert len(json.loads(storage.get("comments_story-one"))) == 1


class TestSqliteBackedLedger:
    """Tests for the ledger over durable storage."""

    def test_comments_survive_restart(self, tmp_path) -> None:
        """Comments written by one storage instance are read by another."""
        path = tmp_path / "comments.sqlite3"
        CommentLedger(SqliteKeyValueStorage(path), clock=FakeClock()).append(
            "story-one", "Ann", "Still here"
        )

        comments = CommentLedger(SqliteKeyValueStorage(path)).load("story-one")

        assert [(c.author, c.text, c.created_at) for c in comments] == [("Ann", "Still here", NOW)]
