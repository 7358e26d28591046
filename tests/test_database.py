"""
Tests for database.py — the SQLite persistence gateway.
Every test gets its own database file under pytest's tmp_path.
"""
import sqlite3

import pytest

from factories import make_draft, make_items

from quizmaker.database import QuizStore, new_id, utc_now_iso
from quizmaker.errors import PersistenceError
from quizmaker.models import FeedbackReport, FeedbackType
from quizmaker.router import NotFoundRoute, QuizRoute, parse_route, resolve_view


class TestHelpers:
    def test_new_id_format(self):
        quiz_id = new_id()
        assert len(quiz_id) == 20
        assert quiz_id.isalnum()

    def test_new_ids_differ(self):
        assert len({new_id() for _ in range(50)}) == 50

    def test_utc_now_iso_shape(self):
        stamp = utc_now_iso()
        assert stamp.endswith("Z")
        assert len(stamp) == len("2024-05-01T09:30:00.000Z")


class TestQuizzes:
    def test_create_then_get(self, store):
        quiz_id = store.create_quiz(make_draft(title="Expenses"))
        quiz = store.get_quiz(quiz_id)
        assert quiz is not None
        assert quiz.title == "Expenses"
        assert quiz.response_count == 0
        assert quiz.items == make_items()
        assert quiz.created_at.endswith("Z")

    def test_get_missing_returns_none(self, store):
        assert store.get_quiz("missing") is None

    def test_list_quizzes(self, store):
        ids = {store.create_quiz(make_draft(title=f"Quiz {n}")) for n in range(3)}
        assert {q.id for q in store.list_quizzes()} == ids

    def test_items_keep_their_order(self, store):
        items = make_items(5)
        quiz_id = store.create_quiz(make_draft(items=items))
        assert [i.question for i in store.get_quiz(quiz_id).items] == [i.question for i in items]

    def test_non_ascii_round_trip(self, store):
        quiz_id = store.create_quiz(make_draft(title="経費精算クイズ"))
        assert store.get_quiz(quiz_id).title == "経費精算クイズ"

    def test_delete(self, store):
        quiz_id = store.create_quiz(make_draft())
        store.delete_quiz(quiz_id)
        assert store.get_quiz(quiz_id) is None

    def test_delete_missing_is_noop(self, store):
        store.delete_quiz("missing")

    def test_deleted_quiz_link_resolves_to_not_found(self, store):
        quiz_id = store.create_quiz(make_draft())
        route = parse_route(f"#/quiz/{quiz_id}")
        loaded = {q.id: q for q in store.list_quizzes()}
        assert isinstance(resolve_view(route, loaded), QuizRoute)

        store.delete_quiz(quiz_id)
        loaded = {q.id: q for q in store.list_quizzes()}
        assert isinstance(resolve_view(route, loaded), NotFoundRoute)

    def test_unreadable_row_is_skipped(self, store):
        good = store.create_quiz(make_draft())
        conn = sqlite3.connect(store.db_path)
        conn.execute(
            "INSERT INTO quizzes (id, title, items_json, created_at) VALUES (?, ?, ?, ?)",
            ("bad", "Broken", "not json", utc_now_iso()),
        )
        conn.commit()
        conn.close()
        assert [q.id for q in store.list_quizzes()] == [good]


class TestResponseCount:
    def test_increment(self, store):
        quiz_id = store.create_quiz(make_draft())
        store.increment_response_count(quiz_id)
        store.increment_response_count(quiz_id)
        assert store.get_quiz(quiz_id).response_count == 2

    def test_increment_missing_raises(self, store):
        with pytest.raises(PersistenceError):
            store.increment_response_count("missing")

    def test_increments_from_two_stores_both_land(self, store):
        quiz_id = store.create_quiz(make_draft())
        other = QuizStore(store.db_path)
        store.increment_response_count(quiz_id)
        other.increment_response_count(quiz_id)
        assert store.get_quiz(quiz_id).response_count == 2


class TestFeedback:
    def test_create_and_list(self, store):
        store.create_feedback(FeedbackReport(
            reporter_name="Taro", reporter_email="taro@tokium.jp",
            type=FeedbackType.BUG, content="The submit button does nothing",
        ))
        reports = store.list_feedback()
        assert len(reports) == 1
        report = reports[0]
        assert report.type is FeedbackType.BUG
        assert report.status == "new"
        assert report.created_at
        assert len(report.id) == 20

    def test_newest_first(self, store):
        for n in range(3):
            store.create_feedback(FeedbackReport(content=f"Report {n}"))
        assert [r.content for r in store.list_feedback()] == ["Report 2", "Report 1", "Report 0"]

    @pytest.mark.parametrize("kind,content", [
        ("complaint", "Unknown report type"),
        ("bug",       "   "),
    ])
    def test_unreadable_row_is_skipped(self, store, kind, content):
        store.create_feedback(FeedbackReport(content="Valid report"))
        conn = sqlite3.connect(store.db_path)
        conn.execute(
            "INSERT INTO feedback (id, type, content) VALUES (?, ?, ?)",
            ("bad", kind, content),
        )
        conn.commit()
        conn.close()
        assert [r.content for r in store.list_feedback()] == ["Valid report"]


class TestFailures:
    def test_unwritable_location_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        broken = QuizStore(blocker / "nested" / "db.sqlite")
        with pytest.raises(PersistenceError):
            broken.init_db()

    def test_missing_tables_raise_persistence_error(self, tmp_path):
        bare = QuizStore(tmp_path / "empty.db")
        with pytest.raises(PersistenceError):
            bare.list_quizzes()


class TestStartup:
    def test_fresh_store_is_empty(self, store):
        assert store.list_quizzes() == []

    def test_deleted_quizzes_stay_deleted_after_restart(self, store):
        quiz_id = store.create_quiz(make_draft())
        store.delete_quiz(quiz_id)

        restarted = QuizStore(store.db_path)
        restarted.init_db()
        assert restarted.list_quizzes() == []
