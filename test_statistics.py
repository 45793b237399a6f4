from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import NotFoundError
from app.repositories import QuizAttemptRepository

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def add_attempt(db):
    repo = QuizAttemptRepository(db)

    def _add(user_id, score, max_score=10, quiz_id="quiz-1", time_spent=None, minutes=0):
        return repo.create(
            quiz_id=quiz_id,
            user_id=user_id,
            score=score,
            max_score=max_score,
            answers={},
            total_questions=10,
            time_spent=time_spent,
            created_at=T0 + timedelta(minutes=minutes),
        )

    return _add


class TestQuizStatistics:
    def test_quiz_without_attempts(self, aggregator, catalog):
        stats = aggregator.compute_quiz_statistics("quiz-2")

        assert stats.quiz_id == "quiz-2"
        assert stats.attempt_count == 0
        assert stats.average_score_percentage is None
        assert stats.min_score_percentage is None
        assert stats.max_score_percentage is None
        assert stats.average_time_spent is None

    def test_aggregates_percentages_and_time(self, aggregator, catalog, add_attempt):
        add_attempt("user-1", 5, time_spent=30)
        add_attempt("user-2", 10, time_spent=90)
        add_attempt("user-2", 6)

        stats = aggregator.compute_quiz_statistics("quiz-1")

        assert stats.quiz_title == "Equations quiz"
        assert stats.category == "math"
        assert stats.attempt_count == 3
        assert stats.average_score_percentage == pytest.approx(70)
        assert stats.min_score_percentage == pytest.approx(50)
        assert stats.max_score_percentage == pytest.approx(100)
        # attempts without a time are left out of the average
        assert stats.average_time_spent == pytest.approx(60)

    def test_all_quizzes_include_unattempted(self, aggregator, catalog, add_attempt):
        add_attempt("user-1", 4)

        rows = {row.quiz_id: row for row in aggregator.compute_all_quiz_statistics()}

        assert set(rows) == {"quiz-1", "quiz-2"}
        assert rows["quiz-1"].attempt_count == 1
        assert rows["quiz-2"].attempt_count == 0

    def test_unknown_quiz(self, aggregator, catalog):
        with pytest.raises(NotFoundError):
            aggregator.compute_quiz_statistics("missing")


class TestListAttemptsForQuiz:
    def test_newest_first_with_user_filter(self, aggregator, catalog, add_attempt):
        add_attempt("user-1", 3, minutes=1)
        add_attempt("user-2", 7, minutes=2)
        add_attempt("user-1", 9, minutes=5)

        attempts = aggregator.list_attempts_for_quiz("quiz-1")
        assert [a.score for a in attempts] == [9, 7, 3]

        own = aggregator.list_attempts_for_quiz("quiz-1", user_id="user-1")
        assert [a.score for a in own] == [9, 3]

    def test_quiz_without_attempts(self, aggregator, catalog):
        assert aggregator.list_attempts_for_quiz("quiz-2") == []

    def test_unknown_quiz(self, aggregator, catalog):
        with pytest.raises(NotFoundError):
            aggregator.list_attempts_for_quiz("missing")


class TestUserQuizStatistics:
    def test_one_row_per_user_and_quiz(self, aggregator, catalog, add_attempt):
        add_attempt("user-2", 4, minutes=1)
        add_attempt("user-2", 8, minutes=7)
        add_attempt("user-1", 10, minutes=3)
        add_attempt("user-1", 2, quiz_id="quiz-2", minutes=4)

        rows = aggregator.compute_user_quiz_statistics()

        assert [(r.user_id, r.quiz_id) for r in rows] == [
            ("user-1", "quiz-1"),
            ("user-1", "quiz-2"),
            ("user-2", "quiz-1"),
        ]
        bob = rows[2]
        assert bob.username == "bob"
        assert bob.quiz_title == "Equations quiz"
        assert bob.attempt_count == 2
        assert bob.best_score_percentage == pytest.approx(80)
        assert bob.average_score_percentage == pytest.approx(60)
        assert bob.first_attempt_date.replace(tzinfo=None) == datetime(2024, 5, 1, 9, 1)
        assert bob.last_attempt_date.replace(tzinfo=None) == datetime(2024, 5, 1, 9, 7)

    def test_filters(self, aggregator, catalog, add_attempt):
        add_attempt("user-1", 10)
        add_attempt("user-1", 2, quiz_id="quiz-2")
        add_attempt("user-2", 4)

        by_user = aggregator.compute_user_quiz_statistics(user_id="user-1")
        assert {r.quiz_id for r in by_user} == {"quiz-1", "quiz-2"}

        by_both = aggregator.compute_user_quiz_statistics(
            user_id="user-2", quiz_id="quiz-1"
        )
        assert len(by_both) == 1
        assert by_both[0].attempt_count == 1

    def test_no_attempts(self, aggregator, catalog):
        assert aggregator.compute_user_quiz_statistics(user_id="user-3") == []
