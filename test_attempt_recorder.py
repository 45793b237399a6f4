import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.repositories import (
    CatalogRepository,
    ExerciseAttemptRepository,
    LessonStatisticRepository,
    QuizAttemptRepository,
)
from app.schemas.attempt import ExerciseAttemptCreate, QuizAttemptCreate
from app.services.attempt import AttemptRecorder, derive_correct_count


def quiz_attempt(**overrides):
    fields = dict(
        quiz_id="quiz-1",
        score=8,
        max_score=10,
        answers={"q1": "a", "q2": "c"},
        total_questions=5,
        time_spent=42,
    )
    fields.update(overrides)
    return QuizAttemptCreate(**fields)


def exercise_attempt(**overrides):
    fields = dict(
        exercise_id="exercise-1", score=3, max_score=4, lesson_id="lesson-1"
    )
    fields.update(overrides)
    return ExerciseAttemptCreate(**fields)


class TestDeriveCorrectCount:
    def test_rounds_score_ratio(self):
        assert derive_correct_count(8, 10, 5) == 4

    def test_rounds_half_up(self):
        assert derive_correct_count(1, 2, 3) == 2
        assert derive_correct_count(1, 4, 2) == 1

    def test_clamped_to_question_count(self):
        assert derive_correct_count(12, 10, 5) == 5
        assert derive_correct_count(0, 10, 5) == 0

    def test_no_questions(self):
        assert derive_correct_count(5, 10, 0) == 0


class TestRecordQuizAttempt:
    def test_derives_missing_correct_count(self, recorder, catalog):
        attempt = recorder.record_quiz_attempt("user-1", quiz_attempt())

        assert attempt.id
        assert attempt.user_id == "user-1"
        assert attempt.correct_count == 4
        assert attempt.total_questions == 5
        assert attempt.answers == {"q1": "a", "q2": "c"}
        assert attempt.created_at is not None

    def test_keeps_supplied_correct_count(self, recorder, catalog):
        attempt = recorder.record_quiz_attempt(
            "user-1", quiz_attempt(correct_count=3)
        )
        assert attempt.correct_count == 3

    def test_zero_score_is_accepted(self, recorder, catalog):
        attempt = recorder.record_quiz_attempt("user-1", quiz_attempt(score=0))
        assert attempt.score == 0
        assert attempt.correct_count == 0

    def test_repeated_submissions_are_distinct(self, recorder, catalog, db):
        first = recorder.record_quiz_attempt("user-1", quiz_attempt())
        second = recorder.record_quiz_attempt("user-1", quiz_attempt())

        assert first.id != second.id
        assert QuizAttemptRepository(db).count() == 2

    @pytest.mark.parametrize("max_score", [0, -5])
    def test_rejects_non_positive_max_score(self, recorder, catalog, db, max_score):
        with pytest.raises(ValidationError):
            recorder.record_quiz_attempt("user-1", quiz_attempt(max_score=max_score))
        assert QuizAttemptRepository(db).count() == 0

    def test_rejects_negative_score(self, recorder, catalog):
        with pytest.raises(ValidationError):
            recorder.record_quiz_attempt("user-1", quiz_attempt(score=-1))

    def test_reports_missing_fields(self, recorder, catalog):
        with pytest.raises(ValidationError) as exc_info:
            recorder.record_quiz_attempt(
                "user-1", quiz_attempt(answers=None, total_questions=None)
            )
        assert "answers" in exc_info.value.message
        assert "total_questions" in exc_info.value.message

    def test_rejects_out_of_range_correct_count(self, recorder, catalog):
        with pytest.raises(ValidationError):
            recorder.record_quiz_attempt("user-1", quiz_attempt(correct_count=6))

    def test_rejects_negative_time(self, recorder, catalog):
        with pytest.raises(ValidationError):
            recorder.record_quiz_attempt("user-1", quiz_attempt(time_spent=-1))

    def test_unknown_quiz(self, recorder, catalog, db):
        with pytest.raises(NotFoundError):
            recorder.record_quiz_attempt("user-1", quiz_attempt(quiz_id="missing"))
        assert QuizAttemptRepository(db).count() == 0

    def test_unknown_lesson(self, recorder, catalog, db):
        with pytest.raises(NotFoundError):
            recorder.record_quiz_attempt("user-1", quiz_attempt(lesson_id="missing"))
        assert QuizAttemptRepository(db).count() == 0


class TestListQuizAttempts:
    def test_newest_first_for_current_user(self, recorder, catalog):
        first = recorder.record_quiz_attempt("user-1", quiz_attempt(score=2))
        second = recorder.record_quiz_attempt("user-1", quiz_attempt(score=6))
        recorder.record_quiz_attempt("user-2", quiz_attempt(score=9))

        attempts = recorder.list_quiz_attempts("user-1")

        assert [a.id for a in attempts] == [second.id, first.id]
        assert attempts[0].quiz.title == "Equations quiz"

    def test_filters_and_limit(self, recorder, catalog):
        for score in (1, 2, 3):
            recorder.record_quiz_attempt(
                "user-1", quiz_attempt(score=score, lesson_id="lesson-1")
            )
        recorder.record_quiz_attempt("user-1", quiz_attempt(quiz_id="quiz-2"))

        assert len(recorder.list_quiz_attempts("user-1", quiz_id="quiz-1")) == 3
        assert len(recorder.list_quiz_attempts("user-1", lesson_id="lesson-1")) == 3

        latest = recorder.list_quiz_attempts("user-1", quiz_id="quiz-1", limit=1)
        assert [a.score for a in latest] == [3]

    def test_rejects_zero_limit(self, recorder, catalog):
        with pytest.raises(ValidationError):
            recorder.list_quiz_attempts("user-1", limit=0)


class TestExerciseAttempts:
    def test_records_and_counts_completion(self, recorder, catalog, db):
        attempt = recorder.record_exercise_attempt("user-1", exercise_attempt())

        assert attempt.lesson_id == "lesson-1"
        assert attempt.answers is None

        stats = LessonStatisticRepository(db).get_by_lesson("lesson-1")
        assert stats.exercise_completions == 1

        recorder.record_exercise_attempt("user-2", exercise_attempt())
        db.refresh(stats)
        assert stats.exercise_completions == 2

    def test_unknown_exercise(self, recorder, catalog, db):
        with pytest.raises(NotFoundError):
            recorder.record_exercise_attempt(
                "user-1", exercise_attempt(exercise_id="missing")
            )
        assert ExerciseAttemptRepository(db).count() == 0

    def test_unknown_lesson(self, recorder, catalog, db):
        with pytest.raises(NotFoundError):
            recorder.record_exercise_attempt(
                "user-1", exercise_attempt(lesson_id="no-such-lesson")
            )
        assert ExerciseAttemptRepository(db).count() == 0
        assert LessonStatisticRepository(db).get_by_lesson("no-such-lesson") is None

    def test_lesson_is_required(self, recorder, catalog):
        with pytest.raises(ValidationError):
            recorder.record_exercise_attempt(
                "user-1", exercise_attempt(lesson_id=None)
            )

    def test_statistics_failure_does_not_fail_attempt(self, db, catalog):
        class BrokenStatistics:
            def register_exercise_completion(self, lesson_id):
                raise RuntimeError("statistics unavailable")

        recorder = AttemptRecorder(
            QuizAttemptRepository(db),
            ExerciseAttemptRepository(db),
            CatalogRepository(db),
            lesson_statistics=BrokenStatistics(),
        )

        attempt = recorder.record_exercise_attempt("user-1", exercise_attempt())

        assert attempt.id
        assert ExerciseAttemptRepository(db).count() == 1

    def test_list_for_lesson(self, recorder, catalog):
        recorder.record_exercise_attempt("user-1", exercise_attempt(score=1))
        recorder.record_exercise_attempt("user-1", exercise_attempt(score=2))
        recorder.record_exercise_attempt("user-2", exercise_attempt(score=4))

        attempts = recorder.list_exercise_attempts("user-1", "lesson-1")

        assert [a.score for a in attempts] == [2, 1]
        assert recorder.list_exercise_attempts("user-1", "lesson-2") == []

    def test_list_requires_lesson(self, recorder, catalog):
        with pytest.raises(ValidationError):
            recorder.list_exercise_attempts("user-1", None)
