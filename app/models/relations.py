# app/models/relations.py

from sqlalchemy.orm import relationship

from .exercise_attempt import ExerciseAttempt
from .formation import Chapter, Formation, Lesson
from .quiz import Exercise, Quiz
from .quiz_attempt import QuizAttempt


def setup_relationships():
    """
    Configure all SQLAlchemy relationships between models.
    """

    # --- Catalog ---

    Formation.chapters = relationship(
        "Chapter",
        back_populates="formation",
        cascade="all, delete-orphan",
        order_by="Chapter.position",
    )
    Chapter.formation = relationship("Formation", back_populates="chapters")

    Chapter.lessons = relationship(
        "Lesson",
        back_populates="chapter",
        cascade="all, delete-orphan",
        order_by="Lesson.position",
    )
    Lesson.chapter = relationship("Chapter", back_populates="lessons")

    # --- Attempts ---

    # Read-only: attempts are never written through the parent
    Quiz.attempts = relationship("QuizAttempt", viewonly=True)
    QuizAttempt.quiz = relationship("Quiz", viewonly=True)

    Exercise.attempts = relationship("ExerciseAttempt", viewonly=True)
    ExerciseAttempt.exercise = relationship("Exercise", viewonly=True)
