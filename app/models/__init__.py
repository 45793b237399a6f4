"""
Models package initialization
Import all models and setup relationships
"""

from .exercise_attempt import ExerciseAttempt
from .formation import Chapter, Formation, Lesson
from .lesson_statistic import LessonStatistic
from .lesson_tracking import UserLessonTracking
from .profile import Profile
from .quiz import Exercise, Quiz
from .quiz_attempt import QuizAttempt

# Import and setup relationships
from .relations import setup_relationships

# Setup all relationships after models are imported
setup_relationships()

# Make models available at package level
__all__ = [
    "Chapter",
    "Exercise",
    "ExerciseAttempt",
    "Formation",
    "Lesson",
    "LessonStatistic",
    "Profile",
    "Quiz",
    "QuizAttempt",
    "UserLessonTracking",
]
