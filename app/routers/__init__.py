from .exercise_attempts import router as exercise_attempts_router
from .lesson_stats import router as lesson_stats_router
from .quiz_attempts import router as quiz_attempts_router
from .quiz_statistics import router as quiz_statistics_router

routes = [
    quiz_attempts_router,
    exercise_attempts_router,
    lesson_stats_router,
    quiz_statistics_router,
]
