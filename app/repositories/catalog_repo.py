"""
Catalog Repository

Read-only lookups of formations, lessons, quizzes and exercises used to
reject references to unknown content.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.formation import Chapter, Formation, Lesson
from app.models.quiz import Exercise, Quiz


class CatalogRepository:
    def __init__(self, db: Session):
        self.db = db

    @db_exception
    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        return self.db.query(Quiz).filter(Quiz.id == quiz_id).first()

    @db_exception
    def list_quizzes(self) -> List[Quiz]:
        return self.db.query(Quiz).order_by(Quiz.title, Quiz.id).all()

    @db_exception
    def quizzes_by_id(self, quiz_ids: Iterable[str]) -> Dict[str, Quiz]:
        ids = list(set(quiz_ids))
        if not ids:
            return {}
        quizzes = self.db.query(Quiz).filter(Quiz.id.in_(ids)).all()
        return {q.id: q for q in quizzes}

    @db_exception
    def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        return self.db.query(Exercise).filter(Exercise.id == exercise_id).first()

    @db_exception
    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return self.db.query(Lesson).filter(Lesson.id == lesson_id).first()

    @db_exception
    def get_formation(self, formation_id: str) -> Optional[Formation]:
        return self.db.query(Formation).filter(Formation.id == formation_id).first()

    @db_exception
    def lesson_ids_for_formation(self, formation_id: str) -> List[str]:
        rows = (
            self.db.query(Lesson.id)
            .join(Chapter, Lesson.chapter_id == Chapter.id)
            .filter(Chapter.formation_id == formation_id)
            .order_by(Lesson.id)
            .all()
        )
        return [row.id for row in rows]
