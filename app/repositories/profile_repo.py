from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.profile import Profile
from app.repositories.base import BaseRepository

ADMIN_ROLE = "admin"


class ProfileRepository(BaseRepository[Profile]):
    """Role lookups and display names for identity-provider users."""

    def __init__(self, db: Session):
        super().__init__(Profile, db)

    @db_exception
    def get_many(self, user_ids: Iterable[str]) -> Dict[str, Profile]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        profiles = self.db.query(Profile).filter(Profile.id.in_(ids)).all()
        return {p.id: p for p in profiles}

    def is_admin(self, user_id: Optional[str]) -> bool:
        if not user_id:
            return False
        profile = self.get_by_id(user_id)
        return profile is not None and profile.role == ADMIN_ROLE
