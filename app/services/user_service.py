"""User lookups and registration for the credentials provider."""

from __future__ import annotations

from sqlalchemy import func, select

from app.core.security import hash_password
from app.database.models import User
from app.services.base_service import BaseService


class UserService(BaseService):
    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        return self.db.scalars(stmt).first()

    def create_user(self, name: str, email: str, password: str, pepper: str = "") -> User:
        user = User(
            name=name,
            email=email.strip().lower(),
            hashed_password=hash_password(password, pepper=pepper),
        )
        self.db.add(user)
        self.commit()
        self.db.refresh(user)
        return user
