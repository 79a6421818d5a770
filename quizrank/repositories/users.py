"""User lookups and registration writes"""

from typing import Optional

from quizrank.models import User, UserRole
from quizrank.repositories.base import SessionRepository, store_call
from quizrank.utils.clock import utcnow


class UserRepository(SessionRepository):

    @store_call
    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    @store_call
    def get_by_username_or_email(self, login: str) -> Optional[User]:
        return self.db.query(User).filter(
            (User.username == login) | (User.email == login)
        ).first()

    @store_call
    def exists(self, username: str, email: str) -> bool:
        return self.db.query(User.id).filter(
            (User.username == username) | (User.email == email)
        ).first() is not None

    @store_call
    def create(
        self,
        email: str,
        username: str,
        full_name: str,
        hashed_password: str,
        role: UserRole = UserRole.STUDENT,
    ) -> User:
        user = User(
            email=email,
            username=username,
            full_name=full_name,
            hashed_password=hashed_password,
            role=role,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    @store_call
    def touch_login(self, user: User) -> None:
        user.last_login = utcnow()
        self.db.commit()
