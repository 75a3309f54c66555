from typing import Any, Dict, Optional

from sqlmodel import Session, select

from models import User, utcnow


class UserNotFoundError(LookupError):
    def __init__(self, email: str):
        super().__init__(f"No user with email {email!r}")
        self.email = email


class UserRepository:
    def __init__(self, engine):
        self.engine = engine

    def create(self, attributes: Dict[str, Any]) -> User:
        user = User(**attributes)
        with Session(self.engine) as session:
            session.add(user)
            session.commit()
            session.refresh(user)
        return user

    def find_one(self, **filters: Any) -> Optional[User]:
        # Emails are not unique; lowest id wins.
        statement = select(User).filter_by(**filters).order_by(User.id)
        with Session(self.engine) as session:
            return session.exec(statement).first()

    def save(self, user: User) -> User:
        """Write back changes made to a user returned by ``find_one``."""
        user.updated_at = utcnow()
        with Session(self.engine) as session:
            session.add(user)
            session.commit()
            session.refresh(user)
        return user
