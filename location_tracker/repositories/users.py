# location_tracker/repositories/users.py
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import UnknownUser
from ..db.models import User


class IdentityResolver(Protocol):
    def resolve(self, external_uid: str) -> str:
        """external_uid -> handle interno; UnknownUser si no existe."""
        ...


class SqlUserDirectory:
    def __init__(self, session: Session):
        self.session = session

    def find(self, external_uid: str) -> User | None:
        return self.session.scalars(select(User).where(User.external_uid == external_uid)).first()

    def get(self, external_uid: str) -> User:
        user = self.find(external_uid)
        if user is None:
            raise UnknownUser(external_uid)
        return user

    def resolve(self, external_uid: str) -> str:
        return self.get(external_uid).id

    def upsert(self, external_uid: str, email: str) -> User:
        user = self.find(external_uid)
        if user is None:
            user = User(external_uid=external_uid, email=email)
            self.session.add(user)
        else:
            user.email = email
        self.session.flush()
        return user

    def list_all(self) -> list[User]:
        return list(self.session.scalars(select(User).order_by(User.created_at, User.external_uid)))
