"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterable, Iterator, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from users_api.core.errors import PersistenceError
from users_api.db.models import User, UserSetting
from users_api.db.session import get_session

logger = logging.getLogger("users_api.repository")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@contextmanager
def _transaction() -> Iterator[Session]:
    with get_session() as session:
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Database operation failed")
            raise PersistenceError() from exc


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def _load(self, session: Session, user_id: int) -> Optional[User]:
        stmt = select(User).options(selectinload(User.settings)).where(User.id == user_id)
        return session.execute(stmt).scalar_one_or_none()

    # -------------------------- users --------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        with _transaction() as session:
            return self._load(session, user_id)

    def list_users(self) -> list[User]:
        with _transaction() as session:
            stmt = select(User).options(selectinload(User.settings)).order_by(User.id)
            return list(session.execute(stmt).scalars().all())

    def create_user(
        self,
        name: str,
        email: str,
        active_status: str,
        settings: Iterable[tuple[str, str]] = (),
    ) -> User:
        """Insert the user and its settings, committed together."""
        now = datetime.now(timezone.utc)
        user = User(
            name=name,
            email=email,
            active_status=active_status,
            created_at=now,
            updated_at=now,
        )
        for setting_name, setting_value in settings:
            user.settings.append(UserSetting(name=setting_name, value=setting_value))
        with _transaction() as session:
            session.add(user)
            session.commit()
            return self._load(session, user.id)

    def update_user(self, user_id: int, name: str, email: str, active_status: str) -> Optional[User]:
        with _transaction() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            now = datetime.now(timezone.utc)
            previous = _as_utc(user.updated_at)
            if now <= previous:
                now = previous + timedelta(microseconds=1)
            user.name = name
            user.email = email
            user.active_status = active_status
            user.updated_at = now
            session.commit()
            return self._load(session, user_id)

    def delete_user(self, user_id: int) -> bool:
        """Delete the user and its settings. Returns False when the id is unknown."""
        with _transaction() as session:
            user = session.get(User, user_id)
            if not user:
                return False
            session.delete(user)
            session.commit()
            return True

    # -------------------------- settings --------------------------
    def get_settings_for_user(self, user_id: int) -> list[UserSetting]:
        with _transaction() as session:
            stmt = select(UserSetting).where(UserSetting.user_id == user_id).order_by(UserSetting.id)
            return list(session.execute(stmt).scalars().all())
