"""User use cases: list, fetch, create, update and delete."""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from users_api.core.errors import NotFoundError, ValidationError
from users_api.core.pagination import Page, paginate
from users_api.db.models import User
from users_api.domain.users import ActiveStatus, effective_limit, require_text
from users_api.repositories.sql_repository import SQLRepository

logger = logging.getLogger("users_api.service")


def _status_value(status: ActiveStatus | str) -> str:
    try:
        return ActiveStatus(status).value
    except ValueError:
        allowed = ", ".join(item.value for item in ActiveStatus)
        raise ValidationError(f"active_status must be one of: {allowed}")


class UserService:
    """Orchestrates the repository for the user resource endpoints."""

    def __init__(self, repository: Optional[SQLRepository] = None) -> None:
        self.repository = repository or SQLRepository()

    def list_users(self, limit: int, page: int) -> Page[User]:
        users = self.repository.list_users()
        return paginate(users, page, effective_limit(limit))

    def get_user(self, user_id: int) -> User:
        user = self.repository.get_user(user_id)
        if not user:
            logger.warning("User %s not found", user_id)
            raise NotFoundError()
        return user

    def create_user(
        self,
        name: str,
        email: str,
        active_status: ActiveStatus | str,
        settings: Iterable[Tuple[str, str]] = (),
    ) -> User:
        pairs = [(require_text(key, "settings.name"), value or "") for key, value in settings]
        user = self.repository.create_user(
            require_text(name, "name"),
            require_text(email, "email"),
            _status_value(active_status),
            pairs,
        )
        logger.info("Created user %s with %d setting(s)", user.id, len(pairs))
        return user

    def update_user(self, user_id: int, name: str, email: str, active_status: ActiveStatus | str) -> User:
        user = self.repository.update_user(
            user_id,
            require_text(name, "name"),
            require_text(email, "email"),
            _status_value(active_status),
        )
        if not user:
            logger.warning("Cannot update user %s: not found", user_id)
            raise NotFoundError()
        logger.info("Updated user %s", user_id)
        return user

    def delete_user(self, user_id: int) -> int:
        if not self.repository.delete_user(user_id):
            logger.warning("Cannot delete user %s: not found", user_id)
            raise NotFoundError()
        logger.info("Deleted user %s and its settings", user_id)
        return user_id
