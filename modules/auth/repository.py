"""
Auth repositories for database access.

Encapsulates the Supabase queries for the principal tables and the
login activity tables:
- accounts / account_activities
- user / user_activities

AccountRepository and UserRepository expose the same capability set
(get_by_username, get_by_id, create) so the auth service can pick one
by PrincipalKind.
"""

import logging
import uuid
from typing import Any, Optional

from shared.exceptions import ConflictError, StorageError
from shared.repository import BaseRepository

from .exceptions import UsernameTakenError
from .models import (
    Account,
    ActivityType,
    PrincipalKind,
    SessionActivity,
    User,
)

logger = logging.getLogger(__name__)


class AccountRepository(BaseRepository[Account]):
    """Account-variant principals (UUID ids)."""

    table = "accounts"
    kind = PrincipalKind.ACCOUNT

    def get_by_username(self, username: str) -> Optional[Account]:
        result = self._execute(
            self._db.table(self.table).select("*").eq("username", username).limit(1),
            "get account by username",
        )
        if not result.data:
            return None
        return Account(**result.data[0])

    def get_by_id(self, principal_id: str) -> Optional[Account]:
        try:
            account_id = uuid.UUID(str(principal_id))
        except ValueError:
            return None

        result = self._execute(
            self._db.table(self.table).select("*").eq("id", str(account_id)).limit(1),
            "get account by id",
        )
        if not result.data:
            return None
        return Account(**result.data[0])

    def create(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account.

        Args:
            data: Account fields (id, username, password hash, role).

        Raises:
            UsernameTakenError: If the username already exists.
        """
        try:
            result = self._execute(
                self._db.table(self.table).insert(data),
                "create account",
            )
        except ConflictError as e:
            raise UsernameTakenError(data.get("username", "")) from e
        return Account(**result.data[0])


class UserRepository(BaseRepository[User]):
    """User-variant principals (integer ids)."""

    table = "user"
    kind = PrincipalKind.USER

    def get_by_username(self, username: str) -> Optional[User]:
        result = self._execute(
            self._db.table(self.table).select("*").eq("username", username).limit(1),
            "get user by username",
        )
        if not result.data:
            return None
        return User(**result.data[0])

    def get_by_id(self, principal_id: str) -> Optional[User]:
        if not str(principal_id).isdigit():
            return None

        result = self._execute(
            self._db.table(self.table).select("*").eq("id", int(principal_id)).limit(1),
            "get user by id",
        )
        if not result.data:
            return None
        return User(**result.data[0])

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a new user; the id is assigned by the database.

        Raises:
            UsernameTakenError: If the username already exists.
        """
        try:
            result = self._execute(
                self._db.table(self.table).insert(data),
                "create user",
            )
        except ConflictError as e:
            raise UsernameTakenError(data.get("username", "")) from e
        return User(**result.data[0])


class ActivityRepository(BaseRepository[SessionActivity]):
    """Login activity rows. Their ids become token JTIs."""

    TABLES = {
        PrincipalKind.ACCOUNT: "account_activities",
        PrincipalKind.USER: "user_activities",
    }

    def record_login(
        self,
        principal_id: str,
        kind: PrincipalKind = PrincipalKind.USER,
    ) -> SessionActivity:
        """
        Persist one LOGIN activity with a fresh id.

        Raises:
            StorageError: If the row could not be written.
        """
        data = {
            "id": str(uuid.uuid4()),
            "user_id": principal_id,
            "type": ActivityType.LOGIN.value,
        }
        try:
            result = self._execute(
                self._db.table(self.TABLES[kind]).insert(data),
                "record login activity",
            )
        except ConflictError as e:
            raise StorageError("Activity id collision", details={"kind": kind.value}) from e

        if not result.data:
            raise StorageError("Activity insert returned no row", details={"kind": kind.value})

        return self._map_to_activity(result.data[0])

    def _map_to_activity(self, row: dict[str, Any]) -> SessionActivity:
        return SessionActivity(
            id=row["id"],
            user_id=str(row["user_id"]),
            type=row.get("type", ActivityType.LOGIN.value),
            created_at=row.get("created_at"),
        )
