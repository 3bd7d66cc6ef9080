"""
Database abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

from sqlalchemy import Column, Float, String, create_engine, select
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    StatementError,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class DatastoreError(Exception):
    """Base class for failures surfaced by a DbClient."""


class DuplicateEmailError(DatastoreError):
    def __init__(self, email: str):
        super().__init__(f"User with email {email!r} already exists")
        self.email = email


class DatastoreUnavailableError(DatastoreError):
    """The datastore could not be reached or refused the operation."""


class InvalidUserDataError(DatastoreError):
    """The datastore rejected a field value (e.g. a NUL byte in a string)."""


class DbClient(Protocol):
    """Interface for database access."""

    def create_user(
        self, name: str, email: str, password_hash: str
    ) -> "UserRecord":
        ...

    def get_user_by_email(self, email: str) -> Optional["UserRecord"]:
        ...


@dataclass
class UserRecord:
    id: str
    name: str
    email: str
    password_hash: str
    created_at: float = field(default_factory=lambda: time.time())

    def as_public_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
        }


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        with self._lock:
            if any(user.email == email for user in self.users.values()):
                raise DuplicateEmailError(email)
            record = UserRecord(
                id=uuid.uuid4().hex,
                name=name,
                email=email,
                password_hash=password_hash,
            )
            self.users[record.id] = record
            return record

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self.users.values():
                if user.email == email:
                    return user
        return None

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.users.clear()


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    One instance is meant to live for the whole process; the engine's pool is
    shared by every request and each operation opens its own short session.
    """

    def __init__(self, database_url: str, *, pool_recycle: int = 1800):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=pool_recycle,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        try:
            Base.metadata.create_all(self.engine)
        except OperationalError as exc:
            self.engine.dispose()
            raise DatastoreUnavailableError(str(exc)) from exc

    def _to_user_record(self, row: "UserRow") -> UserRecord:
        return UserRecord(
            id=row.id,
            name=row.name,
            email=row.email,
            password_hash=row.password_hash,
            created_at=row.created_at,
        )

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        try:
            with self.Session() as session:
                row = UserRow(
                    id=uuid.uuid4().hex,
                    name=name,
                    email=email,
                    password_hash=password_hash,
                    created_at=time.time(),
                )
                session.add(row)
                session.commit()
                session.refresh(row)
                return self._to_user_record(row)
        except IntegrityError as exc:
            raise DuplicateEmailError(email) from exc
        except (OperationalError, InterfaceError) as exc:
            raise DatastoreUnavailableError(str(exc)) from exc
        except DataError as exc:
            raise InvalidUserDataError(str(exc)) from exc
        except StatementError as exc:
            # Remaining DBAPI errors are server-side faults, not bad input.
            if isinstance(exc, DBAPIError):
                raise
            raise InvalidUserDataError(str(exc)) from exc

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            with self.Session() as session:
                stmt = select(UserRow).where(UserRow.email == email).limit(1)
                row = session.execute(stmt).scalar_one_or_none()
                if not row:
                    return None
                return self._to_user_record(row)
        except (OperationalError, InterfaceError) as exc:
            raise DatastoreUnavailableError(str(exc)) from exc


Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(Float, nullable=False)
