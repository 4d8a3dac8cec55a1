"""Portal backend backed by a local, file-persisted SQLite database."""

import logging
import os
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from jobportal.client.backends import PortalBackend
from jobportal.client.session import ClientSession
from jobportal.database import Base
from jobportal.errors import AuthError
from jobportal.schemas.auth import UserResponse
from jobportal.schemas.portal import PortalResponse
from jobportal.services.auth import authenticate_user, register_user, verify_token
from jobportal.services.portal_store import PortalStore

logger = logging.getLogger(__name__)


class EmbeddedDatabase:
    """An in-memory SQLite database mirrored to a single file.

    The whole database lives in memory. Nothing reaches the file until
    :meth:`flush` exports it, so callers must flush after every mutation.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        # One shared connection, otherwise each checkout would see a fresh empty database
        self.engine = create_engine(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self._load()

    def _load(self) -> None:
        if self.path.exists():
            raw = self.engine.raw_connection()
            try:
                raw.driver_connection.deserialize(self.path.read_bytes())
            finally:
                raw.close()
            logger.info(f"Loaded embedded database from {self.path}")

        from jobportal import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def export(self) -> bytes:
        """Serialize the entire database."""
        raw = self.engine.raw_connection()
        try:
            return raw.driver_connection.serialize()
        finally:
            raw.close()

    def flush(self) -> None:
        """Write the entire database to its file."""
        data = self.export()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(data)
        os.replace(tmp_path, self.path)
        logger.debug(f"Flushed {len(data)} bytes to {self.path}")


class EmbeddedPortalBackend(PortalBackend):
    """Runs the same auth and portal logic as the server, against a local database."""

    def __init__(self, session: ClientSession, database: EmbeddedDatabase):
        super().__init__(session)
        self.database = database

    def close(self) -> None:
        self.database.engine.dispose()

    def _user_id(self) -> int:
        if not self.session.token:
            raise AuthError("Authorization token required")
        claims = verify_token(self.session.token)
        if claims is None:
            self.session.logout()
            raise AuthError("Invalid or expired token")
        return claims["user_id"]

    def register(self, name: str, email: str, password: str) -> int:
        with self.database.session() as db:
            user_id = register_user(db, name, email, password)
        self.database.flush()
        return user_id

    def login(self, email: str, password: str) -> None:
        with self.database.session() as db:
            token, user = authenticate_user(db, email, password)
            self.session.login(token, UserResponse.model_validate(user))

    def create(self, category: str, link: str) -> int:
        user_id = self._user_id()
        with self.database.session() as db:
            portal_id = PortalStore(db).create(user_id, category, link)
        self.database.flush()
        return portal_id

    def list_portals(self) -> list[PortalResponse]:
        user_id = self._user_id()
        with self.database.session() as db:
            return [PortalResponse.model_validate(p) for p in PortalStore(db).list_portals(user_id)]

    def get(self, portal_id: int) -> PortalResponse:
        user_id = self._user_id()
        with self.database.session() as db:
            return PortalResponse.model_validate(PortalStore(db).get(user_id, portal_id))

    def update(self, portal_id: int, category: str | None = None, link: str | None = None) -> None:
        user_id = self._user_id()
        with self.database.session() as db:
            PortalStore(db).update(user_id, portal_id, category, link)
        self.database.flush()

    def delete(self, portal_id: int) -> None:
        user_id = self._user_id()
        with self.database.session() as db:
            PortalStore(db).delete(user_id, portal_id)
        self.database.flush()

    def categories(self) -> list[str]:
        user_id = self._user_id()
        with self.database.session() as db:
            return PortalStore(db).distinct_categories(user_id)

    def reset_to_defaults(self) -> list[PortalResponse]:
        user_id = self._user_id()
        with self.database.session() as db:
            portals = [
                PortalResponse.model_validate(p) for p in PortalStore(db).reset_to_defaults(user_id)
            ]
        self.database.flush()
        return portals
