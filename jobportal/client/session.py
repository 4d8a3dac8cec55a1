"""Client-side session state."""

import logging
from pathlib import Path

from pydantic import BaseModel

from jobportal.schemas.auth import UserResponse

logger = logging.getLogger(__name__)


class ClientSession(BaseModel):
    """Who is logged in on this client, and what they are looking at.

    Only ``login`` and ``logout`` write the session file; the selected
    category lives for the current process.
    """

    path: Path | None = None
    token: str | None = None
    user: UserResponse | None = None
    selected_category: str | None = None

    @classmethod
    def load(cls, path: str | Path) -> "ClientSession":
        """Restore the session saved at ``path``, or start a logged-out one."""
        path = Path(path).expanduser()
        if not path.exists():
            return cls(path=path)
        session = cls.model_validate_json(path.read_text(encoding="utf-8"))
        session.path = path
        return session

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    @property
    def user_id(self) -> int | None:
        return self.user.id if self.user else None

    def login(self, token: str, user: UserResponse) -> None:
        self.token = token
        self.user = user
        self._save()
        logger.info(f"Logged in as user {user.id}")

    def logout(self) -> None:
        """Discard the token locally. The token itself stays valid until it expires."""
        self.token = None
        self.user = None
        self.selected_category = None
        if self.path is not None and self.path.exists():
            self.path.unlink()

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            self.model_dump_json(include={"token", "user"}), encoding="utf-8"
        )
