"""Interchangeable portal storage for the client."""

from abc import ABC, abstractmethod

from jobportal.client.session import ClientSession
from jobportal.config import Settings
from jobportal.schemas.portal import PortalResponse


class PortalBackend(ABC):
    """Portal operations for the user logged in on ``session``."""

    def __init__(self, session: ClientSession):
        self.session = session

    @abstractmethod
    def register(self, name: str, email: str, password: str) -> int: ...

    @abstractmethod
    def login(self, email: str, password: str) -> None:
        """Authenticate and record the token and user on the session."""

    def logout(self) -> None:
        self.session.logout()

    @abstractmethod
    def create(self, category: str, link: str) -> int: ...

    @abstractmethod
    def list_portals(self) -> list[PortalResponse]: ...

    @abstractmethod
    def get(self, portal_id: int) -> PortalResponse: ...

    @abstractmethod
    def update(
        self, portal_id: int, category: str | None = None, link: str | None = None
    ) -> None:
        """Change only the fields that are not ``None``."""

    @abstractmethod
    def delete(self, portal_id: int) -> None: ...

    @abstractmethod
    def categories(self) -> list[str]: ...

    @abstractmethod
    def reset_to_defaults(self) -> list[PortalResponse]: ...

    def close(self) -> None:
        """Release connections held by the backend."""

    def sites_for_category(self, category: str | None = None) -> list[str]:
        """Links saved under ``category`` (the selected one by default), in list order."""
        category = category or self.session.selected_category
        return [portal.link for portal in self.list_portals() if portal.category == category]


def get_backend(settings: Settings, session: ClientSession) -> PortalBackend:
    """Pick the backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "embedded":
        from jobportal.client.embedded import EmbeddedDatabase, EmbeddedPortalBackend

        return EmbeddedPortalBackend(session, EmbeddedDatabase(settings.embedded_db_path))

    from jobportal.client.remote import ApiClient, RemotePortalBackend

    return RemotePortalBackend(session, ApiClient(settings.api_base_url, session))
