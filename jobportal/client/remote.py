"""Portal backend that talks to the HTTP API."""

import logging
from typing import Any

import httpx

from jobportal.client.backends import PortalBackend
from jobportal.client.session import ClientSession
from jobportal.errors import InternalError, error_for_status
from jobportal.schemas.auth import UserResponse
from jobportal.schemas.portal import PortalResponse
from jobportal.services.portal_store import DEFAULT_PORTALS

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin JSON client for the portal API."""

    def __init__(
        self,
        base_url: str,
        session: ClientSession,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.session = session
        self.timeout = 30.0
        self.http = http_client or httpx.Client(base_url=base_url, timeout=self.timeout)

    def request(self, method: str, path: str, json: dict | None = None) -> Any:
        """Send a request and return the decoded body.

        Error responses are raised as the matching domain error. A 401 logs
        the session out before raising.
        """
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            response = self.http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling {method} {path}: {e}")
            raise InternalError(f"Network error: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_success:
            return data

        message = data.get("error", "API call failed") if isinstance(data, dict) else "API call failed"
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self.session.logout()
        raise error_for_status(response.status_code, message)

    def close(self) -> None:
        self.http.close()


class RemotePortalBackend(PortalBackend):
    def __init__(self, session: ClientSession, api: ApiClient):
        super().__init__(session)
        self.api = api

    def close(self) -> None:
        self.api.close()

    def register(self, name: str, email: str, password: str) -> int:
        data = self.api.request(
            "POST", "/register", json={"name": name, "email": email, "password": password}
        )
        return data["user_id"]

    def login(self, email: str, password: str) -> None:
        data = self.api.request("POST", "/login", json={"email": email, "password": password})
        self.session.login(data["token"], UserResponse.model_validate(data["user"]))

    def create(self, category: str, link: str) -> int:
        data = self.api.request("POST", "/portals", json={"category": category, "link": link})
        return data["portal_id"]

    def list_portals(self) -> list[PortalResponse]:
        return [PortalResponse.model_validate(p) for p in self.api.request("GET", "/portals")]

    def get(self, portal_id: int) -> PortalResponse:
        return PortalResponse.model_validate(self.api.request("GET", f"/portals/{portal_id}"))

    def update(self, portal_id: int, category: str | None = None, link: str | None = None) -> None:
        patch = {}
        if category is not None:
            patch["category"] = category
        if link is not None:
            patch["link"] = link
        self.api.request("PUT", f"/portals/{portal_id}", json=patch)

    def delete(self, portal_id: int) -> None:
        self.api.request("DELETE", f"/portals/{portal_id}")

    def categories(self) -> list[str]:
        return self.api.request("GET", "/categories")

    def reset_to_defaults(self) -> list[PortalResponse]:
        # The API has no bulk operation, so replay it one portal at a time
        for portal in self.list_portals():
            self.delete(portal.id)
        for category, link in DEFAULT_PORTALS:
            self.create(category, link)
        return self.list_portals()
