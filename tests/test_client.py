"""Client session, storage backend and CLI tests."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from jobportal.client.cli import main
from jobportal.client.embedded import EmbeddedDatabase, EmbeddedPortalBackend
from jobportal.client.remote import ApiClient, RemotePortalBackend
from jobportal.client.session import ClientSession
from jobportal.config import Settings
from jobportal.errors import AuthError, InternalError, NotFoundError
from jobportal.schemas.auth import UserResponse
from jobportal.services.portal_store import DEFAULT_PORTALS, PortalStore


@pytest.fixture
def session(tmp_path):
    return ClientSession.load(tmp_path / "session.json")


@pytest.fixture
def embedded_backend(tmp_path, session):
    return EmbeddedPortalBackend(session, EmbeddedDatabase(tmp_path / "portals.db"))


@pytest.fixture
def remote_backend(client, session):
    return RemotePortalBackend(session, ApiClient("http://testserver", session, http_client=client))


class TestClientSession:
    def test_starts_logged_out(self, session):
        assert not session.is_authenticated
        assert session.user_id is None

    def test_login_persists(self, tmp_path, session):
        session.login("tok.en.sig", UserResponse(id=3, name="Alice", email="a@x.com"))

        restored = ClientSession.load(tmp_path / "session.json")
        assert restored.is_authenticated
        assert restored.token == "tok.en.sig"
        assert restored.user_id == 3

    def test_selected_category_is_not_persisted(self, tmp_path, session):
        session.login("tok.en.sig", UserResponse(id=3, name="Alice", email="a@x.com"))
        session.selected_category = "QA"

        assert ClientSession.load(tmp_path / "session.json").selected_category is None

    def test_logout_clears_file(self, tmp_path, session):
        session.login("tok.en.sig", UserResponse(id=3, name="Alice", email="a@x.com"))
        session.logout()

        assert not session.is_authenticated
        assert not (tmp_path / "session.json").exists()


class TestEmbeddedDatabase:
    def test_nothing_written_until_flush(self, tmp_path):
        path = tmp_path / "portals.db"
        EmbeddedDatabase(path)
        assert not path.exists()

    def test_flush_then_reload(self, tmp_path, session):
        path = tmp_path / "portals.db"
        backend = EmbeddedPortalBackend(session, EmbeddedDatabase(path))
        backend.register("Alice", "a@x.com", "pw123")
        backend.login("a@x.com", "pw123")
        portal_id = backend.create("QA", "indeed.com")
        assert path.exists()

        reloaded = EmbeddedPortalBackend(session, EmbeddedDatabase(path))
        assert reloaded.get(portal_id).link == "indeed.com"

    def test_unflushed_changes_are_lost(self, tmp_path, session):
        path = tmp_path / "portals.db"
        database = EmbeddedDatabase(path)
        backend = EmbeddedPortalBackend(session, database)
        backend.register("Alice", "a@x.com", "pw123")
        backend.login("a@x.com", "pw123")

        with database.session() as db:
            PortalStore(db).create(session.user_id, "QA", "unsaved.com")

        reloaded = EmbeddedPortalBackend(session, EmbeddedDatabase(path))
        assert reloaded.list_portals() == []


class TestEmbeddedBackend:
    def test_requires_login(self, embedded_backend):
        with pytest.raises(AuthError):
            embedded_backend.list_portals()

    def test_round_trip(self, embedded_backend):
        embedded_backend.register("Alice", "a@x.com", "pw123")
        embedded_backend.login("a@x.com", "pw123")

        portal_id = embedded_backend.create("Dev", "github.com/jobs")
        embedded_backend.update(portal_id, link="github.com/careers")
        assert embedded_backend.get(portal_id).link == "github.com/careers"
        assert embedded_backend.categories() == ["Dev"]

        embedded_backend.delete(portal_id)
        with pytest.raises(NotFoundError):
            embedded_backend.get(portal_id)

    def test_sites_for_selected_category(self, embedded_backend):
        embedded_backend.register("Alice", "a@x.com", "pw123")
        embedded_backend.login("a@x.com", "pw123")
        embedded_backend.reset_to_defaults()

        embedded_backend.session.selected_category = "Dev"
        assert sorted(embedded_backend.sites_for_category()) == [
            "github.com/jobs",
            "stackoverflow.com/jobs",
        ]

    def test_expired_token_logs_out(self, embedded_backend):
        embedded_backend.session.login(
            "bad.token.value", UserResponse(id=1, name="Alice", email="a@x.com")
        )
        with pytest.raises(AuthError):
            embedded_backend.categories()
        assert not embedded_backend.session.is_authenticated


class TestRemoteBackend:
    def test_round_trip(self, remote_backend):
        remote_backend.register("Alice", "a@x.com", "pw123")
        remote_backend.login("a@x.com", "pw123")
        assert remote_backend.session.user.name == "Alice"

        portal_id = remote_backend.create("QA", "indeed.com")
        remote_backend.update(portal_id, category="Testing")
        portal = remote_backend.get(portal_id)
        assert (portal.category, portal.link) == ("Testing", "indeed.com")
        assert remote_backend.categories() == ["Testing"]

        remote_backend.delete(portal_id)
        with pytest.raises(NotFoundError):
            remote_backend.get(portal_id)

    def test_reset_to_defaults(self, remote_backend):
        remote_backend.register("Alice", "a@x.com", "pw123")
        remote_backend.login("a@x.com", "pw123")
        remote_backend.create("Custom", "example.com")

        portals = remote_backend.reset_to_defaults()
        assert sorted((p.category, p.link) for p in portals) == sorted(DEFAULT_PORTALS)

    def test_unauthorized_forces_logout(self, remote_backend):
        remote_backend.session.login(
            "bad.token.value", UserResponse(id=1, name="Alice", email="a@x.com")
        )
        with pytest.raises(AuthError) as exc_info:
            remote_backend.list_portals()
        assert exc_info.value.message == "Invalid or expired token"
        assert not remote_backend.session.is_authenticated

    def test_network_error(self, session):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        http_client = httpx.Client(
            base_url="http://portal.test", transport=httpx.MockTransport(handler)
        )
        backend = RemotePortalBackend(
            session, ApiClient("http://portal.test", session, http_client=http_client)
        )
        with pytest.raises(InternalError):
            backend.categories()

    def test_close_releases_http_client(self, session):
        http_client = httpx.Client(
            base_url="http://portal.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
        )
        backend = RemotePortalBackend(
            session, ApiClient("http://portal.test", session, http_client=http_client)
        )
        backend.close()
        assert http_client.is_closed

    def test_server_error_message(self, session):
        http_client = httpx.Client(
            base_url="http://portal.test",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(500, json={"error": "Query failed"})
            ),
        )
        backend = RemotePortalBackend(
            session, ApiClient("http://portal.test", session, http_client=http_client)
        )
        with pytest.raises(InternalError) as exc_info:
            backend.list_portals()
        assert exc_info.value.message == "Query failed"


class TestCli:
    @pytest.fixture
    def settings(self, tmp_path):
        return Settings(
            _env_file=None,
            storage_backend="embedded",
            embedded_db_path=str(tmp_path / "portals.db"),
            session_path=str(tmp_path / "session.json"),
        )

    def test_search_flow(self, settings, capsys):
        assert main(["register", "Alice", "a@x.com", "--password", "pw123"], settings) == 0
        assert main(["login", "a@x.com", "--password", "pw123"], settings) == 0
        assert main(["add", "QA", "indeed.com"], settings) == 0
        assert main(["add", "QA", "linkedin.com"], settings) == 0

        with patch("jobportal.client.cli.webbrowser.open_new_tab") as mock_open:
            assert (
                main(["search", "QA", "Tester", "-d", "today", "--exclude-hybrid"], settings) == 0
            )

        mock_open.assert_called_once()
        url = mock_open.call_args.args[0]
        assert url.startswith("https://www.google.com/search?q=")
        assert "site%3Aindeed.com" in url
        assert "site%3Alinkedin.com" in url

        out = capsys.readouterr().out
        assert '"Tester"' in out
        assert "-hybrid" in out

    def test_list_when_logged_out(self, settings, capsys):
        assert main(["list"], settings) == 1
        assert "Authorization token required" in capsys.readouterr().err

    def test_logout(self, settings, tmp_path):
        main(["register", "Alice", "a@x.com", "--password", "pw123"], settings)
        main(["login", "a@x.com", "--password", "pw123"], settings)
        assert (tmp_path / "session.json").exists()

        assert main(["logout"], settings) == 0
        assert not (tmp_path / "session.json").exists()

    def test_backend_closed_after_command(self, settings):
        backend = MagicMock()
        backend.categories.return_value = ["QA"]
        with patch("jobportal.client.cli.get_backend", return_value=backend):
            assert main(["categories"], settings) == 0
        backend.close.assert_called_once()

    def test_backend_closed_after_error(self, settings):
        backend = MagicMock()
        backend.categories.side_effect = AuthError("Authorization token required")
        with patch("jobportal.client.cli.get_backend", return_value=backend):
            assert main(["categories"], settings) == 1
        backend.close.assert_called_once()
