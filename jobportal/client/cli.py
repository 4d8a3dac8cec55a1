"""Command-line front end for the job portal manager."""

import argparse
import getpass
import logging
import sys
import webbrowser
from collections.abc import Sequence

from jobportal.client.backends import PortalBackend, get_backend
from jobportal.client.session import ClientSession
from jobportal.config import Settings, get_settings
from jobportal.errors import PortalAppError
from jobportal.services.query_builder import DateRange, build_search_query, search_url

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobportal",
        description="Manage categorized job board lists and search them on Google.",
    )
    parser.add_argument(
        "--backend",
        choices=["remote", "embedded"],
        help="Storage backend (defaults to STORAGE_BACKEND).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Create an account.")
    register.add_argument("name")
    register.add_argument("email")
    register.add_argument("--password", help="Prompted for when omitted.")

    login = sub.add_parser("login", help="Log in and remember the session.")
    login.add_argument("email")
    login.add_argument("--password", help="Prompted for when omitted.")

    sub.add_parser("logout", help="Forget the current session.")
    sub.add_parser("list", help="Show saved portals grouped by category.")
    sub.add_parser("categories", help="Show category names.")

    add = sub.add_parser("add", help="Save a portal.")
    add.add_argument("category")
    add.add_argument("link")

    edit = sub.add_parser("edit", help="Change a portal's category or link.")
    edit.add_argument("portal_id", type=int)
    edit.add_argument("--category")
    edit.add_argument("--link")

    delete = sub.add_parser("delete", help="Delete a portal.")
    delete.add_argument("portal_id", type=int)

    reset = sub.add_parser("reset", help="Replace all portals with the default set.")
    reset.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")

    search = sub.add_parser("search", help="Search a category's portals on Google.")
    search.add_argument("category")
    search.add_argument("keyword")
    search.add_argument(
        "--date-range",
        "-d",
        default=DateRange.ANY.value,
        choices=[r.value for r in DateRange],
    )
    search.add_argument("--exclude-hybrid", action="store_true")
    search.add_argument("--exclude-onsite", action="store_true")
    search.add_argument("--no-open", action="store_true", help="Print the URL only.")

    return parser


def print_portals(backend: PortalBackend) -> None:
    portals = backend.list_portals()
    if not portals:
        print("No categories found. Add some portals first.")
        return
    current = None
    for portal in portals:
        if portal.category != current:
            current = portal.category
            print(f"{current}:")
        print(f"  [{portal.id}] {portal.link}")


def run_search(backend: PortalBackend, args: argparse.Namespace) -> str:
    """Build the query for the chosen category and open it. Returns the URL."""
    backend.session.selected_category = args.category
    sites = backend.sites_for_category()
    if not sites:
        print(f"No sites in category '{args.category}'")
    query = build_search_query(
        args.keyword,
        args.date_range,
        sites,
        exclude_hybrid=args.exclude_hybrid,
        exclude_onsite=args.exclude_onsite,
    )
    url = search_url(query)
    print(f"Generated query:\n{query}")
    print(url)
    if not args.no_open:
        webbrowser.open_new_tab(url)
    return url


def dispatch(backend: PortalBackend, args: argparse.Namespace) -> None:
    command = args.command
    if command == "register":
        password = args.password or getpass.getpass("Password: ")
        user_id = backend.register(args.name, args.email, password)
        print(f"Registration successful (user {user_id}). Please login.")
    elif command == "login":
        password = args.password or getpass.getpass("Password: ")
        backend.login(args.email, password)
        print(f"Logged in as {backend.session.user.name}")
    elif command == "logout":
        backend.logout()
        print("Logged out")
    elif command == "list":
        print_portals(backend)
    elif command == "categories":
        for category in backend.categories():
            print(category)
    elif command == "add":
        portal_id = backend.create(args.category, args.link)
        print(f"Added portal {portal_id}")
    elif command == "edit":
        backend.update(args.portal_id, category=args.category, link=args.link)
        print(f"Updated portal {args.portal_id}")
    elif command == "delete":
        backend.delete(args.portal_id)
        print(f"Deleted portal {args.portal_id}")
    elif command == "reset":
        if not args.yes and input("This will delete all your portals. Continue? [y/N] ") != "y":
            return
        backend.reset_to_defaults()
        print_portals(backend)
    elif command == "search":
        run_search(backend, args)


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    """Run one command. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    if args.backend:
        settings = settings.model_copy(update={"storage_backend": args.backend})

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = ClientSession.load(settings.session_path)
    backend = get_backend(settings, session)
    try:
        dispatch(backend, args)
    except PortalAppError as e:
        # On a 401 the session is already cleared
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        backend.close()
    return 0
