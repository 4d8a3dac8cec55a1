"""Portal storage scoped to a single owner."""

import logging

from sqlalchemy.orm import Session

from jobportal.errors import NotFoundError, ValidationError
from jobportal.models.portal import Portal

logger = logging.getLogger(__name__)

# Portals re-created by a reset, in display order
DEFAULT_PORTALS = [
    ("QA", "indeed.com"),
    ("QA", "linkedin.com"),
    ("Dev", "stackoverflow.com/jobs"),
    ("Dev", "github.com/jobs"),
]

MIN_PORTAL_ID = -(2**63)
MAX_PORTAL_ID = 2**63 - 1


class PortalStore:
    """CRUD over a user's portals.

    Every query filters on ``user_id``: a portal owned by someone else is
    reported exactly like one that does not exist.
    """

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, user_id: int, portal_id: int) -> Portal | None:
        # Ids beyond a signed 64-bit integer cannot exist and overflow the driver
        if not MIN_PORTAL_ID <= portal_id <= MAX_PORTAL_ID:
            return None
        return (
            self.db.query(Portal)
            .filter(Portal.id == portal_id, Portal.user_id == user_id)
            .first()
        )

    def create(self, user_id: int, category: str | None, link: str | None) -> int:
        """Save a new portal and return its id."""
        if not category or not link:
            raise ValidationError("Category and link are required")

        portal = Portal(category=category, link=link, user_id=user_id)
        self.db.add(portal)
        self.db.commit()
        self.db.refresh(portal)
        logger.info(f"User {user_id} created portal {portal.id} in '{category}'")
        return portal.id

    def list_portals(self, user_id: int) -> list[Portal]:
        """All of the user's portals, by category then newest first."""
        return (
            self.db.query(Portal)
            .filter(Portal.user_id == user_id)
            .order_by(Portal.category.asc(), Portal.created_at.desc(), Portal.id.desc())
            .all()
        )

    def get(self, user_id: int, portal_id: int) -> Portal:
        portal = self._owned(user_id, portal_id)
        if not portal:
            raise NotFoundError("Portal not found")
        return portal

    def update(
        self,
        user_id: int,
        portal_id: int,
        category: str | None = None,
        link: str | None = None,
    ) -> Portal:
        """Apply a partial update. ``updated_at`` is stamped even if nothing changed."""
        portal = self._owned(user_id, portal_id)
        if not portal:
            raise NotFoundError("Portal not found or access denied")

        if category is not None:
            portal.category = category
        if link is not None:
            portal.link = link
        portal.touch()

        self.db.commit()
        self.db.refresh(portal)
        logger.info(f"User {user_id} updated portal {portal_id}")
        return portal

    def delete(self, user_id: int, portal_id: int) -> None:
        portal = self._owned(user_id, portal_id)
        if not portal:
            raise NotFoundError("Portal not found or access denied")

        self.db.delete(portal)
        self.db.commit()
        logger.info(f"User {user_id} deleted portal {portal_id}")

    def distinct_categories(self, user_id: int) -> list[str]:
        """The user's category labels, ascending."""
        rows = (
            self.db.query(Portal.category)
            .filter(Portal.user_id == user_id)
            .distinct()
            .order_by(Portal.category.asc())
            .all()
        )
        return [category for (category,) in rows]

    def reset_to_defaults(self, user_id: int) -> list[Portal]:
        """Replace all of the user's portals with the default set."""
        for portal in self.list_portals(user_id):
            self.delete(user_id, portal.id)
        for category, link in DEFAULT_PORTALS:
            self.create(user_id, category, link)
        return self.list_portals(user_id)
