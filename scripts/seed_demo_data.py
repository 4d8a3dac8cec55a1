#!/usr/bin/env python3
"""Seed demo data.

Creates a demo user with the default portal set in the configured database.
Re-running resets the demo user's portals.

Usage:
    DATABASE_URL=sqlite:///./jobportal.db python scripts/seed_demo_data.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jobportal.database import SessionLocal, init_db
from jobportal.services.auth import get_user_by_email, register_user
from jobportal.services.portal_store import PortalStore

DEMO_NAME = "Demo User"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demopass123"


def seed_demo_data():
    """Seed the database with a demo user and default portals."""
    init_db()
    session = SessionLocal()

    try:
        existing_user = get_user_by_email(session, DEMO_EMAIL)
        if existing_user:
            print("Demo user already exists. Resetting portals...")
            user_id = existing_user.id
        else:
            print("Creating demo user...")
            user_id = register_user(session, DEMO_NAME, DEMO_EMAIL, DEMO_PASSWORD)

        portals = PortalStore(session).reset_to_defaults(user_id)
        for portal in portals:
            print(f"  {portal.category}: {portal.link}")

        print(f"\nDemo login: {DEMO_EMAIL} / {DEMO_PASSWORD}")
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()
