"""
Database seeder – creates a default admin account and, optionally, a demo
menu on first startup.

⚠️  FOR DEVELOPMENT ONLY.
    Set SEED_ADMIN=false (and leave SEED_DEMO_MENU off) in production.
"""
import logging

from venue_menu.core.config import settings
from venue_menu.core.security import hash_password
from venue_menu.db.database import get_connection
from venue_menu.models.user import UserRole

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Demo menu (category, name, price, vegetarian) – shown until real items exist
# ---------------------------------------------------------------------------
DEMO_FOOD = [
    ("Starters", "Paneer Tikka", 350, True),
    ("Starters", "Chicken Wings", 400, False),
    ("Starters", "Nachos Supreme", 300, True),
    ("Starters", "Bruschetta", 280, True),
    ("Main Course", "Grilled Chicken", 550, False),
    ("Main Course", "Fish & Chips", 600, False),
    ("Main Course", "Pasta Alfredo", 450, True),
    ("Main Course", "Paneer Butter Masala", 400, True),
]

# (category, name, brand, price_60ml, price_bottle)
DEMO_ALCOHOL = [
    ("Whisky", "Single Malt Whiskey", None, 800, None),
    ("Vodka", "Premium Vodka", None, 600, None),
    ("Rum", "Aged Rum", None, 700, None),
    ("Brandy", "Cognac", None, 1200, None),
    ("Wine", "Red Wine Selection", None, None, 2500),
    ("Wine", "Sparkling Wine", None, None, 3200),
    ("Beer", "Craft IPA", "Bira 91", None, 350),
    ("Cocktails", "Classic Mojito", None, 400, None),
]


def seed_admin() -> None:
    """
    Insert the default admin user if it does not already exist.
    Safe to call on every startup – it is a no-op when the user is present.
    """
    conn = get_connection()
    try:
        existing = conn.execute(
            "SELECT id FROM users WHERE username = ?", (settings.ADMIN_USERNAME,)
        ).fetchone()

        if existing:
            logger.info("Seeder: admin user '%s' already exists – skipping.", settings.ADMIN_USERNAME)
            return

        conn.execute(
            """
            INSERT INTO users (email, username, full_name, hashed_password, role, is_active)
            VALUES (?, ?, ?, ?, ?, 1)
            """,
            (
                settings.ADMIN_EMAIL,
                settings.ADMIN_USERNAME,
                "Venue Admin",
                hash_password(settings.ADMIN_PASSWORD),
                UserRole.ADMIN.value,
            ),
        )
        conn.commit()
        logger.info(
            "Seeder: created default admin user '%s' (email: %s).",
            settings.ADMIN_USERNAME,
            settings.ADMIN_EMAIL,
        )
    finally:
        conn.close()


def seed_demo_menu() -> None:
    """Insert the demo food and alcohol items when both tables are empty."""
    conn = get_connection()
    try:
        food_count = conn.execute("SELECT COUNT(*) FROM food_menu").fetchone()[0]
        alcohol_count = conn.execute("SELECT COUNT(*) FROM alcohol").fetchone()[0]
        if food_count or alcohol_count:
            logger.info("Seeder: menu already has items – skipping demo menu.")
            return

        conn.executemany(
            "INSERT INTO food_menu (category, name, price, vegetarian) VALUES (?, ?, ?, ?)",
            [(c, n, p, int(v)) for c, n, p, v in DEMO_FOOD],
        )
        conn.executemany(
            """
            INSERT INTO alcohol (category, name, brand, price_60ml, price_bottle)
            VALUES (?, ?, ?, ?, ?)
            """,
            DEMO_ALCOHOL,
        )
        conn.commit()
        logger.info(
            "Seeder: inserted %s demo food and %s demo alcohol items.",
            len(DEMO_FOOD),
            len(DEMO_ALCOHOL),
        )
    finally:
        conn.close()
