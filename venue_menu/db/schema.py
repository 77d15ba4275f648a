"""
SQL DDL statements for all application tables.
Tables are created in dependency order so foreign keys resolve correctly.

Migration helpers run ALTER TABLE only when a column does not yet exist,
making them safe to call on every startup (idempotent).
"""
from venue_menu.db.database import get_connection

# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    email             TEXT    NOT NULL UNIQUE,
    username          TEXT    NOT NULL UNIQUE,
    full_name         TEXT,
    hashed_password   TEXT    NOT NULL,
    role              TEXT    NOT NULL DEFAULT 'member'
                              CHECK(role IN ('admin', 'member')),
    is_active         INTEGER NOT NULL DEFAULT 1,
    created_at        TEXT    NOT NULL DEFAULT (datetime('now')),
    updated_at        TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

CREATE_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS sessions (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id        INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    refresh_token  TEXT    NOT NULL UNIQUE,
    expires_at     TEXT    NOT NULL,
    revoked        INTEGER NOT NULL DEFAULT 0,
    created_at     TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

CREATE_FOOD_MENU_TABLE = """
CREATE TABLE IF NOT EXISTS food_menu (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    name         TEXT    NOT NULL,
    category     TEXT    NOT NULL,
    description  TEXT,
    price        REAL    NOT NULL DEFAULT 0.0 CHECK(price >= 0),
    vegetarian   INTEGER NOT NULL DEFAULT 0,
    available    INTEGER NOT NULL DEFAULT 1,
    tags         TEXT    NOT NULL DEFAULT '[]',
    featured     INTEGER NOT NULL DEFAULT 0,
    created_at   TEXT    NOT NULL DEFAULT (datetime('now')),
    updated_at   TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

CREATE_ALCOHOL_TABLE = """
CREATE TABLE IF NOT EXISTS alcohol (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    name          TEXT    NOT NULL,
    brand         TEXT,
    category      TEXT    NOT NULL,
    price_30ml    REAL    CHECK(price_30ml IS NULL OR price_30ml >= 0),
    price_60ml    REAL    CHECK(price_60ml IS NULL OR price_60ml >= 0),
    price_90ml    REAL    CHECK(price_90ml IS NULL OR price_90ml >= 0),
    price_180ml   REAL    CHECK(price_180ml IS NULL OR price_180ml >= 0),
    price_bottle  REAL    CHECK(price_bottle IS NULL OR price_bottle >= 0),
    available     INTEGER NOT NULL DEFAULT 1,
    tags          TEXT    NOT NULL DEFAULT '[]',
    featured      INTEGER NOT NULL DEFAULT 0,
    created_at    TEXT    NOT NULL DEFAULT (datetime('now')),
    updated_at    TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

CREATE_PROMOTIONS_TABLE = """
CREATE TABLE IF NOT EXISTS promotions (
    key          TEXT    PRIMARY KEY,
    title        TEXT    NOT NULL,
    description  TEXT    NOT NULL DEFAULT '',
    category     TEXT    NOT NULL DEFAULT 'general'
                         CHECK(category IN ('beer', 'food', 'drinks', 'alcohol', 'general')),
    active       INTEGER NOT NULL DEFAULT 0
);
"""

CREATE_VENUE_SETTINGS_TABLE = """
CREATE TABLE IF NOT EXISTS venue_settings (
    id               TEXT    PRIMARY KEY CHECK(id = 'default'),
    bar_name         TEXT,
    logo_url         TEXT,
    instagram_url    TEXT,
    facebook_url     TEXT,
    website_url      TEXT,
    address          TEXT,
    phone            TEXT,
    email            TEXT,
    hours            TEXT,
    google_maps_url  TEXT,
    embed_url        TEXT,
    show_map_embed   INTEGER NOT NULL DEFAULT 0,
    updated_at       TEXT
);
"""

# ---------------------------------------------------------------------------
# Incremental migrations (idempotent – safe to run every startup)
# ---------------------------------------------------------------------------

MIGRATIONS = [
    # tags/featured arrived after the first menu tables shipped
    ("food_menu", "tags",     "ALTER TABLE food_menu ADD COLUMN tags     TEXT    NOT NULL DEFAULT '[]'"),
    ("food_menu", "featured", "ALTER TABLE food_menu ADD COLUMN featured INTEGER NOT NULL DEFAULT 0"),
    ("alcohol",   "tags",     "ALTER TABLE alcohol   ADD COLUMN tags     TEXT    NOT NULL DEFAULT '[]'"),
    ("alcohol",   "featured", "ALTER TABLE alcohol   ADD COLUMN featured INTEGER NOT NULL DEFAULT 0"),
]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ALL_TABLES = [
    CREATE_USERS_TABLE,
    CREATE_SESSIONS_TABLE,
    CREATE_FOOD_MENU_TABLE,
    CREATE_ALCOHOL_TABLE,
    CREATE_PROMOTIONS_TABLE,
    CREATE_VENUE_SETTINGS_TABLE,
]


def _column_exists(conn, table: str, column: str) -> bool:
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return any(r["name"] == column for r in rows)


def create_tables() -> None:
    """Create all tables and apply incremental migrations."""
    conn = get_connection()
    try:
        cursor = conn.cursor()

        for ddl in ALL_TABLES:
            cursor.execute(ddl)

        for table, column, alter_sql in MIGRATIONS:
            if not _column_exists(conn, table, column):
                cursor.execute(alter_sql)

        conn.commit()
    finally:
        conn.close()
