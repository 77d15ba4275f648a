"""
Domain model for a signed-in session, backed by a stored refresh token.
"""
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class UserSession:
    id: int
    user_id: int
    refresh_token: str
    expires_at: datetime
    revoked: bool
    created_at: datetime

    def is_expired(self) -> bool:
        return self.expires_at < datetime.now(tz=timezone.utc)

    @classmethod
    def from_row(cls, row) -> "UserSession":
        """Build a UserSession from a sqlite3.Row object."""
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            refresh_token=row["refresh_token"],
            expires_at=datetime.fromisoformat(row["expires_at"]),
            revoked=bool(row["revoked"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
