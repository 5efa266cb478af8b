"""Key-value persistence for the onboarding user profile."""

import json
import logging
from typing import Any

from menu_cache_service.models.profile_models import UserProfile
from menu_cache_service.repositories.sqlite_base import SQLiteRepository

logger = logging.getLogger(__name__)

CREATE_PROFILE_TABLE = (
    "CREATE TABLE IF NOT EXISTS user_profile (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
)

PROFILE_KEYS = ("firstName", "email", "isOnboardingCompleted")


class UserProfileStore(SQLiteRepository):
    """Repository for the user profile written during onboarding.

    Values are JSON-encoded under the keys ``firstName``, ``email`` and
    ``isOnboardingCompleted``. The menu cache never reads or writes them.
    """

    async def ensure_schema(self) -> None:
        """Create the profile table if it does not exist."""
        async with self.transaction() as db:
            await db.execute(CREATE_PROFILE_TABLE)

    async def get(self, key: str) -> Any | None:
        """Read a single value, or None when the key was never written."""
        async with self.connection() as db:
            async with db.execute("SELECT value FROM user_profile WHERE key = ?", (key,)) as cursor:
                row = await cursor.fetchone()

        return json.loads(row["value"]) if row else None

    async def set_many(self, values: dict[str, Any]) -> None:
        """Write several keys atomically."""
        async with self.transaction() as db:
            await db.executemany(
                "INSERT OR REPLACE INTO user_profile (key, value) VALUES (?, ?)",
                [(key, json.dumps(value)) for key, value in values.items()],
            )

    async def get_profile(self) -> UserProfile | None:
        """Load the stored profile.

        Returns:
            UserProfile if first name and email have been written, None otherwise
        """
        async with self.connection() as db:
            async with db.execute("SELECT key, value FROM user_profile") as cursor:
                rows = await cursor.fetchall()

        data = {row["key"]: json.loads(row["value"]) for row in rows if row["key"] in PROFILE_KEYS}
        if "firstName" not in data or "email" not in data:
            return None

        return UserProfile.model_validate(data)

    async def save_profile(self, profile: UserProfile) -> None:
        """Persist every profile field."""
        await self.set_many(profile.model_dump(by_alias=True))
        logger.info("User profile saved")

    async def clear(self) -> None:
        """Remove all profile keys."""
        async with self.transaction() as db:
            await db.execute("DELETE FROM user_profile")
