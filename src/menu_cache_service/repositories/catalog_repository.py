"""SQLite-backed durable storage for menu catalog records."""

import logging
from collections.abc import Sequence
from decimal import Decimal

import aiosqlite

from menu_cache_service.exceptions import StorageError
from menu_cache_service.models.menu_models import MenuItem
from menu_cache_service.observability.decorators import traced
from menu_cache_service.repositories.sqlite_base import SQLiteRepository

logger = logging.getLogger(__name__)

CREATE_MENU_TABLE = (
    "CREATE TABLE IF NOT EXISTS menu ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "name TEXT NOT NULL, "
    "price REAL NOT NULL, "
    "description TEXT NOT NULL DEFAULT '', "
    "image TEXT NOT NULL DEFAULT '')"
)

INSERT_MENU_ITEM = "INSERT INTO menu (name, price, description, image) VALUES (?, ?, ?, ?)"

SELECT_MENU_ITEMS = "SELECT id, name, price, description, image FROM menu ORDER BY id ASC"


class LocalCatalogStore(SQLiteRepository):
    """Repository for the persisted menu catalog.

    Rows live in a single ``menu`` table. Insertion order (ascending ``id``)
    is display order. All mutations run inside a scoped transaction, so a
    failed batch never leaves partial rows behind.
    """

    @traced("catalog_store.ensure_schema")
    async def ensure_schema(self) -> None:
        """Create the menu table if it does not exist. Never touches existing rows.

        Raises:
            StorageError: If the schema cannot be created
        """
        async with self.transaction() as db:
            await db.execute(CREATE_MENU_TABLE)

    @traced("catalog_store.bulk_insert")
    async def bulk_insert(self, items: Sequence[MenuItem]) -> list[MenuItem]:
        """Append all items as new rows, each assigned a fresh id.

        Does not deduplicate: calling this twice with the same items stores two
        copies. Use ``replace_all`` for a refresh.

        Args:
            items: Items to persist, in display order

        Returns:
            The persisted items carrying their store-assigned ids

        Raises:
            StorageError: If any insert fails (no rows from the batch are kept)
        """
        async with self.transaction() as db:
            stored = await self._insert_rows(db, items)

        logger.info(f"Inserted {len(stored)} menu items")
        return stored

    @traced("catalog_store.replace_all")
    async def replace_all(self, items: Sequence[MenuItem]) -> list[MenuItem]:
        """Clear the table and insert ``items`` in one transaction.

        Readers see either the old catalog or the new one, never a mix.

        Raises:
            StorageError: If the delete or any insert fails (old rows are kept)
        """
        async with self.transaction() as db:
            await db.execute("DELETE FROM menu")
            stored = await self._insert_rows(db, items)

        logger.info(f"Replaced menu catalog with {len(stored)} items")
        return stored

    @traced("catalog_store.read_all")
    async def read_all(self) -> list[MenuItem]:
        """Read every stored item ordered by ascending id.

        Raises:
            StorageError: If the table cannot be read
        """
        async with self.connection() as db:
            async with db.execute(SELECT_MENU_ITEMS) as cursor:
                rows = await cursor.fetchall()

        try:
            return [self._row_to_item(row) for row in rows]
        except (ValueError, ArithmeticError) as e:
            logger.error(f"Unreadable menu row in {self.database_path}: {e}")
            raise StorageError(
                "Stored menu row is invalid",
                context={"database_path": self.database_path},
                cause=e,
            ) from e

    @traced("catalog_store.clear")
    async def clear(self) -> None:
        """Remove all rows.

        Raises:
            StorageError: If the delete fails
        """
        async with self.transaction() as db:
            await db.execute("DELETE FROM menu")

        logger.info("Cleared menu catalog")

    async def count(self) -> int:
        """Number of stored rows."""
        async with self.connection() as db:
            async with db.execute("SELECT COUNT(*) FROM menu") as cursor:
                row = await cursor.fetchone()

        return int(row[0]) if row else 0

    async def _insert_rows(
        self, db: aiosqlite.Connection, items: Sequence[MenuItem]
    ) -> list[MenuItem]:
        stored = []
        for item in items:
            cursor = await db.execute(
                INSERT_MENU_ITEM,
                (item.name, float(item.price), item.description, item.image),
            )
            stored.append(item.model_copy(update={"id": cursor.lastrowid}))
            await cursor.close()
        return stored

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> MenuItem:
        # REAL round-trips through str so 12.5 comes back as Decimal("12.5")
        return MenuItem(
            id=row["id"],
            name=row["name"],
            price=Decimal(str(row["price"])),
            description=row["description"],
            image=row["image"],
        )
