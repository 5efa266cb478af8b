"""Read-through cache that serves the menu catalog from the local store."""

import asyncio
import logging
from enum import Enum

from menu_cache_service.exceptions import CatalogError
from menu_cache_service.models.menu_models import MenuItem
from menu_cache_service.observability.decorators import traced
from menu_cache_service.observability.metrics import (
    record_cache_hit,
    record_cache_miss,
    record_fetch_failure,
    record_items_persisted,
)
from menu_cache_service.repositories.catalog_repository import LocalCatalogStore
from menu_cache_service.services.catalog_fetcher import RemoteCatalogFetcher

logger = logging.getLogger(__name__)


class CacheState(str, Enum):
    """Lifecycle of the cached catalog within one process."""

    EMPTY = "empty"
    FETCHING = "fetching"
    POPULATED = "populated"
    FETCH_FAILED = "fetch_failed"


class CatalogCacheManager:
    """Service coordinating the local store and the remote catalog.

    ``get_catalog`` serves the stored catalog when there is one and otherwise
    fetches it, persists it and returns it. Concurrent callers that find the
    store empty share a single fetch-and-store operation and all receive its
    result or its error. Once populated, the catalog is served from the store
    for the rest of the process; only ``refresh`` goes back to the origin.
    """

    def __init__(self, store: LocalCatalogStore, fetcher: RemoteCatalogFetcher) -> None:
        """Initialize the CatalogCacheManager.

        Args:
            store: Local catalog store, the only component this service mutates
            fetcher: Client for the remote catalog
        """
        self.store = store
        self.fetcher = fetcher
        self._state = CacheState.EMPTY
        self._schema_ready = False
        self._lock = asyncio.Lock()
        self._inflight: asyncio.Task[list[MenuItem]] | None = None

    @property
    def state(self) -> CacheState:
        """Current cache state."""
        return self._state

    @traced("catalog_cache.get_catalog")
    async def get_catalog(self) -> list[MenuItem]:
        """Return the menu catalog, fetching and persisting it on a cold start.

        Returns:
            Menu items in display order, each carrying its store id

        Raises:
            NetworkError: If the store was empty and the origin was unreachable
            ParseError: If the store was empty and the origin returned a bad payload
            StorageError: If the local store could not be read or written
        """
        # Warm path: once the schema exists, reads do not need the lock
        if self._schema_ready and self._inflight is None:
            items = await self.store.read_all()
            if items:
                return self._serve_stored(items)

        async with self._lock:
            await self._ensure_schema()
            task = self._inflight
            if task is None:
                items = await self.store.read_all()
                if items:
                    return self._serve_stored(items)

                record_cache_miss()
                logger.info("Local menu store is empty, fetching remote catalog")
                task = self._start_populate(replace=False)

        return await asyncio.shield(task)

    @traced("catalog_cache.refresh")
    async def refresh(self) -> list[MenuItem]:
        """Refetch the catalog and replace the stored rows.

        The previous rows are kept if the fetch or the write fails. A refresh
        requested while another populate is in flight joins that operation.

        Raises:
            NetworkError: If the origin was unreachable
            ParseError: If the origin returned a bad payload
            StorageError: If the local store could not be written
        """
        async with self._lock:
            await self._ensure_schema()
            task = self._inflight
            if task is None:
                logger.info("Refreshing menu catalog from remote")
                task = self._start_populate(replace=True)

        return await asyncio.shield(task)

    def _serve_stored(self, items: list[MenuItem]) -> list[MenuItem]:
        self._state = CacheState.POPULATED
        record_cache_hit(len(items))
        logger.info(f"Serving {len(items)} menu items from local store")
        return items

    async def _ensure_schema(self) -> None:
        # Called with the lock held; a failed attempt is retried on the next call
        if not self._schema_ready:
            await self.store.ensure_schema()
            self._schema_ready = True

    def _start_populate(self, replace: bool) -> asyncio.Task[list[MenuItem]]:
        previous_state = self._state
        self._state = CacheState.FETCHING
        task = asyncio.create_task(self._populate(replace))

        def _finished(done: asyncio.Task[list[MenuItem]]) -> None:
            if self._inflight is done:
                self._inflight = None
            if done.cancelled():
                self._state = previous_state
            elif done.exception() is not None:
                # A failed refresh leaves the old rows, and the old state, in place
                self._state = previous_state if replace else CacheState.FETCH_FAILED
            else:
                self._state = CacheState.POPULATED

        task.add_done_callback(_finished)
        self._inflight = task
        return task

    async def _populate(self, replace: bool) -> list[MenuItem]:
        try:
            items = await self.fetcher.fetch()
        except CatalogError as e:
            record_fetch_failure(type(e).__name__)
            logger.error(f"Remote catalog fetch failed: {e}")
            raise

        if replace:
            stored = await self.store.replace_all(items)
        else:
            stored = await self.store.bulk_insert(items)

        record_items_persisted(len(stored), "replace" if replace else "append")
        logger.info(f"Persisted {len(stored)} menu items to local store")
        return stored
