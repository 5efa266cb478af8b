"""Custom metrics for the menu cache."""

from opentelemetry import metrics

meter = metrics.get_meter("menu-cache-svc")

cache_hit_counter = meter.create_counter(
    name="menu_cache_hit_total",
    description="Catalog requests served from the local store",
    unit="1",
)

cache_miss_counter = meter.create_counter(
    name="menu_cache_miss_total",
    description="Catalog requests that found the local store empty",
    unit="1",
)

fetch_failure_counter = meter.create_counter(
    name="menu_fetch_failure_total",
    description="Failed remote catalog fetches by error type",
    unit="1",
)

fetch_duration_histogram = meter.create_histogram(
    name="menu_fetch_duration_seconds",
    description="Duration of remote catalog fetches",
    unit="s",
)

items_persisted_counter = meter.create_counter(
    name="menu_items_persisted_total",
    description="Menu items written to the local store",
    unit="1",
)


def record_cache_hit(item_count: int) -> None:  # noqa: ARG001
    """Record a catalog request answered from the store."""
    cache_hit_counter.add(1)


def record_cache_miss() -> None:
    """Record a catalog request that found the store empty."""
    cache_miss_counter.add(1)


def record_fetch_failure(error_type: str) -> None:
    """Record a failed remote fetch.

    Args:
        error_type: Name of the typed error raised (e.g. "NetworkError")
    """
    fetch_failure_counter.add(1, {"error_type": error_type})


def record_fetch_duration(duration_seconds: float) -> None:
    """Record how long a remote fetch took, successful or not."""
    fetch_duration_histogram.record(duration_seconds)


def record_items_persisted(item_count: int, mode: str) -> None:
    """Record a batch written to the store.

    Args:
        item_count: Number of rows written
        mode: "append" for a cold-start insert, "replace" for a refresh
    """
    items_persisted_counter.add(item_count, {"mode": mode})
