"""OpenTelemetry instrumentation and structured logging for the menu cache."""

from menu_cache_service.observability.config import configure_logging, setup_observability
from menu_cache_service.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
