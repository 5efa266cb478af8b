"""Typed failures raised by the menu cache.

Every failure that can reach a ``get_catalog()`` caller derives from
``CatalogError`` so the UI layer can tell "fetch failed" apart from
"menu has zero items".
"""

from typing import Any


class CatalogError(Exception):
    """Base class for menu catalog failures."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class NetworkError(CatalogError):
    """The remote catalog could not be reached or answered with an HTTP error."""


class ParseError(CatalogError):
    """The remote catalog payload was malformed or incomplete."""


class StorageError(CatalogError):
    """Schema creation, insert or read failed in the local store."""


class OnboardingValidationError(ValueError):
    """Onboarding input failed validation.

    Attributes:
        field: Name of the offending field ("first_name" or "email")
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
