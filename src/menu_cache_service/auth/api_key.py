"""API key checks for the admin menu endpoints."""

from fastapi import HTTPException


class APIKeyValidator:
    """Holds the configured admin keys and checks incoming ones against them."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator.

        Args:
            api_keys: Valid admin keys

        Raises:
            ValueError: If no keys are given
        """
        if not api_keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = frozenset(api_keys)

    def validate(self, api_key: str) -> bool:
        """Exact, case-sensitive match against the configured keys."""
        return api_key in self.api_keys


def require_api_key(x_api_key: str | None, validator: APIKeyValidator) -> str:
    """Check the X-API-Key header value for an admin request.

    Returns:
        The accepted key

    Raises:
        HTTPException: 401 if the key is missing or not configured
    """
    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    if not validator.validate(x_api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")

    return x_api_key
