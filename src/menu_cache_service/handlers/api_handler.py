"""FastAPI application exposing the menu catalog and onboarding endpoints."""

import logging
from decimal import Decimal

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from menu_cache_service.auth.api_key import APIKeyValidator, require_api_key
from menu_cache_service.exceptions import (
    CatalogError,
    NetworkError,
    OnboardingValidationError,
    ParseError,
    StorageError,
)
from menu_cache_service.models.menu_models import MenuItem
from menu_cache_service.models.profile_models import UserProfile
from menu_cache_service.services.catalog_cache import CacheState, CatalogCacheManager
from menu_cache_service.services.image_resolver import DEFAULT_IMAGE_BASE_URL, resolve_image_url
from menu_cache_service.services.onboarding_service import OnboardingService

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[CatalogError], int] = {
    NetworkError: 502,
    ParseError: 502,
    StorageError: 503,
}


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class MenuItemResponse(BaseModel):
    """Menu item as rendered by clients, with its image URL resolved."""

    id: int
    name: str
    price: Decimal
    description: str
    image: str
    image_url: str | None = None


class RefreshResponse(BaseModel):
    """Response model for a catalog refresh."""

    success: bool
    item_count: int


class CacheStatusResponse(BaseModel):
    """Response model for the cache state endpoint."""

    state: CacheState
    item_count: int


class OnboardingRequest(BaseModel):
    """Onboarding form submission."""

    first_name: str
    email: str


def _to_response(item: MenuItem, image_base_url: str) -> MenuItemResponse:
    return MenuItemResponse(
        id=item.id or 0,
        name=item.name,
        price=item.price,
        description=item.description,
        image=item.image,
        image_url=resolve_image_url(item.image, image_base_url),
    )


def create_app(
    cache_manager: CatalogCacheManager,
    onboarding_service: OnboardingService,
    api_keys: list[str],
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        cache_manager: Read-through cache for the menu catalog
        onboarding_service: Service persisting the user profile
        api_keys: Valid API keys for the admin endpoints
        image_base_url: Base URL bare image references resolve against

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Little Lemon Menu Cache",
        description="Menu catalog served from a local read-through cache",
        version="1.0.0",
    )

    app.state.cache_manager = cache_manager
    app.state.onboarding_service = onboarding_service
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys)
    app.state.image_base_url = image_base_url

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        # A failed fetch must never look like an empty menu to the client
        status_code = ERROR_STATUS_CODES.get(type(exc), 500)
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"error_type": type(exc).__name__, "detail": exc.message},
        )

    def validate_api_key(x_api_key: str | None = Header(None)) -> str:
        """Dependency to validate API key."""
        return require_api_key(x_api_key, app.state.api_key_validator)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/menu", response_model=list[MenuItemResponse], tags=["Menu"])
    async def get_menu() -> list[MenuItemResponse]:
        """Return the menu catalog, fetching it on first use.

        Raises:
            CatalogError: Rendered as 502 (remote failure) or 503 (local store failure)
        """
        items = await app.state.cache_manager.get_catalog()
        return [_to_response(item, app.state.image_base_url) for item in items]

    @app.post("/admin/menu/refresh", response_model=RefreshResponse, tags=["Admin"])
    async def refresh_menu(_api_key: str = Depends(validate_api_key)) -> RefreshResponse:
        """Refetch the catalog from the origin and replace the stored rows."""
        logger.info("Manual menu refresh triggered")
        items = await app.state.cache_manager.refresh()
        return RefreshResponse(success=True, item_count=len(items))

    @app.get("/admin/menu/status", response_model=CacheStatusResponse, tags=["Admin"])
    async def menu_status(_api_key: str = Depends(validate_api_key)) -> CacheStatusResponse:
        """Report the cache state and how many rows are stored."""
        manager: CatalogCacheManager = app.state.cache_manager
        item_count = await manager.store.count()
        return CacheStatusResponse(state=manager.state, item_count=item_count)

    @app.post("/onboarding", response_model=UserProfile, status_code=201, tags=["Profile"])
    async def complete_onboarding(form: OnboardingRequest) -> UserProfile:
        """Validate and store the onboarding form.

        Raises:
            HTTPException: 422 naming the invalid field
        """
        try:
            profile: UserProfile = await app.state.onboarding_service.complete_onboarding(
                first_name=form.first_name, email=form.email
            )
        except OnboardingValidationError as e:
            raise HTTPException(status_code=422, detail={"field": e.field, "message": str(e)}) from e
        return profile

    @app.get("/profile", response_model=UserProfile, tags=["Profile"])
    async def get_profile() -> UserProfile:
        """Return the stored profile.

        Raises:
            HTTPException: 404 if onboarding has not been completed
        """
        profile: UserProfile | None = await app.state.onboarding_service.get_profile()
        if profile is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        return profile

    return app
