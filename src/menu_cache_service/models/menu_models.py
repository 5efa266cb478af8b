"""Menu data models.

A ``MenuItem`` is created from the remote catalog payload, persisted once into
the local store (which assigns ``id``) and read many times afterwards.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(None, description="Store-assigned identifier, None until persisted")
    name: str = Field(..., description="Item name", min_length=1)
    price: Decimal = Field(..., description="Item price", ge=0)
    description: str = Field(default="", description="Item description")
    image: str = Field(default="", description="Image reference resolved against the image base URL")

    @field_validator("price", mode="before")
    @classmethod
    def reject_non_numeric_price(cls, v: object) -> object:
        """Only accept real numbers or numeric strings for price."""
        if isinstance(v, bool) or not isinstance(v, int | float | str | Decimal):
            raise ValueError("price must be a number")
        return Decimal(str(v)) if isinstance(v, float) else v

    @field_validator("price")
    @classmethod
    def require_storable_price(cls, v: Decimal) -> Decimal:
        """Prices are stored as REAL, so they must survive a float round trip exactly."""
        if Decimal(repr(float(v))) != v:
            raise ValueError("price must be a finite number with at most 15 significant digits")
        return v

    def content_key(self) -> tuple[str, Decimal, str, str]:
        """Fields that identify an item's content, ignoring the generated id."""
        return (self.name, self.price, self.description, self.image)


class CatalogResponse(BaseModel):
    """Envelope of the remote catalog endpoint: ``{"menu": [...]}``."""

    menu: list[MenuItem]
