"""Food item domain models and enums."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class FoodCategory(StrEnum):
    """Food category labels as stored by the inventory."""

    DAIRY = "Latticini"
    MEAT = "Carne"
    FISH = "Pesce"
    FRUIT = "Frutta"
    VEGETABLES = "Verdure"
    GRAINS = "Cereali"
    OTHER = "Altro"


class StorageLocation(StrEnum):
    """Where an item is kept."""

    FRIDGE = "Frigorifero"
    FREEZER = "Freezer"
    PANTRY = "Dispensa"


class ExpiryStatus(StrEnum):
    """Freshness classification of an item."""

    FRESH = "fresh"
    EXPIRING = "expiring"
    EXPIRED = "expired"


class FoodItem(BaseModel):
    """Inventory item as returned by the inventory API (read-only here)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str | int = Field(..., description="Item ID assigned by the inventory")
    name: str = Field(..., description="Item name (e.g., 'latte')")
    category: str | None = Field(default=None, description="Category label")
    preparation_date: date = Field(..., alias="preparationDate", description="Date the item was prepared or bought")
    days_to_expiry: int = Field(..., alias="daysToExpiry", gt=0, description="Shelf-life in days")
    location: str | None = Field(default=None, description="Storage location")


class FoodItemDraft(BaseModel):
    """Partially filled food item produced by voice parsing, not yet persisted."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, description="Recognized food name")
    category: FoodCategory | None = Field(default=None, description="Category inferred from the name")
    days_to_expiry: int | None = Field(default=None, alias="daysToExpiry", gt=0, description="Shelf-life in days")
    location: StorageLocation | None = Field(default=None, description="Recognized storage location")
    preparation_date: date | None = Field(default=None, alias="preparationDate", description="Preparation date")


class FoodItemCreate(BaseModel):
    """Completed draft, ready for the inventory API."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    category: str = Field(..., description="Category label")
    preparation_date: date = Field(..., alias="preparationDate")
    days_to_expiry: int = Field(..., alias="daysToExpiry", gt=0)
    location: str = Field(..., description="Storage location")


class ExpiryAssessment(BaseModel):
    """Derived expiry state of one item at a given moment. Never stored."""

    status: ExpiryStatus
    days_remaining: int = Field(..., description="Ceiling of the time left until expiry, in days (signed)")
    days_until_expiry: int = Field(..., description="Shelf-life minus elapsed days, as shown on status badges")
    expiry_date: date
