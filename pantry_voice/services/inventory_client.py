"""HTTP adapter for the inventory API: read items, submit completed drafts."""

import logging
from datetime import date
from typing import Any

import httpx
from pydantic import ValidationError

from pantry_voice.core.config import settings
from pantry_voice.core.errors import InventoryUnavailableError
from pantry_voice.core.logging import span
from pantry_voice.domain.food import FoodItem, FoodItemCreate, FoodItemDraft
from pantry_voice.services.command_builder import complete_draft


logger = logging.getLogger(__name__)

FOOD_ITEMS_PATH = "/api/food-items"


def _headers() -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if settings.inventory_api_key:
        headers["X-Api-Key"] = settings.inventory_api_key
    return headers


def _url(path: str) -> str:
    return f"{settings.inventory_api_url.rstrip('/')}{path}"


async def list_food_items() -> list[FoodItem]:
    """Fetch the current inventory, in the order the API returns it.

    Raises:
        InventoryUnavailableError: On transport errors, non-2xx responses or malformed payloads
    """
    with span("inventory_client.list_food_items"):
        try:
            async with httpx.AsyncClient(timeout=settings.inventory_api_timeout_seconds) as client:
                response = await client.get(_url(FOOD_ITEMS_PATH), headers=_headers())
        except httpx.HTTPError as e:
            msg = f"Inventory request failed: {e}"
            raise InventoryUnavailableError(msg) from e

        if not response.is_success:
            msg = f"Inventory returned status {response.status_code}"
            raise InventoryUnavailableError(msg)

        try:
            records = response.json()
            items = [FoodItem.model_validate(record) for record in records]
        except (ValueError, TypeError, ValidationError) as e:
            msg = f"Inventory returned a malformed payload: {e}"
            raise InventoryUnavailableError(msg) from e

        logger.debug(f"Retrieved {len(items)} food items")
        return items


async def create_food_item(item: FoodItemCreate) -> dict[str, Any]:
    """Create one food item.

    Returns:
        The created record as returned by the API

    Raises:
        InventoryUnavailableError: On transport errors, non-2xx responses or malformed payloads
    """
    with span("inventory_client.create_food_item"):
        payload = item.model_dump(mode="json", by_alias=True)
        try:
            async with httpx.AsyncClient(timeout=settings.inventory_api_timeout_seconds) as client:
                response = await client.post(_url(FOOD_ITEMS_PATH), json=payload, headers=_headers())
        except httpx.HTTPError as e:
            msg = f"Inventory request failed: {e}"
            raise InventoryUnavailableError(msg) from e

        if not response.is_success:
            msg = f"Inventory rejected item with status {response.status_code}: {response.text}"
            raise InventoryUnavailableError(msg)

        try:
            created = response.json()
        except ValueError as e:
            msg = f"Inventory returned a malformed payload: {e}"
            raise InventoryUnavailableError(msg) from e

        logger.info(f"Created food item: {item.name}")
        return created


async def submit_draft(draft: FoodItemDraft, *, today: date | None = None) -> dict[str, Any]:
    """Complete a draft with defaults and create it.

    Raises:
        ValueError: If the draft has no name
        InventoryUnavailableError: If the inventory rejects or cannot receive it
    """
    item = complete_draft(draft, settings, today=today or date.today())
    return await create_food_item(item)
