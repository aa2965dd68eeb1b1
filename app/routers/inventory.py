from fastapi import APIRouter, Body, Depends, Query

from app.dependencies import get_inventory
from boat_log.core.errors import NotFoundError
from boat_log.core.inventory import InventoryRepository
from boat_log.core.validation import (
    parse_id,
    parse_threshold,
    validate_inventory_create,
    validate_inventory_update,
)

router = APIRouter(prefix="/inventory", tags=["inventory"])

_NOT_FOUND = "Inventory item not found"


def _item_id(raw: str) -> int:
    return parse_id(raw, "inventory item")


@router.get("")
def inventory_list(
    category: str = "",
    low_stock: str = Query("", alias="lowStock"),
    inventory: InventoryRepository = Depends(get_inventory),
):
    if category:
        return inventory.get_by_category(category)
    if low_stock:
        return inventory.get_low_stock(parse_threshold(low_stock))
    return inventory.get_all()


@router.post("", status_code=201)
def inventory_create(body: dict = Body(...), inventory: InventoryRepository = Depends(get_inventory)):
    return inventory.add(validate_inventory_create(body))


# Registered before /{item_id} so "to-buy" is never read as an ID.
@router.get("/to-buy")
def inventory_to_buy(inventory: InventoryRepository = Depends(get_inventory)):
    return inventory.get_to_buy()


@router.get("/{item_id}")
def inventory_get(item_id: str, inventory: InventoryRepository = Depends(get_inventory)):
    item = inventory.get(_item_id(item_id))
    if item is None:
        raise NotFoundError(_NOT_FOUND)
    return item


@router.put("/{item_id}")
def inventory_update(
    item_id: str,
    body: dict = Body(...),
    inventory: InventoryRepository = Depends(get_inventory),
):
    item_id = _item_id(item_id)
    item = inventory.update(item_id, validate_inventory_update(body))
    if item is None:
        raise NotFoundError(_NOT_FOUND)
    return item


@router.patch("/{item_id}/toggle-to-buy")
def inventory_toggle_to_buy(item_id: str, inventory: InventoryRepository = Depends(get_inventory)):
    item = inventory.toggle_to_buy(_item_id(item_id))
    if item is None:
        raise NotFoundError(_NOT_FOUND)
    return item


@router.delete("/{item_id}")
def inventory_delete(item_id: str, inventory: InventoryRepository = Depends(get_inventory)):
    inventory.delete(_item_id(item_id))
    return {"message": "Inventory item deleted successfully"}
