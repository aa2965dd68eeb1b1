"""Onboard inventory management: CRUD plus the low-stock and to-buy views.

The to_buy flag is set by hand and is independent of quantity. Toggling it
is a single in-place UPDATE so two concurrent toggles both take effect.
"""

import logging
from typing import Optional

from boat_log.core.validation import DEFAULT_LOW_STOCK_THRESHOLD
from boat_log.db.database import Database
from boat_log.db.models import InventoryItem

logger = logging.getLogger(__name__)

_COLUMNS = ("name", "quantity", "unit", "category", "expiry_date", "notes", "to_buy")


def _to_item(row) -> InventoryItem:
    data = dict(row)
    data["to_buy"] = bool(data["to_buy"])
    return InventoryItem(**data)


class InventoryRepository:
    """Access to the inventory table through an injected Database handle."""

    def __init__(self, db: Database):
        self.db = db

    def _select(self, where: str = "", params=(), order: str = "name, id") -> list[InventoryItem]:
        conn = self.db.connect()
        try:
            rows = conn.execute(
                f"SELECT * FROM inventory {where} ORDER BY {order}", params
            ).fetchall()
            return [_to_item(row) for row in rows]
        finally:
            conn.close()

    def get_all(self) -> list[InventoryItem]:
        """Return all items sorted by name."""
        return self._select()

    def get_by_category(self, category: str) -> list[InventoryItem]:
        return self._select("WHERE category = ?", (category,))

    def get_low_stock(self, threshold: float = DEFAULT_LOW_STOCK_THRESHOLD) -> list[InventoryItem]:
        """Return items with quantity at or below threshold, scarcest first."""
        return self._select("WHERE quantity <= ?", (threshold,), order="quantity, name")

    def get_to_buy(self) -> list[InventoryItem]:
        return self._select("WHERE to_buy = 1")

    def get(self, item_id: int) -> Optional[InventoryItem]:
        """Return a single item by ID, or None if not found."""
        conn = self.db.connect()
        try:
            row = conn.execute("SELECT * FROM inventory WHERE id = ?", (item_id,)).fetchone()
            return _to_item(row) if row else None
        finally:
            conn.close()

    def add(self, fields: dict) -> InventoryItem:
        """Insert a validated item and return it with its ID and timestamps."""
        params = {key: fields.get(key) for key in _COLUMNS}
        params["to_buy"] = int(bool(params["to_buy"]))
        conn = self.db.connect()
        try:
            cursor = conn.execute(
                """INSERT INTO inventory (name, quantity, unit, category,
                   expiry_date, notes, to_buy)
                   VALUES (:name, :quantity, :unit, :category,
                   :expiry_date, :notes, :to_buy)""",
                params,
            )
            row = conn.execute("SELECT * FROM inventory WHERE id = ?", (cursor.lastrowid,)).fetchone()
            conn.commit()
        finally:
            conn.close()
        item = _to_item(row)
        logger.info("Added inventory item %s (%s %s %s)", item.id, item.quantity, item.unit, item.name)
        return item

    def update(self, item_id: int, fields: dict) -> Optional[InventoryItem]:
        """Apply a partial patch and bump updated_at. Returns None if the ID is absent."""
        fields = {key: value for key, value in fields.items() if key in _COLUMNS}
        if "to_buy" in fields:
            fields["to_buy"] = int(bool(fields["to_buy"]))
        assignments = "".join(f"{key} = :{key}, " for key in fields)
        conn = self.db.connect()
        try:
            cursor = conn.execute(
                f"UPDATE inventory SET {assignments}updated_at = CURRENT_TIMESTAMP WHERE id = :id",
                {**fields, "id": item_id},
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute("SELECT * FROM inventory WHERE id = ?", (item_id,)).fetchone()
            conn.commit()
            return _to_item(row)
        finally:
            conn.close()

    def toggle_to_buy(self, item_id: int) -> Optional[InventoryItem]:
        """Flip the to_buy flag in place. Returns the updated item, or None if absent."""
        conn = self.db.connect()
        try:
            cursor = conn.execute(
                """UPDATE inventory
                   SET to_buy = CASE to_buy WHEN 0 THEN 1 ELSE 0 END,
                       updated_at = CURRENT_TIMESTAMP
                   WHERE id = ?""",
                (item_id,),
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute("SELECT * FROM inventory WHERE id = ?", (item_id,)).fetchone()
            conn.commit()
        finally:
            conn.close()
        item = _to_item(row)
        logger.info("Inventory item %s to_buy -> %s", item_id, item.to_buy)
        return item

    def delete(self, item_id: int) -> None:
        """Delete an item by ID. Deleting a missing ID is not an error."""
        conn = self.db.connect()
        try:
            cursor = conn.execute("DELETE FROM inventory WHERE id = ?", (item_id,))
            conn.commit()
        finally:
            conn.close()
        if cursor.rowcount:
            logger.info("Deleted inventory item %s", item_id)
