"""Restaurant table service."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from dineops.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from dineops.core.validators import choice, first_missing, is_missing, positive_int
from dineops.models.booking import Booking
from dineops.models.restaurant import Restaurant, Table, TableStatus

logger = logging.getLogger(__name__)

INVALID_STATUS = "Status must be AVAILABLE, OCCUPIED, or RESERVED"
INVALID_CAPACITY = "Capacity must be a positive number"
DUPLICATE_NUMBER = "Table number already exists for this restaurant"


class TableService:
    """CRUD for tables. Booking-driven status changes live in BookingService."""

    def __init__(self, db: Session):
        self.db = db

    def get_table(self, table_id: int) -> Table:
        table = self.db.get(Table, table_id)
        if not table:
            raise NotFoundError("Table not found")
        return table

    def list_tables(self, restaurant_id: Optional[int] = None) -> List[Table]:
        query = self.db.query(Table)
        if restaurant_id is not None:
            query = query.filter(Table.restaurant_id == restaurant_id)
        return query.order_by(Table.id).all()

    def _number_taken(self, restaurant_id: int, table_number: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Table.id).filter(
            Table.restaurant_id == restaurant_id,
            Table.table_number == table_number,
        )
        if exclude_id is not None:
            query = query.filter(Table.id != exclude_id)
        return query.first() is not None

    def create_table(self, data: Dict[str, Any]) -> Table:
        if first_missing(data, ("restaurant_id", "table_number", "capacity", "status")):
            raise ValidationError("restaurant_id, table_number, capacity, and status are required")
        capacity = positive_int(data["capacity"], "capacity", INVALID_CAPACITY)
        status = choice(data["status"], TableStatus, INVALID_STATUS)

        if not self.db.get(Restaurant, data["restaurant_id"]):
            raise NotFoundError("Restaurant not found")
        if self._number_taken(data["restaurant_id"], data["table_number"]):
            raise ConflictError(DUPLICATE_NUMBER)

        table = Table(
            restaurant_id=data["restaurant_id"],
            table_number=data["table_number"],
            capacity=capacity,
            status=status,
        )
        try:
            self.db.add(table)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(table)
        logger.info(f"Table {table.table_number} added to restaurant {table.restaurant_id}")
        return table

    def update_table(self, table_id: int, data: Dict[str, Any]) -> Table:
        """Update number, capacity or status of a table the caller's restaurant owns."""
        if is_missing(data.get("restaurant_id")):
            raise ValidationError("restaurant_id is required")

        table = self.get_table(table_id)
        if not self.db.get(Restaurant, data["restaurant_id"]):
            raise NotFoundError("Restaurant not found")
        if table.restaurant_id != data["restaurant_id"]:
            raise ForbiddenError("Table does not belong to this restaurant")

        changes = {
            key: data[key]
            for key in ("table_number", "capacity", "status")
            if not is_missing(data.get(key))
        }
        if not changes:
            raise ValidationError("At least one of table_number, capacity, or status must be provided")

        if "table_number" in changes and self._number_taken(
            table.restaurant_id, changes["table_number"], exclude_id=table.id
        ):
            raise ConflictError(DUPLICATE_NUMBER)
        if "capacity" in changes:
            changes["capacity"] = positive_int(changes["capacity"], "capacity", INVALID_CAPACITY)
        if "status" in changes:
            changes["status"] = choice(changes["status"], TableStatus, INVALID_STATUS)

        try:
            for key, value in changes.items():
                setattr(table, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(table)
        return table

    def delete_table(self, table_id: int) -> None:
        table = self.get_table(table_id)
        if self.db.query(Booking.id).filter(Booking.table_id == table.id).first() is not None:
            raise ConflictError("Cannot delete table with existing bookings")
        try:
            self.db.delete(table)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Table {table_id} deleted")
