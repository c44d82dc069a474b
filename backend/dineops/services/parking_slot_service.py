"""Parking slot service."""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from dineops.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from dineops.core.validators import choice, first_missing, is_missing
from dineops.models.restaurant import ParkingSlot, ParkingSlotStatus, Restaurant

INVALID_STATUS = "Status must be AVAILABLE, OCCUPIED, or RESERVED"
DUPLICATE_NUMBER = "Slot number already exists for this restaurant"


class ParkingSlotService:
    def __init__(self, db: Session):
        self.db = db

    def get_slot(self, slot_id: int) -> ParkingSlot:
        slot = self.db.get(ParkingSlot, slot_id)
        if not slot:
            raise NotFoundError("Parking slot not found")
        return slot

    def list_slots(self, restaurant_id: Any) -> List[ParkingSlot]:
        if is_missing(restaurant_id):
            raise ValidationError("restaurant_id is required and must be a valid number")
        if not self.db.get(Restaurant, restaurant_id):
            raise NotFoundError("Restaurant not found")
        return (
            self.db.query(ParkingSlot)
            .filter(ParkingSlot.restaurant_id == restaurant_id)
            .order_by(ParkingSlot.id)
            .all()
        )

    def _number_taken(self, restaurant_id: int, slot_number: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(ParkingSlot.id).filter(
            ParkingSlot.restaurant_id == restaurant_id,
            ParkingSlot.slot_number == slot_number,
        )
        if exclude_id is not None:
            query = query.filter(ParkingSlot.id != exclude_id)
        return query.first() is not None

    def create_slot(self, data: Dict[str, Any]) -> ParkingSlot:
        if first_missing(data, ("restaurant_id", "slot_number")):
            raise ValidationError("restaurant_id and slot_number are required")
        status = ParkingSlotStatus.AVAILABLE
        if not is_missing(data.get("status")):
            status = choice(data["status"], ParkingSlotStatus, INVALID_STATUS)

        if not self.db.get(Restaurant, data["restaurant_id"]):
            raise NotFoundError("Restaurant not found")
        if self._number_taken(data["restaurant_id"], data["slot_number"]):
            raise ConflictError(DUPLICATE_NUMBER)

        slot = ParkingSlot(
            restaurant_id=data["restaurant_id"],
            slot_number=data["slot_number"],
            status=status,
        )
        try:
            self.db.add(slot)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(slot)
        return slot

    def update_slot(self, slot_id: int, data: Dict[str, Any]) -> ParkingSlot:
        if is_missing(data.get("restaurant_id")):
            raise ValidationError("restaurant_id is required")

        slot = self.get_slot(slot_id)
        if not self.db.get(Restaurant, data["restaurant_id"]):
            raise NotFoundError("Restaurant not found")
        if slot.restaurant_id != data["restaurant_id"]:
            raise ForbiddenError("Parking slot does not belong to this restaurant")

        changes = {key: data[key] for key in ("slot_number", "status") if not is_missing(data.get(key))}
        if not changes:
            raise ValidationError("At least one of slot_number or status must be provided")
        if "status" in changes:
            changes["status"] = choice(changes["status"], ParkingSlotStatus, INVALID_STATUS)
        if "slot_number" in changes and self._number_taken(
            slot.restaurant_id, changes["slot_number"], exclude_id=slot.id
        ):
            raise ConflictError(DUPLICATE_NUMBER)

        try:
            for key, value in changes.items():
                setattr(slot, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(slot)
        return slot

    def delete_slot(self, slot_id: int) -> None:
        slot = self.get_slot(slot_id)
        try:
            self.db.delete(slot)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
