"""Parking slot routes."""

from typing import Optional

from fastapi import APIRouter, status

from dineops.core.responses import envelope
from dineops.db.session import DbSession
from dineops.schemas.parking_slot import ParkingSlotCreate, ParkingSlotResponse, ParkingSlotUpdate
from dineops.services.parking_slot_service import ParkingSlotService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_parking_slot(request: ParkingSlotCreate, db: DbSession):
    slot = ParkingSlotService(db).create_slot(request.model_dump(exclude_unset=True))
    return envelope("Parking slot created successfully", ParkingSlotResponse.model_validate(slot))


@router.get("")
def list_parking_slots(db: DbSession, restaurant_id: Optional[int] = None):
    slots = ParkingSlotService(db).list_slots(restaurant_id)
    return envelope(
        "Parking slots fetched successfully",
        [ParkingSlotResponse.model_validate(s) for s in slots],
    )


@router.get("/{slot_id}", response_model=ParkingSlotResponse)
def get_parking_slot(slot_id: int, db: DbSession):
    return ParkingSlotService(db).get_slot(slot_id)


@router.put("/{slot_id}")
def update_parking_slot(slot_id: int, request: ParkingSlotUpdate, db: DbSession):
    slot = ParkingSlotService(db).update_slot(slot_id, request.model_dump(exclude_unset=True))
    return envelope("Parking slot updated successfully", ParkingSlotResponse.model_validate(slot))


@router.delete("/{slot_id}")
def delete_parking_slot(slot_id: int, db: DbSession):
    ParkingSlotService(db).delete_slot(slot_id)
    return envelope("Parking slot deleted successfully", None)
