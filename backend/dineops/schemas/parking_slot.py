"""Parking slot schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from dineops.models.restaurant import ParkingSlotStatus


class ParkingSlotCreate(BaseModel):
    restaurant_id: Optional[int] = None
    slot_number: Optional[str] = None
    status: Optional[str] = None


class ParkingSlotUpdate(BaseModel):
    restaurant_id: Optional[int] = None
    slot_number: Optional[str] = None
    status: Optional[str] = None


class ParkingSlotResponse(BaseModel):
    id: int
    restaurant_id: int
    slot_number: str
    status: ParkingSlotStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
