"""Booking schemas."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, field_serializer

from dineops.models.booking import BookingStatus
from dineops.schemas.restaurant import RestaurantSummary
from dineops.schemas.table import TableSummary


class BookingCreate(BaseModel):
    """New booking. booking_date is an ISO 8601 timestamp, parsed by the service."""
    restaurant_id: Optional[int] = None
    table_id: Optional[int] = None
    user_id: Optional[int] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    booking_date: Optional[str] = None
    status: Optional[str] = None


class BookingUpdate(BaseModel):
    """Partial update. Sending user_id: null detaches the user."""
    restaurant_id: Optional[int] = None
    table_id: Optional[int] = None
    user_id: Optional[int] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    booking_date: Optional[str] = None
    status: Optional[str] = None


class BookingResponse(BaseModel):
    id: int
    restaurant_id: int
    table_id: int
    user_id: Optional[int] = None
    customer_name: str
    customer_email: str
    booking_date: datetime
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    restaurant: RestaurantSummary
    table: TableSummary

    model_config = {"from_attributes": True}

    @field_serializer("booking_date")
    def _serialize_booking_date(self, value: datetime) -> str:
        # Stored as naive UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat().replace("+00:00", "Z")


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class BookingPage(BaseModel):
    data: List[BookingResponse]
    pagination: PaginationMeta
