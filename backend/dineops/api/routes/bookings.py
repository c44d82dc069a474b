"""Booking routes."""

from typing import Optional

from fastapi import APIRouter, Query, status

from dineops.core.responses import paginated_response
from dineops.db.session import DbSession
from dineops.schemas.booking import BookingCreate, BookingPage, BookingResponse, BookingUpdate
from dineops.services.booking_service import BookingService

router = APIRouter()


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(request: BookingCreate, db: DbSession):
    """Book a table. The table is marked RESERVED."""
    return BookingService(db).create_booking(request.model_dump(exclude_unset=True))


@router.get("", response_model=BookingPage)
def list_bookings(
    db: DbSession,
    restaurant_id: Optional[int] = None,
    table_id: Optional[int] = None,
    status: Optional[str] = None,
    booking_date: Optional[str] = Query(None, description="Calendar day, e.g. 2030-01-01"),
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
):
    """List bookings with filters, sorting and pagination."""
    items, total, page, limit = BookingService(db).list_bookings(
        restaurant_id=restaurant_id,
        table_id=table_id,
        status=status,
        booking_date=booking_date,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return paginated_response(
        [BookingResponse.model_validate(b) for b in items], total, page, limit
    )


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: int, db: DbSession):
    return BookingService(db).get_booking(booking_id)


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(booking_id: int, request: BookingUpdate, db: DbSession):
    """Partially update a booking and keep table status in step."""
    return BookingService(db).update_booking(booking_id, request.model_dump(exclude_unset=True))


@router.delete("/{booking_id}")
def delete_booking(booking_id: int, db: DbSession):
    """Delete a booking and release its table."""
    BookingService(db).delete_booking(booking_id)
    return {"message": "Booking deleted successfully"}
