"""Booking service - table reservations with overlap protection.

Keeps two things consistent:
- No two active bookings on the same table lie within CONFLICT_WINDOW of
  each other.
- Table.status follows the booking lifecycle: RESERVED when booked,
  AVAILABLE when the booking is cancelled, completed, moved or deleted.

Each mutating method does its reads and writes on the request session and
commits once; any failure rolls the session back so the booking row and the
table status never diverge.

The overlap check is read-then-write without a lock, so two concurrent
requests for the same slot can both pass it.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from dineops.core.config import settings
from dineops.core.exceptions import ConflictError, NotFoundError, ValidationError
from dineops.core.validators import (
    choice,
    first_missing,
    future_datetime,
    is_missing,
    local_day_bounds,
    positive_int,
)
from dineops.models.booking import Booking, BookingStatus, TERMINAL_BOOKING_STATUSES
from dineops.models.restaurant import Restaurant, Table, TableStatus
from dineops.models.user import User

logger = logging.getLogger(__name__)

CONFLICT_WINDOW = timedelta(hours=2)

REQUIRED_FIELDS = (
    "restaurant_id",
    "table_id",
    "customer_name",
    "customer_email",
    "booking_date",
    "status",
)

UPDATABLE_FIELDS = (
    "restaurant_id",
    "table_id",
    "user_id",
    "customer_name",
    "customer_email",
    "booking_date",
    "status",
)

SORTABLE_FIELDS = {
    "booking_date": Booking.booking_date,
    "created_at": Booking.created_at,
    "updated_at": Booking.updated_at,
    "status": Booking.status,
    "customer_name": Booking.customer_name,
    "id": Booking.id,
}

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

INVALID_DATE = "booking_date must be a valid future date"
INVALID_STATUS = "Status must be PENDING, CONFIRMED, CANCELLED, or COMPLETED"
TABLE_NOT_OWNED = "Table not found or does not belong to restaurant"
TABLE_TAKEN = "Table is already booked for the requested time"


class BookingService:
    """Create, change and cancel table bookings."""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _query(self):
        return self.db.query(Booking).options(
            joinedload(Booking.restaurant),
            joinedload(Booking.table),
        )

    def get_booking(self, booking_id: int) -> Booking:
        booking = self._query().filter(Booking.id == booking_id).first()
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def list_bookings(
        self,
        restaurant_id: Optional[int] = None,
        table_id: Optional[int] = None,
        status: Optional[str] = None,
        booking_date: Optional[Any] = None,
        page: Any = DEFAULT_PAGE,
        limit: Any = DEFAULT_LIMIT,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Tuple[List[Booking], int, int, int]:
        """Filter, sort and page bookings.

        A booking_date filter matches the whole calendar day in the server's
        configured timezone. Returns (items, total, page, limit).
        """
        page = positive_int(page if page is not None else DEFAULT_PAGE, "page")
        limit = positive_int(limit if limit is not None else DEFAULT_LIMIT, "limit")

        sort_by = sort_by or "booking_date"
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"sort_by must be one of: {', '.join(sorted(SORTABLE_FIELDS))}"
            )
        sort_order = (sort_order or "asc").lower()
        if sort_order not in ("asc", "desc"):
            raise ValidationError("sort_order must be asc or desc")

        query = self._query()
        if restaurant_id is not None:
            query = query.filter(Booking.restaurant_id == restaurant_id)
        if table_id is not None:
            query = query.filter(Booking.table_id == table_id)
        if not is_missing(status):
            query = query.filter(Booking.status == choice(status, BookingStatus, INVALID_STATUS))
        if not is_missing(booking_date):
            bounds = local_day_bounds(booking_date, settings.timezone)
            if bounds is None:
                raise ValidationError("booking_date must be a valid date")
            start, end = bounds
            query = query.filter(Booking.booking_date >= start, Booking.booking_date <= end)

        total = query.count()

        column = SORTABLE_FIELDS[sort_by]
        ordering = column.desc() if sort_order == "desc" else column.asc()
        items = (
            query.order_by(ordering, Booking.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total, page, limit

    def _find_conflict(
        self, table_id: int, when: datetime, exclude_id: Optional[int] = None
    ) -> Optional[Booking]:
        """Return an active booking on the table within the window, if any."""
        query = self.db.query(Booking).filter(
            Booking.table_id == table_id,
            Booking.booking_date >= when - CONFLICT_WINDOW,
            Booking.booking_date <= when + CONFLICT_WINDOW,
            Booking.status.notin_(TERMINAL_BOOKING_STATUSES),
        )
        if exclude_id is not None:
            query = query.filter(Booking.id != exclude_id)
        return query.first()

    def _get_restaurant(self, restaurant_id: int) -> Restaurant:
        restaurant = self.db.get(Restaurant, restaurant_id)
        if not restaurant:
            raise NotFoundError("Restaurant not found")
        return restaurant

    def _get_owned_table(self, table_id: int, restaurant_id: int) -> Table:
        table = self.db.get(Table, table_id)
        if not table or table.restaurant_id != restaurant_id:
            raise NotFoundError(TABLE_NOT_OWNED)
        return table

    def _check_user(self, user_id: int) -> None:
        if not self.db.get(User, user_id):
            raise NotFoundError("User not found")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_booking(self, data: Dict[str, Any]) -> Booking:
        """Book a table and mark it RESERVED."""
        missing = first_missing(data, REQUIRED_FIELDS)
        if missing:
            raise ValidationError(
                f"{', '.join(REQUIRED_FIELDS)} are required"
            )

        status = choice(data["status"], BookingStatus, INVALID_STATUS)
        self._get_restaurant(data["restaurant_id"])
        table = self._get_owned_table(data["table_id"], data["restaurant_id"])
        when = future_datetime(data["booking_date"], INVALID_DATE)

        user_id = data.get("user_id")
        if user_id is not None:
            self._check_user(user_id)

        if self._find_conflict(table.id, when):
            raise ConflictError(TABLE_TAKEN)

        booking = Booking(
            restaurant_id=data["restaurant_id"],
            table_id=table.id,
            user_id=user_id,
            customer_name=data["customer_name"],
            customer_email=data["customer_email"],
            booking_date=when,
            status=status,
        )
        try:
            self.db.add(booking)
            table.status = TableStatus.RESERVED
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Booking {booking.id} created for table {table.id} at {when.isoformat()}Z; table reserved"
        )
        return self.get_booking(booking.id)

    def update_booking(self, booking_id: int, data: Dict[str, Any]) -> Booking:
        """Apply a partial update.

        When the status moves to CANCELLED or COMPLETED the booking's table is
        released. Otherwise a change of table reserves the new one and
        releases the old one. The first rule wins when both apply. Moving a
        CANCELLED or COMPLETED booking back to an active status re-runs the
        overlap check and reserves its table again.
        """
        booking = self.get_booking(booking_id)

        # user_id: null is meaningful (detach), every other null means "not sent"
        changes = {
            key: value
            for key, value in data.items()
            if key in UPDATABLE_FIELDS and (value is not None or key == "user_id")
        }
        if not changes:
            raise ValidationError("At least one field must be provided for update")

        if "restaurant_id" in changes:
            self._get_restaurant(changes["restaurant_id"])

        if "status" in changes:
            changes["status"] = choice(changes["status"], BookingStatus, INVALID_STATUS)

        if changes.get("user_id") is not None:
            self._check_user(changes["user_id"])

        restaurant_id = changes.get("restaurant_id", booking.restaurant_id)
        table_id = changes.get("table_id", booking.table_id)
        # A cancelled or completed booking put back into PENDING/CONFIRMED claims its slot again
        reactivating = (
            not booking.is_active
            and "status" in changes
            and changes["status"] not in TERMINAL_BOOKING_STATUSES
        )

        if reactivating or any(key in changes for key in ("table_id", "booking_date", "restaurant_id")):
            self._get_owned_table(table_id, restaurant_id)
            if "booking_date" in changes:
                changes["booking_date"] = future_datetime(changes["booking_date"], INVALID_DATE)
            when = changes.get("booking_date", booking.booking_date)
            if reactivating or "table_id" in changes or "booking_date" in changes:
                if self._find_conflict(table_id, when, exclude_id=booking.id):
                    raise ConflictError(TABLE_TAKEN)

        old_table_id = booking.table_id
        try:
            for key, value in changes.items():
                setattr(booking, key, value)

            if changes.get("status") in TERMINAL_BOOKING_STATUSES:
                self._set_table_status(booking.table_id, TableStatus.AVAILABLE)
                logger.info(f"Booking {booking.id} {booking.status.value}; table {booking.table_id} released")
            elif booking.table_id != old_table_id:
                self._set_table_status(booking.table_id, TableStatus.RESERVED)
                self._set_table_status(old_table_id, TableStatus.AVAILABLE)
                logger.info(f"Booking {booking.id} moved from table {old_table_id} to {booking.table_id}")
            elif reactivating:
                self._set_table_status(booking.table_id, TableStatus.RESERVED)
                logger.info(f"Booking {booking.id} reactivated; table {booking.table_id} reserved")

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.expire(booking)
        return self.get_booking(booking.id)

    def delete_booking(self, booking_id: int) -> None:
        """Delete the booking and release its table."""
        booking = self.get_booking(booking_id)
        table_id = booking.table_id
        try:
            self.db.delete(booking)
            self._set_table_status(table_id, TableStatus.AVAILABLE)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Booking {booking_id} deleted; table {table_id} released")

    def _set_table_status(self, table_id: int, status: TableStatus) -> None:
        table = self.db.get(Table, table_id)
        if table is not None:
            table.status = status
