"""SQLAlchemy models."""

from dineops.models.user import Admin, AdminRole, User
from dineops.models.restaurant import (
    Category,
    Dish,
    ParkingSlot,
    ParkingSlotStatus,
    Restaurant,
    RestaurantStatus,
    Table,
    TableStatus,
)
from dineops.models.booking import Booking, BookingStatus, TERMINAL_BOOKING_STATUSES
from dineops.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "Admin",
    "AdminRole",
    "Booking",
    "BookingStatus",
    "Category",
    "Dish",
    "Order",
    "OrderItem",
    "OrderStatus",
    "ParkingSlot",
    "ParkingSlotStatus",
    "Restaurant",
    "RestaurantStatus",
    "TERMINAL_BOOKING_STATUSES",
    "Table",
    "TableStatus",
    "User",
]
