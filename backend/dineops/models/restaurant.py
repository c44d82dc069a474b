"""Restaurant catalog models - restaurants, tables, categories, dishes, parking."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, Enum as SQLEnum, Float, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from dineops.db.base import Base, TimestampMixin
from dineops.models.validators import positive, rating_score


class RestaurantStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DE_ACTIVE = "DE_ACTIVE"


class TableStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"


class ParkingSlotStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"


class Restaurant(Base, TimestampMixin):
    """A tenant. Owns tables, categories, parking slots, bookings and orders."""

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    cuisine: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    logo: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    bg_image: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    ranking: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[RestaurantStatus] = mapped_column(
        SQLEnum(RestaurantStatus), default=RestaurantStatus.DE_ACTIVE, nullable=False
    )

    tables: Mapped[List["Table"]] = relationship(back_populates="restaurant", order_by="Table.id")
    categories: Mapped[List["Category"]] = relationship(back_populates="restaurant", order_by="Category.id")
    parking_slots: Mapped[List["ParkingSlot"]] = relationship(back_populates="restaurant", order_by="ParkingSlot.id")
    bookings = relationship("Booking", back_populates="restaurant")
    orders = relationship("Order", back_populates="restaurant")

    @validates("ranking")
    def _validate_ranking(self, key, value):
        return rating_score(key, value)


class Table(Base, TimestampMixin):
    """Restaurant table. Status follows the booking lifecycle."""

    __tablename__ = "tables"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "table_number", name="uq_tables_restaurant_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), index=True, nullable=False)
    table_number: Mapped[str] = mapped_column(String(50), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[TableStatus] = mapped_column(
        SQLEnum(TableStatus), default=TableStatus.AVAILABLE, nullable=False
    )

    restaurant: Mapped[Restaurant] = relationship(back_populates="tables")
    bookings = relationship("Booking", back_populates="table")

    @validates("capacity")
    def _validate_capacity(self, key, value):
        return positive(key, value)


class Category(Base, TimestampMixin):
    """Menu category. Dish names are unique across a restaurant's categories."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "name", name="uq_categories_restaurant_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    imgurl: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    restaurant: Mapped[Restaurant] = relationship(back_populates="categories")
    dishes: Mapped[List["Dish"]] = relationship(back_populates="category", order_by="Dish.id")


class Dish(Base, TimestampMixin):
    """Menu item."""

    __tablename__ = "dishes"

    id: Mapped[int] = mapped_column(primary_key=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    imgurl: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    category: Mapped[Category] = relationship(back_populates="dishes")

    @validates("price")
    def _validate_price(self, key, value):
        return positive(key, value)

    @property
    def restaurant_id(self) -> int:
        """Owning restaurant, derived through the category."""
        return self.category.restaurant_id


class ParkingSlot(Base, TimestampMixin):
    """Parking slot belonging to a restaurant."""

    __tablename__ = "parking_slots"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "slot_number", name="uq_parking_slots_restaurant_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), index=True, nullable=False)
    slot_number: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[ParkingSlotStatus] = mapped_column(
        SQLEnum(ParkingSlotStatus), default=ParkingSlotStatus.AVAILABLE, nullable=False
    )

    restaurant: Mapped[Restaurant] = relationship(back_populates="parking_slots")
