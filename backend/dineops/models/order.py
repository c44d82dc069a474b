"""Customer order models."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List

from sqlalchemy import Enum as SQLEnum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from dineops.db.base import Base, TimestampMixin
from dineops.models.validators import positive


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class Order(Base, TimestampMixin):
    """A customer's order at one restaurant."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), index=True, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    order_date: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    order_time: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    contact_info: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    order_type: Mapped[str] = mapped_column(String(50), nullable=False)  # dine_in, takeaway, delivery
    table_no: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    trnx_id: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    trnx_receipt: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(OrderStatus), default=OrderStatus.PENDING, nullable=False
    )

    user = relationship("User", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")
    order_items: Mapped[List["OrderItem"]] = relationship(
        back_populates="order", order_by="OrderItem.id"
    )

    @validates("total_amount")
    def _validate_total(self, key, value):
        return positive(key, value)


class OrderItem(Base):
    """Line of an order. Created together with the order and never changed."""

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"), index=True, nullable=False)
    dish_id: Mapped[int] = mapped_column(ForeignKey("dishes.id"), index=True, nullable=False)
    unit_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # Caller supplied; not recomputed from unit_rate * quantity
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    order: Mapped[Order] = relationship(back_populates="order_items")
    dish = relationship("Dish")

    @validates("unit_rate", "quantity", "price")
    def _validate_amounts(self, key, value):
        return positive(key, value)
