"""Order schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from dineops.models.order import OrderStatus
from dineops.schemas.dish import DishSummary


class OrderCreate(BaseModel):
    """New order.

    order_items is left loosely typed; each entry is checked field by field by
    the service so the caller gets one message per bad item.
    """
    user_id: Optional[int] = None
    restaurant_id: Optional[int] = None
    order_items: Optional[List[Any]] = None
    total_amount: Optional[Any] = None
    order_type: Optional[str] = None
    order_date: Optional[str] = None
    order_time: Optional[str] = None
    contact_info: Optional[str] = None
    table_no: Optional[str] = None
    trnx_id: Optional[str] = None
    trnx_receipt: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None


class _UserRef(BaseModel):
    email: str

    model_config = {"from_attributes": True}


class _RestaurantRef(BaseModel):
    name: str

    model_config = {"from_attributes": True}


class OrderItemResponse(BaseModel):
    id: int
    dish_id: int
    unit_rate: float
    quantity: int
    price: float
    dish: DishSummary

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: int
    user_id: int
    restaurant_id: int
    total_amount: float
    order_date: str
    order_time: str
    contact_info: str
    order_type: str
    table_no: str
    trnx_id: str
    trnx_receipt: str
    status: OrderStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: _UserRef
    restaurant: _RestaurantRef
    order_items: List[OrderItemResponse] = []

    model_config = {"from_attributes": True}
