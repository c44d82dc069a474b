"""Dish (menu item) schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DishCreate(BaseModel):
    category_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    available: Optional[bool] = None
    imgurl: Optional[str] = None


class DishUpdate(BaseModel):
    category_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    available: Optional[bool] = None
    imgurl: Optional[str] = None


class DishBase(BaseModel):
    id: int
    category_id: int
    name: str
    description: Optional[str] = None
    price: float
    available: bool
    imgurl: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class _CategoryRef(BaseModel):
    name: str

    model_config = {"from_attributes": True}


class DishResponse(DishBase):
    category: _CategoryRef


class DishSummary(BaseModel):
    name: str
    imgurl: str

    model_config = {"from_attributes": True}
