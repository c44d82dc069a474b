"""Menu category schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from dineops.schemas.dish import DishBase


class CategoryCreate(BaseModel):
    restaurant_id: Optional[int] = None
    name: Optional[str] = None
    imgurl: Optional[str] = None


class CategoryUpdate(BaseModel):
    restaurant_id: Optional[int] = None
    name: Optional[str] = None
    imgurl: Optional[str] = None


class CategoryResponse(BaseModel):
    id: int
    restaurant_id: int
    name: str
    imgurl: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CategoryWithDishes(CategoryResponse):
    dishes: List[DishBase] = []
