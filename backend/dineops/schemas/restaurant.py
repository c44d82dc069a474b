"""Restaurant schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from dineops.models.restaurant import RestaurantStatus
from dineops.schemas.category import CategoryWithDishes
from dineops.schemas.table import TableResponse


class RestaurantCreate(BaseModel):
    """Restaurant registration. Presence is checked by the service."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    cuisine: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ranking: Optional[float] = None
    capacity: Optional[int] = None
    logo: Optional[str] = None
    bg_image: Optional[str] = None


class RestaurantUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    cuisine: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ranking: Optional[float] = None
    capacity: Optional[int] = None
    logo: Optional[str] = None
    bg_image: Optional[str] = None


class RestaurantStatusUpdate(BaseModel):
    status: Optional[str] = None


class RestaurantResponse(BaseModel):
    """Public restaurant projection, never includes the password hash."""
    id: int
    name: str
    email: str
    phone: str
    address: str
    city: str
    cuisine: str
    description: str
    logo: str
    bg_image: str
    latitude: float
    longitude: float
    ranking: float
    capacity: Optional[int] = None
    status: RestaurantStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RestaurantSummary(BaseModel):
    name: str
    city: str

    model_config = {"from_attributes": True}


class RestaurantBrief(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class RestaurantFullResponse(RestaurantResponse):
    """Restaurant with its tables and categories (each with dishes)."""
    tables: List[TableResponse] = []
    categories: List[CategoryWithDishes] = []


class RestaurantCreated(BaseModel):
    restaurant: RestaurantResponse
