"""Table schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from dineops.models.restaurant import TableStatus


class TableCreate(BaseModel):
    restaurant_id: Optional[int] = None
    table_number: Optional[str] = None
    capacity: Optional[int] = None
    status: Optional[str] = None


class TableUpdate(BaseModel):
    """Administrative update. restaurant_id identifies the caller's restaurant."""
    restaurant_id: Optional[int] = None
    table_number: Optional[str] = None
    capacity: Optional[int] = None
    status: Optional[str] = None


class TableResponse(BaseModel):
    id: int
    restaurant_id: int
    table_number: str
    capacity: int
    status: TableStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TableSummary(BaseModel):
    table_number: str
    capacity: int

    model_config = {"from_attributes": True}
