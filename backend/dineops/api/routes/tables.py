"""Table management routes."""

from typing import Optional

from fastapi import APIRouter, status

from dineops.core.responses import envelope
from dineops.db.session import DbSession
from dineops.schemas.table import TableCreate, TableResponse, TableUpdate
from dineops.services.table_service import TableService

router = APIRouter()


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
def create_table(request: TableCreate, db: DbSession):
    return TableService(db).create_table(request.model_dump(exclude_unset=True))


@router.get("")
def list_tables(db: DbSession, restaurant_id: Optional[int] = None):
    tables = TableService(db).list_tables(restaurant_id)
    return envelope("Tables fetched successfully", [TableResponse.model_validate(t) for t in tables])


@router.get("/{table_id}", response_model=TableResponse)
def get_table(table_id: int, db: DbSession):
    return TableService(db).get_table(table_id)


@router.put("/{table_id}")
def update_table(table_id: int, request: TableUpdate, db: DbSession):
    """Administrative update; overrides booking-driven status."""
    table = TableService(db).update_table(table_id, request.model_dump(exclude_unset=True))
    return envelope("Table updated successfully", TableResponse.model_validate(table))


@router.delete("/{table_id}")
def delete_table(table_id: int, db: DbSession):
    TableService(db).delete_table(table_id)
    return envelope("Table deleted successfully", None)
