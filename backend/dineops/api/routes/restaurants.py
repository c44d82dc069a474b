"""Restaurant routes."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, status

from dineops.core.auth import RequireAdmin
from dineops.db.session import DbSession
from dineops.schemas.category import CategoryResponse, CategoryWithDishes
from dineops.schemas.parking_slot import ParkingSlotResponse
from dineops.schemas.restaurant import (
    RestaurantCreate,
    RestaurantCreated,
    RestaurantFullResponse,
    RestaurantResponse,
    RestaurantStatusUpdate,
    RestaurantUpdate,
)
from dineops.schemas.table import TableResponse
from dineops.services.image_upload_service import ImageUploader, get_image_uploader
from dineops.services.restaurant_service import RestaurantService

router = APIRouter()

Uploader = Annotated[ImageUploader, Depends(get_image_uploader)]


@router.post("", response_model=RestaurantCreated, status_code=status.HTTP_201_CREATED)
def create_restaurant(request: RestaurantCreate, db: DbSession):
    """Register a restaurant. It starts deactivated."""
    restaurant = RestaurantService(db).create_restaurant(request.model_dump(exclude_unset=True))
    return {"restaurant": RestaurantResponse.model_validate(restaurant)}


@router.get("", response_model=List[RestaurantResponse])
def list_restaurants(db: DbSession, status: Optional[str] = None):
    return RestaurantService(db).list_restaurants(status)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
def get_restaurant(restaurant_id: int, db: DbSession):
    return RestaurantService(db).get_restaurant(restaurant_id)


@router.get("/{restaurant_id}/full", response_model=RestaurantFullResponse)
def get_restaurant_full(restaurant_id: int, db: DbSession):
    """Restaurant with its tables and categories (each with dishes)."""
    return RestaurantService(db).get_full(restaurant_id)


@router.get("/{restaurant_id}/categories", response_model=List[CategoryResponse])
def list_restaurant_categories(restaurant_id: int, db: DbSession):
    return RestaurantService(db).list_categories(restaurant_id)


@router.get("/{restaurant_id}/menu", response_model=List[CategoryWithDishes])
def get_restaurant_menu(restaurant_id: int, db: DbSession):
    """Categories with their dishes."""
    return RestaurantService(db).list_menu(restaurant_id)


@router.get("/{restaurant_id}/tables", response_model=List[TableResponse])
def list_restaurant_tables(restaurant_id: int, db: DbSession):
    return RestaurantService(db).list_tables(restaurant_id)


@router.get("/{restaurant_id}/parking_slots", response_model=List[ParkingSlotResponse])
def list_restaurant_parking_slots(restaurant_id: int, db: DbSession):
    return RestaurantService(db).list_parking_slots(restaurant_id)


@router.put("/{restaurant_id}", response_model=RestaurantResponse)
def update_restaurant(restaurant_id: int, request: RestaurantUpdate, db: DbSession, uploader: Uploader):
    """Partial update. logo and bg_image may be URLs or images to upload."""
    return RestaurantService(db, uploader).update_restaurant(
        restaurant_id, request.model_dump(exclude_unset=True)
    )


@router.patch("/{restaurant_id}/status", response_model=RestaurantResponse)
def update_restaurant_status(
    restaurant_id: int, request: RestaurantStatusUpdate, db: DbSession, admin: RequireAdmin
):
    """Activate or deactivate a restaurant (admin only)."""
    return RestaurantService(db).update_status(restaurant_id, request.status)


@router.delete("/{restaurant_id}")
def delete_restaurant(restaurant_id: int, db: DbSession, admin: RequireAdmin):
    """Delete a restaurant with no dependent rows (admin only)."""
    RestaurantService(db).delete_restaurant(restaurant_id)
    return {"message": "Restaurant deleted successfully"}
