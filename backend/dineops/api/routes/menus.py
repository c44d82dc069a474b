"""Dish routes, mounted at /menus."""

from typing import Optional

from fastapi import APIRouter, status

from dineops.core.responses import envelope
from dineops.db.session import DbSession
from dineops.schemas.dish import DishCreate, DishResponse, DishUpdate
from dineops.services.dish_service import DishService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_dish(request: DishCreate, db: DbSession):
    dish = DishService(db).create_dish(request.model_dump(exclude_unset=True))
    return envelope("Dish created successfully", DishResponse.model_validate(dish))


@router.get("")
def list_dishes(db: DbSession, restaurant_id: Optional[int] = None):
    """Dishes across all categories of a restaurant."""
    dishes = DishService(db).list_dishes(restaurant_id)
    return envelope("Dishes fetched successfully", [DishResponse.model_validate(d) for d in dishes])


@router.get("/{dish_id}", response_model=DishResponse)
def get_dish(dish_id: int, db: DbSession):
    return DishService(db).get_dish(dish_id)


@router.put("/{dish_id}")
def update_dish(dish_id: int, request: DishUpdate, db: DbSession):
    dish = DishService(db).update_dish(dish_id, request.model_dump(exclude_unset=True))
    return envelope("Dish updated successfully", DishResponse.model_validate(dish))


@router.delete("/{dish_id}")
def delete_dish(dish_id: int, db: DbSession):
    DishService(db).delete_dish(dish_id)
    return envelope("Dish deleted successfully", None)
