"""Menu category routes."""

from typing import Optional

from fastapi import APIRouter, status

from dineops.core.responses import envelope
from dineops.db.session import DbSession
from dineops.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from dineops.services.category_service import CategoryService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(request: CategoryCreate, db: DbSession):
    category = CategoryService(db).create_category(request.model_dump(exclude_unset=True))
    return envelope("Category created successfully", CategoryResponse.model_validate(category))


@router.get("")
def list_categories(db: DbSession, restaurant_id: Optional[int] = None):
    categories = CategoryService(db).list_categories(restaurant_id)
    return envelope(
        "Categories fetched successfully",
        [CategoryResponse.model_validate(c) for c in categories],
    )


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: DbSession):
    return CategoryService(db).get_category(category_id)


@router.put("/{category_id}")
def update_category(category_id: int, request: CategoryUpdate, db: DbSession):
    category = CategoryService(db).update_category(category_id, request.model_dump(exclude_unset=True))
    return envelope("Category updated successfully", CategoryResponse.model_validate(category))


@router.delete("/{category_id}")
def delete_category(category_id: int, db: DbSession):
    CategoryService(db).delete_category(category_id)
    return envelope("Category deleted successfully", None)
