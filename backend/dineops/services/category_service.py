"""Menu category service."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from dineops.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from dineops.core.validators import first_missing, is_missing, optional_url
from dineops.models.restaurant import Category, Dish, Restaurant

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Category name already exists for this restaurant"


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def get_category(self, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def list_categories(self, restaurant_id: Any) -> List[Category]:
        if is_missing(restaurant_id):
            raise ValidationError("restaurant_id is required and must be a valid number")
        if not self.db.get(Restaurant, restaurant_id):
            raise NotFoundError("Restaurant not found")
        return (
            self.db.query(Category)
            .filter(Category.restaurant_id == restaurant_id)
            .order_by(Category.id)
            .all()
        )

    def _name_taken(self, restaurant_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Category.id).filter(
            Category.restaurant_id == restaurant_id,
            Category.name == name,
        )
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    def create_category(self, data: Dict[str, Any]) -> Category:
        if first_missing(data, ("restaurant_id", "name")):
            raise ValidationError("restaurant_id and name are required")
        imgurl = optional_url(data.get("imgurl"))

        if not self.db.get(Restaurant, data["restaurant_id"]):
            raise NotFoundError("Restaurant not found")
        if self._name_taken(data["restaurant_id"], data["name"]):
            raise ConflictError(DUPLICATE_NAME)

        category = Category(
            restaurant_id=data["restaurant_id"],
            name=data["name"],
            imgurl=imgurl or "",
        )
        try:
            self.db.add(category)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(category)
        return category

    def update_category(self, category_id: int, data: Dict[str, Any]) -> Category:
        """Rename a category; imgurl is kept unless a new one is sent."""
        if is_missing(data.get("restaurant_id")):
            raise ValidationError("restaurant_id is required")
        if is_missing(data.get("name")):
            raise ValidationError("Category name is required")
        imgurl = optional_url(data.get("imgurl"))

        category = self.get_category(category_id)
        if not self.db.get(Restaurant, data["restaurant_id"]):
            raise NotFoundError("Restaurant not found")
        if category.restaurant_id != data["restaurant_id"]:
            raise ForbiddenError("Category does not belong to this restaurant")
        if self._name_taken(category.restaurant_id, data["name"], exclude_id=category.id):
            raise ConflictError(DUPLICATE_NAME)

        try:
            category.name = data["name"]
            if imgurl:
                category.imgurl = imgurl
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(category)
        return category

    def delete_category(self, category_id: int) -> None:
        category = self.get_category(category_id)
        if self.db.query(Dish.id).filter(Dish.category_id == category.id).first() is not None:
            raise ConflictError("Cannot delete category with existing dishes")
        try:
            self.db.delete(category)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Category {category_id} deleted")
