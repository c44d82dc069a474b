"""Dish service.

Dishes hang off a category, so the owning restaurant is always the
category's restaurant. Dish names are unique across that restaurant, not
just within one category.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from dineops.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from dineops.core.validators import first_missing, is_missing, optional_url, positive_number
from dineops.models.order import OrderItem
from dineops.models.restaurant import Category, Dish, Restaurant

logger = logging.getLogger(__name__)

INVALID_PRICE = "Price must be a positive number"
DUPLICATE_NAME = "Dish name already exists for this restaurant"
EDITABLE_FIELDS = ("category_id", "name", "description", "price", "available", "imgurl")


class DishService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Dish).options(joinedload(Dish.category))

    def get_dish(self, dish_id: int) -> Dish:
        dish = self._query().filter(Dish.id == dish_id).first()
        if not dish:
            raise NotFoundError("Dish not found")
        return dish

    def list_dishes(self, restaurant_id: Any) -> List[Dish]:
        if is_missing(restaurant_id):
            raise ValidationError("restaurant_id is required and must be a valid number")
        if not self.db.get(Restaurant, restaurant_id):
            raise NotFoundError("Restaurant not found")
        return (
            self._query()
            .join(Category, Dish.category_id == Category.id)
            .filter(Category.restaurant_id == restaurant_id)
            .order_by(Dish.id)
            .all()
        )

    def _get_category(self, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def _name_taken(self, restaurant_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
        query = (
            self.db.query(Dish.id)
            .join(Category, Dish.category_id == Category.id)
            .filter(Category.restaurant_id == restaurant_id, Dish.name == name)
        )
        if exclude_id is not None:
            query = query.filter(Dish.id != exclude_id)
        return query.first() is not None

    def create_dish(self, data: Dict[str, Any]) -> Dish:
        if first_missing(data, ("category_id", "name", "price")):
            raise ValidationError("category_id, name, and price are required")
        price = positive_number(data["price"], "price", INVALID_PRICE)
        imgurl = optional_url(data.get("imgurl"))

        category = self._get_category(data["category_id"])
        if self._name_taken(category.restaurant_id, data["name"]):
            raise ConflictError(DUPLICATE_NAME)

        available = data.get("available")
        dish = Dish(
            category_id=category.id,
            name=data["name"],
            description=data.get("description"),
            price=price,
            available=True if available is None else bool(available),
            imgurl=imgurl or "",
        )
        try:
            self.db.add(dish)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Dish {dish.id} '{dish.name}' added to category {category.id}")
        return self.get_dish(dish.id)

    def update_dish(self, dish_id: int, data: Dict[str, Any]) -> Dish:
        """Partial update. A new category must belong to the dish's restaurant."""
        changes = {
            key: value
            for key, value in data.items()
            if key in EDITABLE_FIELDS and value is not None
        }
        if not changes:
            raise ValidationError("At least one field must be provided for update")

        dish = self.get_dish(dish_id)
        restaurant_id = dish.restaurant_id

        if "price" in changes:
            changes["price"] = positive_number(changes["price"], "price", INVALID_PRICE)
        if "imgurl" in changes:
            changes["imgurl"] = optional_url(changes["imgurl"]) or ""
        if "category_id" in changes:
            category = self._get_category(changes["category_id"])
            if category.restaurant_id != restaurant_id:
                raise ForbiddenError("Category does not belong to the same restaurant as the dish")
        if "name" in changes:
            if is_missing(changes["name"]):
                raise ValidationError("Dish name cannot be empty")
            if self._name_taken(restaurant_id, changes["name"], exclude_id=dish.id):
                raise ConflictError(DUPLICATE_NAME)

        try:
            for key, value in changes.items():
                setattr(dish, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.expire(dish)
        return self.get_dish(dish.id)

    def delete_dish(self, dish_id: int) -> None:
        dish = self.get_dish(dish_id)
        if self.db.query(OrderItem.id).filter(OrderItem.dish_id == dish.id).first() is not None:
            raise ConflictError("Cannot delete dish with existing order items")
        try:
            self.db.delete(dish)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Dish {dish_id} deleted")
