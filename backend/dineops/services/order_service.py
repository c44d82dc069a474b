"""Order ingestion service.

Validates an order and every line item against the catalog before anything
is written, then inserts the order and its items in one transaction. A dish
from another restaurant rejects the whole order.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session, joinedload

from dineops.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from dineops.core.validators import choice, is_missing, positive_int, positive_number
from dineops.models.order import Order, OrderItem, OrderStatus
from dineops.models.restaurant import Dish, Restaurant
from dineops.models.user import User

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "restaurant_id", "order_items", "total_amount", "order_type")
ITEM_FIELDS = ("dish_id", "unit_rate", "quantity", "price")
OPTIONAL_TEXT_FIELDS = ("order_date", "order_time", "contact_info", "table_no", "trnx_id", "trnx_receipt")

INVALID_STATUS = "Status must be PENDING, CONFIRMED, CANCELLED, or COMPLETED"


class OrderService:
    """Create orders and move them through their status values."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Order).options(
            joinedload(Order.user),
            joinedload(Order.restaurant),
            joinedload(Order.order_items).joinedload(OrderItem.dish),
        )

    def get_order(self, order_id: int) -> Order:
        order = self._query().filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order not found")
        return order

    def list_orders(self, restaurant_id: int) -> List[Order]:
        """All orders of a restaurant, newest first."""
        if not self.db.get(Restaurant, restaurant_id):
            raise NotFoundError("Restaurant not found")
        return (
            self._query()
            .filter(Order.restaurant_id == restaurant_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def create_order(self, data: Dict[str, Any]) -> Order:
        """Validate and persist an order with its items. Status starts PENDING."""
        for field in REQUIRED_FIELDS:
            if is_missing(data.get(field)):
                if field == "order_items":
                    raise ValidationError(f"{field} is required and must be a non-empty array")
                raise ValidationError(f"{field} is required")

        total_amount = positive_number(data["total_amount"], "total_amount")

        if not self.db.get(User, data["user_id"]):
            raise NotFoundError("User not found")
        if not self.db.get(Restaurant, data["restaurant_id"]):
            raise NotFoundError("Restaurant not found")

        items = [self._validate_item(raw, data["restaurant_id"]) for raw in data["order_items"]]

        order = Order(
            user_id=data["user_id"],
            restaurant_id=data["restaurant_id"],
            total_amount=total_amount,
            order_type=data["order_type"],
            status=OrderStatus.PENDING,
            **{field: data.get(field) or "" for field in OPTIONAL_TEXT_FIELDS},
        )
        try:
            self.db.add(order)
            self.db.flush()
            for item in items:
                self.db.add(OrderItem(order_id=order.id, **item))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Order {order.id} created for restaurant {order.restaurant_id} with {len(items)} item(s)"
        )
        return self.get_order(order.id)

    def _validate_item(self, raw: Any, restaurant_id: int) -> Dict[str, Any]:
        if not isinstance(raw, dict) or any(is_missing(raw.get(field)) for field in ITEM_FIELDS):
            raise ValidationError("Each order item must include dish_id, unit_rate, quantity, and price")

        unit_rate = positive_number(raw["unit_rate"], "unit_rate")
        quantity = positive_int(raw["quantity"], "quantity")
        price = positive_number(raw["price"], "price")
        dish_id = positive_int(raw["dish_id"], "dish_id")

        dish = self.db.get(Dish, dish_id)
        if not dish:
            raise NotFoundError(f"Dish not found: {dish_id}")
        if dish.restaurant_id != restaurant_id:
            raise ForbiddenError(f"Dish {dish_id} does not belong to the specified restaurant")

        return {"dish_id": dish_id, "unit_rate": unit_rate, "quantity": quantity, "price": price}

    def update_order_status(self, order_id: int, status: Any) -> Order:
        """Change only the status of an order."""
        if is_missing(status):
            raise ValidationError("Status is required")
        new_status = choice(status, OrderStatus, INVALID_STATUS)

        order = self.get_order(order_id)
        try:
            order.status = new_status
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Order {order.id} status set to {new_status.value}")
        return order
