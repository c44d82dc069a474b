"""Order routes."""

from fastapi import APIRouter, Query, status

from dineops.core.responses import envelope
from dineops.db.session import DbSession
from dineops.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate
from dineops.services.order_service import OrderService

router = APIRouter()


def _orders_for(restaurant_id: int, db) -> dict:
    orders = OrderService(db).list_orders(restaurant_id)
    return envelope(
        "Orders fetched successfully",
        [OrderResponse.model_validate(o) for o in orders],
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(request: OrderCreate, db: DbSession):
    """Place an order with its items. Status starts PENDING."""
    order = OrderService(db).create_order(request.model_dump(exclude_unset=True))
    return envelope("Order created successfully", OrderResponse.model_validate(order))


@router.get("")
def list_orders(db: DbSession, restaurant_id: int = Query(...)):
    return _orders_for(restaurant_id, db)


@router.get("/{restaurant_id}")
def list_restaurant_orders(restaurant_id: int, db: DbSession):
    """Orders of one restaurant."""
    return _orders_for(restaurant_id, db)


@router.put("/{order_id}")
def update_order_status(order_id: int, request: OrderStatusUpdate, db: DbSession):
    """Change the status of an order."""
    order = OrderService(db).update_order_status(order_id, request.status)
    return envelope("Order updated successfully", OrderResponse.model_validate(order))
