"""API routes."""

from fastapi import APIRouter

from dineops.api.routes import (
    admin,
    auth,
    bookings,
    categories,
    menus,
    orders,
    parking_slots,
    restaurants,
    tables,
    users,
)

api_router = APIRouter()

# Logins first: /admin/login and /users/login sit beside the /{id} routes
api_router.include_router(auth.router, tags=["auth"])

api_router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
api_router.include_router(tables.router, prefix="/tables", tags=["tables"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(menus.router, prefix="/menus", tags=["menus", "dishes"])
api_router.include_router(parking_slots.router, prefix="/parking_slots", tags=["parking"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
