"""Login routes for admins, restaurants and customers."""

import logging

from fastapi import APIRouter, Request

from dineops.core.rate_limit import LOGIN_RATE, limiter
from dineops.db.session import DbSession
from dineops.schemas.admin import AdminResponse
from dineops.schemas.auth import (
    AdminLoginResponse,
    LoginRequest,
    RestaurantLoginResponse,
    UserLoginResponse,
)
from dineops.schemas.restaurant import RestaurantBrief
from dineops.schemas.user import UserResponse
from dineops.services.admin_service import AdminService
from dineops.services.restaurant_service import RestaurantService
from dineops.services.user_service import UserService

logger = logging.getLogger("auth")

router = APIRouter()


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/admin/login", response_model=AdminLoginResponse)
@limiter.limit(LOGIN_RATE)
def admin_login(request: Request, login_request: LoginRequest, db: DbSession):
    """Authenticate an admin and return a bearer token."""
    admin, token = AdminService(db).login(login_request.email, login_request.password)
    logger.info(f"Admin {admin.id} authenticated from IP: {_client_ip(request)}")
    return AdminLoginResponse(admin=AdminResponse.model_validate(admin), token=token)


@router.post("/restaurant/login", response_model=RestaurantLoginResponse)
@limiter.limit(LOGIN_RATE)
def restaurant_login(request: Request, login_request: LoginRequest, db: DbSession):
    """Authenticate a restaurant and return a bearer token."""
    restaurant, token = RestaurantService(db).login(login_request.email, login_request.password)
    logger.info(f"Restaurant {restaurant.id} authenticated from IP: {_client_ip(request)}")
    return RestaurantLoginResponse(token=token, restaurant=RestaurantBrief.model_validate(restaurant))


@router.post("/users/login", response_model=UserLoginResponse)
@limiter.limit(LOGIN_RATE)
def user_login(request: Request, login_request: LoginRequest, db: DbSession):
    """Authenticate a customer and return a bearer token."""
    user, token = UserService(db).login(login_request.email, login_request.password)
    logger.info(f"User {user.id} authenticated from IP: {_client_ip(request)}")
    return UserLoginResponse(user=UserResponse.model_validate(user), token=token)
