"""Authentication schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from dineops.schemas.admin import AdminResponse
from dineops.schemas.restaurant import RestaurantBrief
from dineops.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request body."""

    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, max_length=128)


class RestaurantLoginResponse(BaseModel):
    token: str
    restaurant: RestaurantBrief


class AdminLoginResponse(BaseModel):
    admin: AdminResponse
    token: str


class UserLoginResponse(BaseModel):
    user: UserResponse
    token: str
