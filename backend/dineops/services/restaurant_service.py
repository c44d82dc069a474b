"""Restaurant service - registration, profile, status and scoped listings."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from dineops.core.auth import Principal, PrincipalRole, issue_token
from dineops.core.exceptions import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from dineops.core.security import get_password_hash, verify_password
from dineops.core.validators import (
    choice,
    first_missing,
    is_missing,
    number_in_range,
    positive_int,
    valid_email,
)
from dineops.models.booking import Booking
from dineops.models.order import Order
from dineops.models.restaurant import (
    Category,
    ParkingSlot,
    Restaurant,
    RestaurantStatus,
    Table,
)
from dineops.services.image_upload_service import BACKGROUND_FOLDER, LOGO_FOLDER, ImageUploader

logger = logging.getLogger("auth")
log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "password", "phone", "address", "latitude", "longitude")
TEXT_FIELDS = ("name", "phone", "address", "city", "cuisine", "description")


def _check_coordinates(data: Dict[str, Any]) -> None:
    if "latitude" in data:
        data["latitude"] = number_in_range(data["latitude"], -90, 90, "Invalid latitude value")
    if "longitude" in data:
        data["longitude"] = number_in_range(data["longitude"], -180, 180, "Invalid longitude value")
    if data.get("ranking") is not None:
        data["ranking"] = number_in_range(data["ranking"], 0, 5, "Ranking must be between 0.0 and 5.0")


class RestaurantService:
    """Manage restaurant accounts."""

    def __init__(self, db: Session, image_uploader: Optional[ImageUploader] = None):
        self.db = db
        self.image_uploader = image_uploader

    def get_restaurant(self, restaurant_id: int) -> Restaurant:
        restaurant = self.db.get(Restaurant, restaurant_id)
        if not restaurant:
            raise NotFoundError("Restaurant not found")
        return restaurant

    def list_restaurants(self, status: Optional[str] = None) -> List[Restaurant]:
        query = self.db.query(Restaurant)
        if not is_missing(status):
            query = query.filter(
                Restaurant.status == choice(status, RestaurantStatus, "Status must be ACTIVE or DE_ACTIVE")
            )
        return query.order_by(Restaurant.id).all()

    def get_full(self, restaurant_id: int) -> Restaurant:
        """Restaurant with tables and categories (each with dishes) loaded."""
        restaurant = (
            self.db.query(Restaurant)
            .options(
                selectinload(Restaurant.tables),
                selectinload(Restaurant.categories).selectinload(Category.dishes),
            )
            .filter(Restaurant.id == restaurant_id)
            .first()
        )
        if not restaurant:
            raise NotFoundError("Restaurant not found")
        return restaurant

    def list_categories(self, restaurant_id: int) -> List[Category]:
        self.get_restaurant(restaurant_id)
        return (
            self.db.query(Category)
            .filter(Category.restaurant_id == restaurant_id)
            .order_by(Category.id)
            .all()
        )

    def list_menu(self, restaurant_id: int) -> List[Category]:
        """Categories with their dishes."""
        self.get_restaurant(restaurant_id)
        return (
            self.db.query(Category)
            .options(selectinload(Category.dishes))
            .filter(Category.restaurant_id == restaurant_id)
            .order_by(Category.id)
            .all()
        )

    def list_tables(self, restaurant_id: int) -> List[Table]:
        self.get_restaurant(restaurant_id)
        return (
            self.db.query(Table)
            .filter(Table.restaurant_id == restaurant_id)
            .order_by(Table.id)
            .all()
        )

    def list_parking_slots(self, restaurant_id: int) -> List[ParkingSlot]:
        self.get_restaurant(restaurant_id)
        return (
            self.db.query(ParkingSlot)
            .filter(ParkingSlot.restaurant_id == restaurant_id)
            .order_by(ParkingSlot.id)
            .all()
        )

    def _email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Restaurant.id).filter(Restaurant.email == email)
        if exclude_id is not None:
            query = query.filter(Restaurant.id != exclude_id)
        return query.first() is not None

    def create_restaurant(self, data: Dict[str, Any]) -> Restaurant:
        """Register a restaurant. New restaurants start DE_ACTIVE."""
        if first_missing(data, REQUIRED_FIELDS):
            raise ValidationError(
                "Name, email, password, phone, address, latitude, and longitude are required"
            )
        valid_email(data["email"])
        _check_coordinates(data)
        if data.get("capacity") is not None:
            data["capacity"] = positive_int(data["capacity"], "capacity")

        if self._email_taken(data["email"]):
            raise ConflictError("Restaurant with this email already exists")

        restaurant = Restaurant(
            name=data["name"],
            email=data["email"],
            password_hash=get_password_hash(data["password"]),
            phone=data["phone"],
            address=data["address"],
            city=data.get("city") or "",
            cuisine=data.get("cuisine") or "",
            description=data.get("description") or "",
            logo=data.get("logo") or "",
            bg_image=data.get("bg_image") or "",
            latitude=data["latitude"],
            longitude=data["longitude"],
            ranking=data.get("ranking") or 0.0,
            capacity=data.get("capacity"),
            status=RestaurantStatus.DE_ACTIVE,
        )
        try:
            self.db.add(restaurant)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(restaurant)
        log.info(f"Restaurant {restaurant.id} registered ({restaurant.email})")
        return restaurant

    def update_restaurant(self, restaurant_id: int, data: Dict[str, Any]) -> Restaurant:
        """Partial profile update. Status changes go through update_status."""
        changes = {key: value for key, value in data.items() if not is_missing(value)}
        if not changes:
            raise ValidationError("At least one field must be provided for update")

        restaurant = self.get_restaurant(restaurant_id)

        if "email" in changes:
            valid_email(changes["email"])
            if self._email_taken(changes["email"], exclude_id=restaurant.id):
                raise ConflictError("Email already exists")
        _check_coordinates(changes)
        if "capacity" in changes:
            changes["capacity"] = positive_int(changes["capacity"], "capacity")

        if "password" in changes:
            changes["password_hash"] = get_password_hash(changes.pop("password"))
        if "logo" in changes:
            changes["logo"] = self._save_image(changes["logo"], LOGO_FOLDER)
        if "bg_image" in changes:
            changes["bg_image"] = self._save_image(changes["bg_image"], BACKGROUND_FOLDER)

        try:
            for key, value in changes.items():
                setattr(restaurant, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(restaurant)
        return restaurant

    def _save_image(self, image: str, folder: str) -> str:
        if self.image_uploader is None:
            raise ValidationError("Image upload is not configured; provide an http(s) URL")
        return self.image_uploader.save_image(image, folder)

    def update_status(self, restaurant_id: int, status: Any) -> Restaurant:
        """Activate or deactivate a restaurant."""
        if is_missing(status):
            raise ValidationError("Status is required")
        new_status = choice(status, RestaurantStatus, "Status must be ACTIVE or DE_ACTIVE")
        restaurant = self.get_restaurant(restaurant_id)
        try:
            restaurant.status = new_status
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(restaurant)
        log.info(f"Restaurant {restaurant.id} status set to {new_status.value}")
        return restaurant

    def delete_restaurant(self, restaurant_id: int) -> None:
        """Delete a restaurant that owns nothing."""
        restaurant = self.get_restaurant(restaurant_id)

        dependents = (
            (Table, Table.restaurant_id),
            (Category, Category.restaurant_id),
            (ParkingSlot, ParkingSlot.restaurant_id),
            (Booking, Booking.restaurant_id),
            (Order, Order.restaurant_id),
        )
        for model, column in dependents:
            if self.db.query(model.id).filter(column == restaurant.id).first() is not None:
                raise ConflictError(
                    "Cannot delete restaurant with existing tables, categories, parking slots, bookings or orders"
                )

        try:
            self.db.delete(restaurant)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        log.info(f"Restaurant {restaurant_id} deleted")

    def login(self, email: Any, password: Any) -> Tuple[Restaurant, str]:
        """Check credentials and issue a restaurant token."""
        if is_missing(email) or is_missing(password):
            raise ValidationError("Email and password are required")
        valid_email(email)

        restaurant = self.db.query(Restaurant).filter(Restaurant.email == email).first()
        if not restaurant or not verify_password(password, restaurant.password_hash):
            logger.warning(f"Failed restaurant login attempt for: {email}")
            raise UnauthorizedError("Invalid email or password")

        token = issue_token(
            Principal(
                id=restaurant.id,
                email=restaurant.email,
                role=PrincipalRole.RESTAURANT,
                name=restaurant.name,
            )
        )
        logger.info(f"Restaurant login: {restaurant.email}")
        return restaurant, token
