"""Customer account service."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from dineops.core.auth import Principal, PrincipalRole, issue_token
from dineops.core.exceptions import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from dineops.core.security import get_password_hash, verify_password
from dineops.core.validators import first_missing, is_missing, valid_email
from dineops.models.booking import Booking
from dineops.models.order import Order
from dineops.models.user import User

logger = logging.getLogger("auth")
log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
MAX_TEXT_LENGTH = 255
MAX_PHONE_LENGTH = 50
PROFILE_FIELDS = ("name", "phone", "city", "address")


def _check_lengths(data: Dict[str, Any]) -> None:
    too_long = any(
        isinstance(data.get(field), str) and len(data[field]) > MAX_TEXT_LENGTH
        for field in ("name", "city", "address")
    )
    if too_long or (isinstance(data.get("phone"), str) and len(data["phone"]) > MAX_PHONE_LENGTH):
        raise ValidationError("Input fields exceed maximum length")


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def find_user(self, user_id: Optional[int] = None, email: Optional[str] = None) -> User:
        """Look a user up by exactly one of id or email."""
        if user_id is not None and not is_missing(email):
            raise ValidationError("Provide either id or email, not both")
        if user_id is not None:
            return self.get_user(user_id)
        user = self.db.query(User).filter(User.email == email).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(self, data: Dict[str, Any]) -> User:
        """Sign a customer up."""
        if first_missing(data, ("email", "password", "name", "city", "address")):
            raise ValidationError("Email, password, name, city, and address are required")
        valid_email(data["email"])
        if len(data["password"]) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 8 characters long")
        _check_lengths(data)

        if self.db.query(User.id).filter(User.email == data["email"]).first() is not None:
            raise ConflictError("User with this email already exists")

        user = User(
            email=data["email"],
            password_hash=get_password_hash(data["password"]),
            name=data["name"],
            phone=data.get("phone") or None,
            city=data["city"],
            address=data["address"],
        )
        try:
            self.db.add(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        log.info(f"User {user.id} signed up")
        return user

    def update_user(self, user_id: int, data: Dict[str, Any]) -> User:
        changes = {key: data[key] for key in PROFILE_FIELDS if not is_missing(data.get(key))}
        if not changes:
            raise ValidationError("At least one field (name, phone, city, address) must be provided")
        _check_lengths(changes)

        user = self.get_user(user_id)
        try:
            for key, value in changes.items():
                setattr(user, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int) -> None:
        user = self.get_user(user_id)
        has_history = (
            self.db.query(Order.id).filter(Order.user_id == user.id).first() is not None
            or self.db.query(Booking.id).filter(Booking.user_id == user.id).first() is not None
        )
        if has_history:
            raise ConflictError("Cannot delete user with existing orders or bookings")
        try:
            self.db.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        log.info(f"User {user_id} deleted")

    def login(self, email: Any, password: Any) -> Tuple[User, str]:
        if is_missing(email) or is_missing(password):
            raise ValidationError("Email and password are required")
        valid_email(email)

        user = self.db.query(User).filter(User.email == email).first()
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed user login attempt for: {email}")
            raise UnauthorizedError("Invalid email or password")

        token = issue_token(
            Principal(id=user.id, email=user.email, role=PrincipalRole.USER, name=user.name)
        )
        logger.info(f"User login: {user.email}")
        return user, token
