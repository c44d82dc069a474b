"""Admin account service."""

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from dineops.core.auth import Principal, PrincipalRole, issue_token
from dineops.core.exceptions import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from dineops.core.security import get_password_hash, verify_password
from dineops.core.validators import choice, first_missing, is_missing, valid_email
from dineops.models.user import Admin, AdminRole

logger = logging.getLogger("auth")
log = logging.getLogger(__name__)

INVALID_ROLE = f"role must be one of {', '.join(role.value for role in AdminRole)}"


class AdminService:
    def __init__(self, db: Session):
        self.db = db

    def get_admin(self, admin_id: int) -> Admin:
        admin = self.db.get(Admin, admin_id)
        if not admin:
            raise NotFoundError("Admin not found")
        return admin

    def list_admins(self) -> List[Admin]:
        return self.db.query(Admin).order_by(Admin.id).all()

    def create_admin(self, data: Dict[str, Any]) -> Admin:
        if first_missing(data, ("name", "email", "password")):
            raise ValidationError("name, email, and password are required")
        valid_email(data["email"])
        role = AdminRole.ADMIN
        if not is_missing(data.get("role")):
            role = choice(data["role"], AdminRole, INVALID_ROLE)

        if self.db.query(Admin.id).filter(Admin.email == data["email"]).first() is not None:
            raise ConflictError("Admin with this email already exists")

        admin = Admin(
            name=data["name"],
            email=data["email"],
            password_hash=get_password_hash(data["password"]),
            role=role,
        )
        try:
            self.db.add(admin)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(admin)
        log.info(f"Admin {admin.id} created with role {role.value}")
        return admin

    def update_admin(self, admin_id: int, data: Dict[str, Any]) -> Admin:
        admin = self.get_admin(admin_id)

        changes = {
            key: data[key]
            for key in ("name", "email", "password", "role")
            if not is_missing(data.get(key))
        }
        if not changes:
            raise ValidationError("At least one field must be provided for update")

        if "role" in changes:
            changes["role"] = choice(changes["role"], AdminRole, INVALID_ROLE)
        if "email" in changes:
            valid_email(changes["email"])
            taken = (
                self.db.query(Admin.id)
                .filter(Admin.email == changes["email"], Admin.id != admin.id)
                .first()
            )
            if taken is not None:
                raise ConflictError("Email is already in use")
        if "password" in changes:
            changes["password_hash"] = get_password_hash(changes.pop("password"))

        try:
            for key, value in changes.items():
                setattr(admin, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(admin)
        return admin

    def delete_admin(self, admin_id: int) -> None:
        admin = self.get_admin(admin_id)
        try:
            self.db.delete(admin)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        log.info(f"Admin {admin_id} deleted")

    def login(self, email: Any, password: Any) -> Tuple[Admin, str]:
        if is_missing(email) or is_missing(password):
            raise ValidationError("email and password are required")

        admin = self.db.query(Admin).filter(Admin.email == email).first()
        if not admin or not verify_password(password, admin.password_hash):
            logger.warning(f"Failed admin login attempt for: {email}")
            raise UnauthorizedError("Invalid email or password")

        token = issue_token(
            Principal(
                id=admin.id,
                email=admin.email,
                role=PrincipalRole(admin.role.value),
                name=admin.name,
            )
        )
        logger.info(f"Admin login: {admin.email} ({admin.role.value})")
        return admin, token
