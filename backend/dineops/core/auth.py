"""Principals, bearer-token issue/verify, and FastAPI auth dependencies."""

from enum import Enum
from typing import Annotated, Optional

from fastapi import Depends, Request

from dineops.core.exceptions import ForbiddenError, UnauthorizedError
from dineops.core.security import create_access_token, decode_access_token


class PrincipalRole(str, Enum):
    """Who a token was issued to."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    RESTAURANT = "restaurant"
    USER = "user"


ADMIN_ROLES = {PrincipalRole.ADMIN, PrincipalRole.SUPER_ADMIN}


class Principal:
    """Verified identity resolved from a bearer token.

    Attributes:
        id: Database ID of the admin, restaurant or user.
        email: Login email.
        role: One of PrincipalRole.
        name: Display name (defaults to email prefix).
    """

    def __init__(self, id: int, email: str, role: PrincipalRole, name: str = ""):
        self.id = id
        self.email = email
        self.role = role
        self.name = name or email.split("@")[0]

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    def __repr__(self) -> str:
        return f"Principal(id={self.id}, role={self.role.value})"


def issue_token(principal: Principal) -> str:
    """Sign a bearer token for the principal."""
    return create_access_token(
        data={
            "sub": str(principal.id),
            "email": principal.email,
            "role": principal.role.value,
            "name": principal.name,
        }
    )


def verify_token(token: str) -> Principal:
    """Resolve a principal from a token or raise UnauthorizedError."""
    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedError("Invalid or expired token")

    sub = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")
    if sub is None or email is None or role is None:
        raise UnauthorizedError("Invalid token payload")

    try:
        principal_role = PrincipalRole(role)
        principal_id = int(sub)
    except ValueError:
        raise UnauthorizedError("Invalid token payload")

    return Principal(id=principal_id, email=email, role=principal_role, name=payload.get("name", ""))


def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


async def get_current_principal(request: Request) -> Principal:
    """Resolve the caller from the Authorization header."""
    token = _bearer_token(request)
    if token is None:
        raise UnauthorizedError("Missing or invalid Authorization header")
    return verify_token(token)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def require_admin(principal: CurrentPrincipal) -> Principal:
    """Dependency that only lets admin principals through."""
    if not principal.is_admin:
        raise ForbiddenError("Admin privileges required")
    return principal


RequireAdmin = Annotated[Principal, Depends(require_admin)]
