"""Admin account routes.

Creating an admin is open so the first account can be bootstrapped; every
other route needs an admin bearer token.
"""

import logging
from typing import List

from fastapi import APIRouter, status

from dineops.core.auth import RequireAdmin
from dineops.db.session import DbSession
from dineops.schemas.admin import AdminCreate, AdminResponse, AdminUpdate
from dineops.services.admin_service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
def create_admin(request: AdminCreate, db: DbSession):
    return AdminService(db).create_admin(request.model_dump(exclude_unset=True))


@router.get("", response_model=List[AdminResponse])
def list_admins(db: DbSession, admin: RequireAdmin):
    return AdminService(db).list_admins()


@router.get("/{admin_id}", response_model=AdminResponse)
def get_admin(admin_id: int, db: DbSession, admin: RequireAdmin):
    return AdminService(db).get_admin(admin_id)


@router.put("/{admin_id}", response_model=AdminResponse)
def update_admin(admin_id: int, request: AdminUpdate, db: DbSession, admin: RequireAdmin):
    updated = AdminService(db).update_admin(admin_id, request.model_dump(exclude_unset=True))
    logger.info(f"Admin {admin_id} updated by admin {admin.id}")
    return updated


@router.delete("/{admin_id}")
def delete_admin(admin_id: int, db: DbSession, admin: RequireAdmin):
    AdminService(db).delete_admin(admin_id)
    logger.info(f"Admin {admin_id} deleted by admin {admin.id}")
    return {"message": "Admin deleted successfully"}
