"""Customer account routes."""

from typing import Optional

from fastapi import APIRouter, status

from dineops.db.session import DbSession
from dineops.schemas.user import UserCreate, UserResponse, UserSignupResponse, UserUpdate
from dineops.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserSignupResponse, status_code=status.HTTP_201_CREATED)
def sign_up(request: UserCreate, db: DbSession):
    user = UserService(db).create_user(request.model_dump(exclude_unset=True))
    return {"user": UserResponse.model_validate(user), "status": "success"}


@router.get("")
def list_users(db: DbSession, id: Optional[int] = None, email: Optional[str] = None):
    """All users, or one user when ?id= or ?email= is given."""
    service = UserService(db)
    if id is not None or email:
        user = service.find_user(user_id=id, email=email)
        return {"user": UserResponse.model_validate(user)}
    return {"users": [UserResponse.model_validate(u) for u in service.list_users()]}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: DbSession):
    return UserService(db).get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, request: UserUpdate, db: DbSession):
    return UserService(db).update_user(user_id, request.model_dump(exclude_unset=True))


@router.delete("/{user_id}")
def delete_user(user_id: int, db: DbSession):
    UserService(db).delete_user(user_id)
    return {"message": "User deleted successfully"}
