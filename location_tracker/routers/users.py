# location_tracker/routers/users.py
import logging

from fastapi import APIRouter, Depends, status

from ..db.session import Database, get_database
from ..schemas.users import UserRequest, UserResponse
from ..services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_service(db: Database = Depends(get_database)) -> UserService:
    return UserService(db)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_or_update(q: UserRequest, service: UserService = Depends(get_user_service)):
    """Registra o actualiza un usuario por su externalUid."""
    return service.create_or_update(q)


@router.get("", response_model=list[UserResponse])
def list_users(service: UserService = Depends(get_user_service)):
    return service.list_users()


@router.get("/{external_uid}", response_model=UserResponse)
def get_user(external_uid: str, service: UserService = Depends(get_user_service)):
    return service.get_user(external_uid)
