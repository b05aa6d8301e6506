# location_tracker/services/users.py
import logging

from ..db.models import User
from ..db.session import Database
from ..repositories.users import SqlUserDirectory
from ..schemas.users import UserRequest, UserResponse
from .validation import require

logger = logging.getLogger(__name__)


def to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        external_uid=user.external_uid,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserService:
    def __init__(self, db: Database):
        self.db = db

    def create_or_update(self, request: UserRequest) -> UserResponse:
        uid = require(request.external_uid, "externalUid")
        logger.debug("Procesando usuario %s", uid)
        with self.db.session_scope() as session:
            user = SqlUserDirectory(session).upsert(uid, str(request.email))
            response = to_response(user)
        logger.debug("Usuario guardado con id=%s externalUid=%s", response.id, response.external_uid)
        return response

    def get_user(self, external_uid: str) -> UserResponse:
        with self.db.session_scope() as session:
            return to_response(SqlUserDirectory(session).get(require(external_uid, "externalUid")))

    def list_users(self) -> list[UserResponse]:
        logger.debug("Recuperando lista completa de usuarios")
        with self.db.session_scope() as session:
            return [to_response(u) for u in SqlUserDirectory(session).list_all()]
