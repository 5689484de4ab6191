# todoapp/handlers/users.py
import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from todoapp.errors import ConflictError, UnauthorizedError
from todoapp.mediator import RequestHandler, handles
from todoapp.models import User, RoleType
from todoapp.schemas import UserOut, UserProfile
from todoapp.utils.clock import utc_now
from todoapp.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

# Same message for unknown user and wrong password
INVALID_CREDENTIALS = "Invalid username or password."


@dataclass
class CreateUserRequest:
    first_name: str
    last_name: str
    username: str
    password: str
    role: RoleType = RoleType.USER
    created_by: int = 0


@dataclass
class LoginUserRequest:
    username: str
    password: str


@handles(CreateUserRequest)
class CreateUserHandler(RequestHandler):

    def handle(self, request: CreateUserRequest) -> UserOut:
        existing_user = self.db.query(User).filter(User.username == request.username).first()
        if existing_user:
            raise ConflictError(f"Username '{request.username}' is already taken.")

        user = User(
            role=request.role,
            first_name=request.first_name,
            last_name=request.last_name,
            username=request.username,
            password_hash=hash_password(request.password),
            created_by=request.created_by,
            created_date=utc_now(),
        )

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent insert of the same username
            self.db.rollback()
            raise ConflictError(f"Username '{request.username}' is already taken.")
        self.db.refresh(user)

        logger.info("Created user %s (ID: %s)", user.username, user.user_id)
        return UserOut.model_validate(user)


@handles(LoginUserRequest)
class LoginUserHandler(RequestHandler):
    """Checks credentials and returns the user's profile; no session or token is issued"""

    def handle(self, request: LoginUserRequest) -> UserProfile:
        user = self.db.query(User).filter(User.username == request.username).first()
        if not user or not verify_password(request.password, user.password_hash):
            logger.info("Failed login attempt for username %r", request.username)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return UserProfile.model_validate(user)
